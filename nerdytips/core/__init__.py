"""
Core Package for NerdyTips Backend.

Configuration, logging, authentication primitives, domain exceptions and middleware.
"""

"""
Database Package for NerdyTips Backend.

This package handles all database-related operations including:
- Model definitions using SQLAlchemy ORM
- Engine ownership and per-request session management
"""

"""
Schemas Package for NerdyTips Backend.

This package contains Pydantic models used for:
- Request validation
- Response serialization (camelCase on the wire)
"""

"""
SQLAlchemy Base Definition Module.

This module defines the SQLAlchemy declarative base that all models inherit from.
Every table the application owns is registered on this base's metadata, which is
what nerdytips.db.session uses to create the schema on startup.
"""

from sqlalchemy.orm import declarative_base, registry

# Create a new SQLAlchemy mapper registry
mapper_registry = registry()

# Create the base class for declarative class definitions
Base = declarative_base(metadata=mapper_registry.metadata)

# backend/mizan/db/__init__.py

"""
Database Module

Snapshot schemas and domain enums. Storage itself belongs to the external
document database; nothing here reads or writes it.
"""

from mizan.db import models, schemas

__all__ = [
    'models',
    'schemas'
]

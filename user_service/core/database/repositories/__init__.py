"""
Database repository layer using SQLModel.

Each module provides async data access operations for its corresponding
SQLModel entity.

Modules:
- base: BaseRepository interface and QueryBuilder utilities
- users: User account repository operations
"""

from . import base, users

__all__ = ["base", "users"]

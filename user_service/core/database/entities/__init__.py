"""
Database entity models.

Each module represents a single database table and its related logic.

Modules:
- users: User accounts and roles
"""

from . import users

__all__ = ["users"]

"""
Database schema models for API requests and responses.

This package contains Pydantic-based schema models for API serialization/deserialization.
These schemas are separate from entity models to allow independent evolution of API contracts
and database representations.
"""

from . import users

__all__ = ["users"]

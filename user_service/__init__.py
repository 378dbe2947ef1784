"""user-service.

This package contains a small account management service: persisted users
with roles, a REST API to manage them, and HTTP Basic authentication against
the stored accounts.

High-level architecture
-----------------------

- ``user_service.core``:

  - Logging configuration, Logfire monitoring helpers and domain errors.
  - The database layer: SQLModel entities, request/response schemas, the
    DTO-to-entity mapper and async repositories.

- ``user_service.server``:

  - Settings, password hashing and the authentication dependencies.
  - The user service (business rules such as login/email uniqueness).
  - FastAPI routers for ``/api/user`` and the ``/actuator`` endpoints.

Schema changes are shipped as Alembic revisions under ``alembic/``.
"""

__version__ = "1.0.0"

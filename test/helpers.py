"""Shared helpers for tests that talk to the HTTP API."""

import base64

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-password"
USER_USERNAME = "user"
USER_PASSWORD = "user-password"


def basic_auth_header(username: str, password: str) -> dict:
    """Build an HTTP Basic ``Authorization`` header."""
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}

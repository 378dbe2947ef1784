"""Server configuration, constants and password hashing."""

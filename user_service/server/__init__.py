"""
user-service Server Package.

This package contains the web server implementation for user-service.
It includes the API definition, configuration, security and the service layer.

Subpackages:
    api: FastAPI route definitions and authentication dependencies.
    core: Configuration, constants and password hashing.
    exception_handlers: Mapping of domain errors to HTTP responses.
    middleware: Request tracing middleware.
    services: Business logic for user accounts.
"""

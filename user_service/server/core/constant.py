"""Static values shared by the server modules."""

from user_service import __version__

PROJECT_NAME = "user-service"
API_VERSION = __version__
SCHEMA_VERSION = "v1"

USER_API_PREFIX = "/api/user"
ACTUATOR_PREFIX = "/actuator"

"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class MySQLConfig(BaseModel):
    """MySQL database configuration."""

    database: str = Field(default="user_service", alias="MYSQL_DATABASE", description="MySQL database name")
    user: str = Field(default="user_service", alias="MYSQL_USER", description="MySQL database user")
    password: SecretStr = Field(
        default=SecretStr("changeme"), alias="MYSQL_PASSWORD", description="MySQL database password"
    )
    host: str = Field(default="mysql", alias="MYSQL_HOST", description="MySQL database host address")
    port: int = Field(default=3306, alias="MYSQL_PORT", description="MySQL database port number")

    model_config = {"populate_by_name": True}

    def to_url(self) -> str:
        """Build an async SQLAlchemy URL for this MySQL server."""
        return (
            f"mysql+aiomysql://{self.user}:{self.password.get_secret_value()}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


class BootstrapAdminConfig(BaseModel):
    """Administrator account created on startup when it does not exist yet."""

    username: Optional[str] = Field(
        default=None, alias="BOOTSTRAP_ADMIN_USERNAME", description="Username of the bootstrap administrator"
    )
    email: Optional[str] = Field(
        default=None, alias="BOOTSTRAP_ADMIN_EMAIL", description="Email of the bootstrap administrator"
    )
    password: Optional[SecretStr] = Field(
        default=None, alias="BOOTSTRAP_ADMIN_PASSWORD", description="Password of the bootstrap administrator"
    )

    model_config = {"populate_by_name": True}

    @property
    def enabled(self) -> bool:
        """Whether both a username and a password were configured."""
        return bool(self.username) and self.password is not None and bool(self.password.get_secret_value())


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="user-service host address to bind to",
        alias="USER_SERVICE_SERVER_HOST",
    )
    server_port: int = Field(
        default=8080,
        description="user-service port number",
        alias="USER_SERVICE_SERVER_PORT",
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="USER_SERVICE_LOG_LEVEL",
    )
    log_format: str = Field(default="detailed", description="Log format (simple, detailed, json)", alias="LOG_FORMAT")
    log_file_dir: str = Field(default="logs", description="Directory for the log file", alias="LOG_FILE_DIR")
    enable_file_logging: bool = Field(
        default=False, description="Write logs to LOG_FILE_DIR as well", alias="ENABLE_FILE_LOGGING"
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: Optional[str] = Field(
        default=None,
        description="Database connection URL; built from the MYSQL_* variables when unset",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Security Configuration
    # =====================================================================
    bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt work factor used when hashing passwords",
        alias="BCRYPT_ROUNDS",
    )

    # Flat fields backing the grouped models below
    mysql_database: str = Field(default="user_service", alias="MYSQL_DATABASE")
    mysql_user: str = Field(default="user_service", alias="MYSQL_USER")
    mysql_password: SecretStr = Field(default=SecretStr("changeme"), alias="MYSQL_PASSWORD")
    mysql_host: str = Field(default="mysql", alias="MYSQL_HOST")
    mysql_port: int = Field(default=3306, alias="MYSQL_PORT")

    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(default=["*"], alias="CORS_ALLOW_METHODS")
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    bootstrap_admin_username: Optional[str] = Field(default=None, alias="BOOTSTRAP_ADMIN_USERNAME")
    bootstrap_admin_email: Optional[str] = Field(default=None, alias="BOOTSTRAP_ADMIN_EMAIL")
    bootstrap_admin_password: Optional[SecretStr] = Field(default=None, alias="BOOTSTRAP_ADMIN_PASSWORD")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def mysql(self) -> MySQLConfig:
        """Get MySQL configuration from environment variables."""
        return MySQLConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def bootstrap_admin(self) -> BootstrapAdminConfig:
        """Get bootstrap administrator configuration from environment variables."""
        return BootstrapAdminConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def resolved_database_url(self) -> str:
        """The explicit DATABASE_URL, or a MySQL URL built from the MYSQL_* variables."""
        return self.database_url or self.mysql.to_url()


settings = Settings()

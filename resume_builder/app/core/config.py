import logging
from functools import lru_cache

from pydantic import Field, PostgresDsn, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    This class defines all configuration values used by the application,
    including database connection details, security parameters, and the
    timings used by the print export.

    Attributes:
        database_url (PostgresDsn): Database connection URL for PostgreSQL.
        secret_key (str): Secret key for signing JWT tokens.
            Must be kept secure and changed in production.
        algorithm (str): Algorithm used for JWT token encoding.
        access_token_expire_minutes (int): Duration in minutes for which access tokens remain valid.
        log_level (str): Root log level used by the management CLI and server entry points.
        export_print_delay_ms (int): Delay between the surface finishing loading and the print trigger.
        export_fallback_ms (int): Fallback timer that triggers printing if the load signal never fires.
        export_close_delay_ms (int): Delay between the print trigger and closing the surface.
        editor_overwrite_manual_edits (bool): Whether a structured change discards manual markdown edits.

    """

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )

    # Database settings
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="resume_builder", validation_alias="DB_NAME")
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: str = Field(default="", validation_alias="DB_PASSWORD")

    @computed_field
    @property
    def database_url(self) -> PostgresDsn:
        """PostgreSQL DSN assembled from the DB_* settings."""
        return PostgresDsn.build(
            scheme="postgresql",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            path=self.db_name,
        )

    # Security settings
    secret_key: str = Field(
        default="your-secret-key-change-in-production",
        validation_alias="SECRET_KEY",
    )
    algorithm: str = Field(default="HS256", validation_alias="ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=120,
        validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Print export
    export_print_delay_ms: int = Field(
        default=500,
        validation_alias="EXPORT_PRINT_DELAY_MS",
    )
    export_fallback_ms: int = Field(default=1000, validation_alias="EXPORT_FALLBACK_MS")
    export_close_delay_ms: int = Field(
        default=100,
        validation_alias="EXPORT_CLOSE_DELAY_MS",
    )

    # Editor
    editor_overwrite_manual_edits: bool = Field(
        default=True,
        validation_alias="EDITOR_OVERWRITE_MANUAL_EDITS",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Return the settings, read once per process.

    Returns:
        Settings: Values from the environment and `.env`, falling back to defaults.

    Raises:
        ValidationError: If a variable is set to a value of the wrong type.

    Notes:
        1. Tests call `get_settings.cache_clear()` to pick up a changed environment.

    """
    return Settings()

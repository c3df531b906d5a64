"""Runtime settings for the schema code generator."""

from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class ExitCodesConfig(BaseModel):
    """Configuration for exit codes."""

    success: int = 0
    error_usage: int = 1
    error_configuration: int = 2
    error_connection: int = 3
    error_extraction: int = 4
    error_generation: int = 5
    error_unexpected: int = 6


class Settings(BaseSettings):
    """Main settings class, read from ``SCHEMA_CODEGEN_*`` environment variables."""

    default_config_file: Path = Field(
        default=Path("application.json"),
        description="Config file used when a config URI only carries a fragment",
    )
    extraction_timeout: float | None = Field(
        default=None,
        description="Seconds to wait for schema extraction; unset waits forever",
    )
    swap_catalog_schema: bool = Field(
        default=True,
        description="Swap catalog and schema on every introspected name",
    )
    log_level: str = Field(default="INFO", description="Root level for the logger")

    exit_codes: ExitCodesConfig = Field(default_factory=ExitCodesConfig)

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_CODEGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("extraction_timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        """Reject non-positive timeouts."""
        if v is not None and v <= 0:
            raise ValueError("extraction_timeout must be a positive number of seconds")
        return v

    def __init__(self, **data):
        """Initialize settings, reporting invalid values as ConfigurationError."""
        try:
            super().__init__(**data)
        except ValidationError as e:
            error = e.errors()[0]
            field_name = error["loc"][0] if error["loc"] else "unknown"
            env_var_name = f"SCHEMA_CODEGEN_{str(field_name).upper()}"
            raise ConfigurationError(
                variable_name=env_var_name,
                message=f"Invalid value for {env_var_name}: {error['msg']}",
            ) from e


# At application import time, populate os.environ from .env (if present).
load_dotenv()
settings = Settings()

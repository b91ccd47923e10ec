from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_COORDINATE_BITS = (8, 16, 32, 64)
# SUCCESS is registered by utils.logger
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Global configuration settings for Axisclip.

    Utilizes Pydantic BaseSettings to fail fast and loudly on missing or
    invalid configurations. Every field can be overridden with an
    `AXISCLIP_`-prefixed environment variable.
    """

    # Signed integer width of vertex coordinates, enforced by the checked layer
    COORDINATE_BITS: int = Field(default=16)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOGGER_NAME: str = Field(default="Axisclip")

    # Load from environment variables and an optional .env file
    model_config = SettingsConfigDict(
        env_prefix="AXISCLIP_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("COORDINATE_BITS")
    @classmethod
    def check_coordinate_bits(cls, value: int) -> int:
        if value not in SUPPORTED_COORDINATE_BITS:
            raise ValueError(
                f"COORDINATE_BITS must be one of {SUPPORTED_COORDINATE_BITS}, got {value}."
            )
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in SUPPORTED_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {SUPPORTED_LOG_LEVELS}, got {value!r}.")
        return level


# Initialize central settings instance
settings = Settings()

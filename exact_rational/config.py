"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
Values are read when a Rational is constructed, so configure once at startup.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RationalConfig(BaseSettings):
    """exact_rational configuration"""

    # Digits after the decimal point used for display
    default_precision: int = Field(default=8, ge=0)

    # Logging configuration
    log_level: str = "WARNING"
    log_format: str = "json"  # json or text

    model_config = SettingsConfigDict(
        env_prefix="RATIONAL_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return value


# Global configuration instance
config = RationalConfig()


def get_config() -> RationalConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> RationalConfig:
    """Reload configuration from environment"""
    global config
    config = RationalConfig()
    return config


def configure(**overrides) -> RationalConfig:
    """
    Replace the global configuration, starting from the current values.

    Args:
        **overrides: Field values to change (e.g. default_precision=20)

    Returns:
        The new global configuration

    Raises:
        ValueError: If an override names a field that does not exist
        pydantic.ValidationError: If an override is invalid
    """
    global config
    unknown = sorted(set(overrides) - set(RationalConfig.model_fields))
    if unknown:
        raise ValueError(f"Unknown configuration field(s): {', '.join(unknown)}")
    values = config.model_dump()
    values.update(overrides)
    config = RationalConfig(**values)
    return config


def resolve_precision(precision: int = None, settings: RationalConfig = None) -> int:
    """Pick the explicit precision, else the given config's, else the global default"""
    if precision is not None:
        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
            raise ValueError(f"Precision must be a non-negative integer, got {precision!r}")
        return precision
    if settings is None:
        settings = config
    return settings.default_precision

import logging
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(RuntimeError):
    """Configuration-related error."""
    pass


# ─────────────────────────────────────────────────────────────
# Section configs
# ─────────────────────────────────────────────────────────────


class LoggingSettings(BaseModel):
    level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    format: str = (
        "%(asctime)-20s %(name)-40s "
        "%(levelname)-8s: %(message)s"
    )


class ValidationSettings(BaseModel):
    """
    Construction-time validation.

    The public builders preserve the closure invariant by construction, so
    this is off by default. Turn it on in test suites or while debugging
    (ALGRAPH_VALIDATION__CHECK_INVARIANTS=1) to have every builder verify
    its result with `consistent`.
    """

    check_invariants: bool = Field(
        False,
        description="Verify the closure invariant after every graph construction.",
    )


# ─────────────────────────────────────────────────────────────
# Top-level settings
# ─────────────────────────────────────────────────────────────


class AppSettings(BaseSettings):
    """
    Canonical configuration for algraph.

    Precedence (highest → lowest):

    1. Init kwargs (tests/overrides)
    2. Environment variables
    3. .env and .env.local
    4. Defaults in this class
    """

    model_config = SettingsConfigDict(
        env_prefix="ALGRAPH_",  # ALGRAPH_LOGGING__LEVEL, ALGRAPH_VALIDATION__CHECK_INVARIANTS, ...
        env_file=(".env", ".env.local"),  # .env.local overrides .env
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    app_name: str = "algraph"
    debug: bool = False

    logging: LoggingSettings = LoggingSettings()
    validation: ValidationSettings = ValidationSettings()  # type: ignore[call-arg]


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """
    Cached accessor for process-wide settings.

    `overrides` are init kwargs → highest precedence (handy in tests).
    """
    try:
        return AppSettings(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid algraph settings: {exc}") from exc


def configure_logging(settings: AppSettings | None = None) -> logging.Logger:
    """
    Attach a stream handler to the `algraph` package logger using the
    level and format from `settings` (defaults to `get_settings()`).

    Calling this more than once replaces the handler instead of stacking them.
    """
    settings = settings or get_settings()
    package_logger = logging.getLogger("algraph")
    for handler in list(package_logger.handlers):
        if getattr(handler, "_algraph_handler", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(settings.logging.format))
    handler._algraph_handler = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if settings.debug else settings.logging.level)
    return package_logger

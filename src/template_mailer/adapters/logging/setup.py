"""Centralized logging initialization for all entry points.

Contents:
    * :func:`init_logging` - idempotent logging initialization with layered config.
    * :func:`_build_runtime_config` - constructs RuntimeConfig from the ``[lib_log_rich]`` section.

System Role:
    Lives in the adapters layer. The console script, ``python -m`` and the
    test-suite all delegate here so the runtime is configured exactly once.
    Standard library loggers (including the resolver and the SendGrid
    transport) are bridged into lib_log_rich.
"""

from __future__ import annotations

import logging
from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict, field_validator

from template_mailer import __init__conf__

#: Third-party loggers that report every HTTP request at INFO.
HTTP_CLIENT_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


class LoggingConfigModel(BaseModel):
    """Pydantic model for [lib_log_rich] config section validation.

    Extra fields pass through to lib_log_rich.RuntimeConfig.
    ``http_client_level`` is consumed here and sets the level of the HTTP
    client loggers.

    Example:
        >>> model = LoggingConfigModel(service="mailer", environment="staging")
        >>> model.service
        'mailer'
        >>> LoggingConfigModel().http_client_level
        'WARNING'
        >>> LoggingConfigModel(http_client_level="debug").http_client_level
        'DEBUG'
    """

    service: str | None = None
    environment: str = "prod"
    http_client_level: str = "WARNING"

    model_config = ConfigDict(extra="allow")

    @field_validator("http_client_level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level


def _parse_logging_section(config: Config) -> LoggingConfigModel:
    log_raw: object = config.get("lib_log_rich", default={})
    return LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Build RuntimeConfig from a Config object.

    Service defaults to the package name when not configured. Unspecified
    values use lib_log_rich's built-in defaults.
    """
    parsed = _parse_logging_section(config)
    extra_config = parsed.model_dump(exclude={"service", "environment", "http_client_level"}, exclude_none=True)

    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **extra_config,
    )


def _apply_http_client_level(level: str) -> None:
    for name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(level)


def init_logging(config: Config) -> None:
    """Initialize lib_log_rich runtime with the provided configuration.

    Safe to call repeatedly: the first call loads .env files (so LOG_*
    variables apply), initializes the runtime and bridges standard logging;
    later calls return immediately.

    Example:
        >>> config = Config({"lib_log_rich": {"environment": "test"}}, {})
        >>> init_logging(config)  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    runtime_config = _build_runtime_config(config)
    lib_log_rich.runtime.init(runtime_config)
    lib_log_rich.runtime.attach_std_logging()
    _apply_http_client_level(_parse_logging_section(config).http_client_level)


__all__ = [
    "HTTP_CLIENT_LOGGERS",
    "LoggingConfigModel",
    "init_logging",
]

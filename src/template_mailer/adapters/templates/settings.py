"""Resolver settings model and loader (``[mailer]`` section)."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from btx_lib_mail import validate_email_address
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from template_mailer.domain.models import DEFAULT_SENDER, Identity


class MailerConfig(BaseModel):
    """Validated, immutable resolver settings.

    Example:
        >>> config = MailerConfig(disable_delivery=True, templates_file="")
        >>> config.disable_delivery, config.templates_file
        (True, None)
        >>> config.default_sender()
        Identity(email='no-reply@serato.com', name='Serato')
    """

    model_config = ConfigDict(frozen=True)

    disable_delivery: bool = False
    templates_file: Path | None = None
    default_from_email: str = DEFAULT_SENDER.email
    default_from_name: str | None = DEFAULT_SENDER.name

    @field_validator("templates_file", mode="before")
    @classmethod
    def _coerce_empty_path_to_none(cls, v: Any) -> Any:
        """Treat an empty path from config files as "use the bundled catalog"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("default_from_name", mode="before")
    @classmethod
    def _coerce_empty_name_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def _validate_sender(self) -> MailerConfig:
        validate_email_address(self.default_from_email)
        return self

    def default_sender(self) -> Identity:
        """Return the system default sender identity."""
        return Identity(self.default_from_email, self.default_from_name)


def load_mailer_config_from_dict(config_dict: Mapping[str, Any]) -> MailerConfig:
    """Load MailerConfig from the ``mailer`` section of a configuration dictionary.

    Example:
        >>> load_mailer_config_from_dict({"mailer": {"disable_delivery": True}}).disable_delivery
        True
        >>> load_mailer_config_from_dict({}).templates_file is None
        True
    """
    section: Any = config_dict.get("mailer", {})
    if not isinstance(section, Mapping):
        return MailerConfig.model_validate(section)
    return MailerConfig.model_validate(dict(cast(Mapping[str, Any], section)))


__all__ = [
    "MailerConfig",
    "load_mailer_config_from_dict",
]

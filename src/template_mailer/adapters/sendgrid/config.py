"""SendGrid transport configuration model and loader (``[sendgrid]`` section)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DEFAULT_SENDGRID_HOST = "https://api.sendgrid.com"


class SendGridConfig(BaseModel):
    """Validated, immutable SendGrid API settings.

    Example:
        >>> config = SendGridConfig(api_key="SG.secret")
        >>> config.host
        'https://api.sendgrid.com'
        >>> config.mail_send_url
        'https://api.sendgrid.com/v3/mail/send'
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    host: str = DEFAULT_SENDGRID_HOST
    timeout: float = 30.0
    impersonate_subuser: str | None = None

    @field_validator("api_key", "impersonate_subuser", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        """Coerce empty or whitespace-only strings to None.

        Treats empty strings from config files as "not configured" so an
        empty API key is never sent as a credential.
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("host", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().rstrip("/") or DEFAULT_SENDGRID_HOST
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> SendGridConfig:
        """Catch common configuration mistakes early.

        Example:
            >>> SendGridConfig(timeout=-5.0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if not self.host.startswith(("https://", "http://")):
            raise ValueError(f"host must be an http(s) URL, got {self.host!r}")
        return self

    @property
    def mail_send_url(self) -> str:
        return f"{self.host}/v3/mail/send"

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> "SG.secret" in repr(SendGridConfig(api_key="SG.secret"))
            False
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"SendGridConfig({', '.join(fields)})"


def load_sendgrid_config_from_dict(config_dict: Mapping[str, Any]) -> SendGridConfig:
    """Load SendGridConfig from the ``sendgrid`` section of a configuration dictionary.

    Example:
        >>> load_sendgrid_config_from_dict({"sendgrid": {"api_key": "SG.x", "timeout": 5}}).timeout
        5.0
        >>> load_sendgrid_config_from_dict({}).api_key is None
        True
    """
    section: Any = config_dict.get("sendgrid", {})
    if not isinstance(section, Mapping):
        return SendGridConfig.model_validate(section)
    return SendGridConfig.model_validate(dict(cast(Mapping[str, Any], section)))


__all__ = [
    "DEFAULT_SENDGRID_HOST",
    "SendGridConfig",
    "load_sendgrid_config_from_dict",
]

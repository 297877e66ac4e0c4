"""Pydantic schema for the JSON template catalog.

Validates one catalog entry at the boundary and converts it into the frozen
domain :class:`~template_mailer.domain.models.TemplateConfig`.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, cast

from btx_lib_mail import validate_email_address
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from template_mailer.domain.models import DEFAULT_LANGUAGE, Identity, LanguageEntry, TemplateConfig


class IdentityModel(BaseModel):
    """Email address with optional display name.

    Example:
        >>> IdentityModel(email="billing@example.com", name="Billing").to_identity()
        Identity(email='billing@example.com', name='Billing')
    """

    model_config = ConfigDict(frozen=True)

    email: str
    name: str | None = None

    @field_validator("email")
    @classmethod
    def _validate_email(cls, v: str) -> str:
        validate_email_address(v)
        return v

    def to_identity(self) -> Identity:
        return Identity(self.email, self.name)


class LanguageModel(BaseModel):
    """Per-language template id and categories."""

    model_config = ConfigDict(frozen=True)

    template_id: str
    categories: list[str] = Field(default_factory=list)

    @field_validator("template_id")
    @classmethod
    def _require_template_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("template_id must not be empty")
        return v


class EmailFromModel(BaseModel):
    """Sender and reply-to overrides (``email_from`` section)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender: IdentityModel | None = Field(default=None, alias="from")
    reply_to: IdentityModel | None = None


class RecipientsModel(BaseModel):
    """Fixed additional recipients (``recipients`` section)."""

    model_config = ConfigDict(frozen=True)

    bcc: list[str] = Field(default_factory=list)
    cc: list[str] = Field(default_factory=list)

    @field_validator("bcc", "cc", mode="before")
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> Any:
        """Coerce a single address to a one-element list.

        Examples:
            >>> RecipientsModel._coerce_string_to_list("ops@example.com")
            ['ops@example.com']
            >>> RecipientsModel._coerce_string_to_list(None)
            []
        """
        if isinstance(v, str):
            return [v] if v.strip() else []
        if v is None:
            return []
        return v

    @model_validator(mode="after")
    def _validate_addresses(self) -> RecipientsModel:
        for address in (*self.bcc, *self.cc):
            validate_email_address(address)
        return self


class TemplateConfigModel(BaseModel):
    """One entry of the template catalog.

    Example:
        >>> model = TemplateConfigModel.model_validate(
        ...     {"template_params": ["plan_name"], "languages": {"en": {"template_id": "d-1"}}}
        ... )
        >>> model.to_domain("welcome").languages["en"].template_id
        'd-1'
        >>> TemplateConfigModel.model_validate(
        ...     {"template_params": [], "languages": {"fr": {"template_id": "d-2"}}}
        ... )  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValidationError: ...
    """

    model_config = ConfigDict(frozen=True)

    template_params: list[str] = Field(default_factory=list)
    languages: dict[str, LanguageModel]
    categories: list[str] = Field(default_factory=list)
    email_from: EmailFromModel | None = None
    recipients: RecipientsModel | None = None

    @field_validator("template_params", mode="before")
    @classmethod
    def _coerce_params(cls, v: Any) -> Any:
        if v is None:
            return []
        return v

    @model_validator(mode="after")
    def _require_default_language(self) -> TemplateConfigModel:
        if DEFAULT_LANGUAGE not in self.languages:
            raise ValueError(f"languages must contain an {DEFAULT_LANGUAGE!r} entry")
        if len(set(self.template_params)) != len(self.template_params):
            raise ValueError("template_params must not contain duplicates")
        return self

    def to_domain(self, name: str) -> TemplateConfig:
        """Convert to the immutable domain TemplateConfig."""
        email_from = self.email_from or EmailFromModel()
        recipients = self.recipients or RecipientsModel()
        languages = {
            code: LanguageEntry(entry.template_id, tuple(entry.categories)) for code, entry in self.languages.items()
        }
        return TemplateConfig(
            name=name,
            template_params=tuple(self.template_params),
            languages=MappingProxyType(languages),
            categories=tuple(self.categories),
            sender=email_from.sender.to_identity() if email_from.sender else None,
            reply_to=email_from.reply_to.to_identity() if email_from.reply_to else None,
            bcc=tuple(recipients.bcc),
            cc=tuple(recipients.cc),
        )


def parse_template_config(name: str, raw: Any) -> TemplateConfig:
    """Validate a raw catalog entry and convert it to a TemplateConfig.

    Raises:
        pydantic.ValidationError: When the entry violates the schema.
    """
    return TemplateConfigModel.model_validate(cast("dict[str, Any]", raw)).to_domain(name)


__all__ = [
    "EmailFromModel",
    "IdentityModel",
    "LanguageModel",
    "RecipientsModel",
    "TemplateConfigModel",
    "parse_template_config",
]

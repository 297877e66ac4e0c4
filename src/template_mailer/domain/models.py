"""Immutable value objects describing templates, requests and resolved messages.

The template catalog is parsed into these frozen dataclasses once at startup;
requests and resolved messages are created and discarded per call.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final

#: Language used when the requested one is empty or not configured.
DEFAULT_LANGUAGE: Final[str] = "en"

ParameterValue = str | bool | Mapping[str, Any]
"""Values accepted as template substitution parameters."""


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Identity:
    """An email address with a display name.

    Example:
        >>> Identity("no-reply@serato.com", "Serato").name
        'Serato'
    """

    email: str
    name: str | None = None


#: System-wide sender used when a template defines no ``email_from.from``.
DEFAULT_SENDER: Final[Identity] = Identity("no-reply@serato.com", "Serato")


@dataclass(frozen=True, slots=True)
class LanguageEntry:
    """Per-language delivery template id and categories."""

    template_id: str
    categories: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TemplateConfig:
    """Declarative configuration of a single named template.

    Attributes:
        name: Template name callers use to request a send.
        template_params: Parameter names; all required, no others allowed.
        languages: Language code to :class:`LanguageEntry`; always holds ``en``.
        categories: Tags applied to every send regardless of language.
        sender: Optional ``email_from.from`` override.
        reply_to: Optional ``email_from.reply_to`` identity.
        bcc: Fixed blind-copy recipients.
        cc: Fixed copy recipients.
    """

    name: str
    template_params: tuple[str, ...]
    languages: Mapping[str, LanguageEntry]
    categories: tuple[str, ...] = ()
    sender: Identity | None = None
    reply_to: Identity | None = None
    bcc: tuple[str, ...] = ()
    cc: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file attached to a message, with base64-encoded content."""

    content: str
    filename: str
    mime_type: str | None = None
    disposition: str = "attachment"
    content_id: str | None = None


@dataclass(frozen=True, slots=True)
class SendRequest:
    """A caller's request to send a templated notification."""

    template_name: str
    recipient: Identity
    language: str = DEFAULT_LANGUAGE
    parameters: Mapping[str, Any] = field(default_factory=_empty_mapping)
    attachments: tuple[Attachment, ...] = ()


@dataclass(frozen=True, slots=True)
class ResolvedMessage:
    """Fully validated, provider-ready message produced by the resolver.

    Owned by the call that produced it. ``parameters`` is the caller's map,
    copied and unchanged.
    """

    template_name: str
    template_id: str
    language: str
    sender: Identity
    recipient: Identity
    categories: tuple[str, ...]
    parameters: Mapping[str, Any]
    reply_to: Identity | None = None
    bcc: tuple[str, ...] = ()
    cc: tuple[str, ...] = ()
    attachments: tuple[Attachment, ...] = ()


@dataclass(frozen=True, slots=True)
class DeliveryResponse:
    """Provider response returned by a delivery gateway."""

    status_code: int
    body: str = ""
    headers: Mapping[str, str] = field(default_factory=_empty_mapping)
    message_id: str | None = None


__all__ = [
    "DEFAULT_LANGUAGE",
    "DEFAULT_SENDER",
    "Attachment",
    "DeliveryResponse",
    "Identity",
    "LanguageEntry",
    "ParameterValue",
    "ResolvedMessage",
    "SendRequest",
    "TemplateConfig",
]

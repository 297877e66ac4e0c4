"""Domain layer - pure business logic with no I/O or framework dependencies.

Contents:
    * :mod:`.models` - Template configuration and message value objects
    * :mod:`.resolution` - Parameter validation, language, category and sender rules
    * :mod:`.catalog` - Cross-template catalog audit
    * :mod:`.enums` - Domain enumerations (OutputFormat)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .catalog import audit_templates
from .enums import OutputFormat
from .errors import (
    ConfigError,
    DeliveryError,
    InvalidParameterTypeError,
    InvalidRecipientError,
    MailerError,
    MissingParameterError,
    TemplateParameterError,
    UnknownParameterError,
    UnknownTemplateError,
)
from .models import (
    DEFAULT_LANGUAGE,
    DEFAULT_SENDER,
    Attachment,
    DeliveryResponse,
    Identity,
    LanguageEntry,
    ResolvedMessage,
    SendRequest,
    TemplateConfig,
)
from .resolution import (
    resolve_categories,
    resolve_language,
    resolve_sender_identity,
    validate_parameters,
)

__all__ = [
    # Models
    "DEFAULT_LANGUAGE",
    "DEFAULT_SENDER",
    "Attachment",
    "DeliveryResponse",
    "Identity",
    "LanguageEntry",
    "ResolvedMessage",
    "SendRequest",
    "TemplateConfig",
    # Rules
    "audit_templates",
    "resolve_categories",
    "resolve_language",
    "resolve_sender_identity",
    "validate_parameters",
    # Enums
    "OutputFormat",
    # Errors
    "ConfigError",
    "DeliveryError",
    "InvalidParameterTypeError",
    "InvalidRecipientError",
    "MailerError",
    "MissingParameterError",
    "TemplateParameterError",
    "UnknownParameterError",
    "UnknownTemplateError",
]

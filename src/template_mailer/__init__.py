"""Public package surface exposing the resolver, domain types, and configuration.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Domain exports: value objects and the error taxonomy
- Application exports: the TemplateResolver use case
- Composition exports: wired adapter services (configuration, resolver factory)
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application.resolver import TemplateResolver

# Composition exports (wired adapters)
from .composition import create_resolver, get_config, load_template_store

# Domain exports
from .domain.errors import (
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
from .domain.models import (
    Attachment,
    DeliveryResponse,
    Identity,
    ResolvedMessage,
    SendRequest,
    TemplateConfig,
)

__all__ = [
    "Attachment",
    "ConfigError",
    "DeliveryError",
    "DeliveryResponse",
    "Identity",
    "InvalidParameterTypeError",
    "InvalidRecipientError",
    "MailerError",
    "MissingParameterError",
    "ResolvedMessage",
    "SendRequest",
    "TemplateConfig",
    "TemplateParameterError",
    "TemplateResolver",
    "UnknownParameterError",
    "UnknownTemplateError",
    "create_resolver",
    "get_config",
    "load_template_store",
    "print_info",
]

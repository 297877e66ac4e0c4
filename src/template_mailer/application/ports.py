"""Application ports: Protocol definitions for adapter functions and collaborators.

Each callable Protocol defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function.  Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``SendGridConfig``, ``MailerConfig``, ``TemplateStore``) are imported under
    ``TYPE_CHECKING`` only so that layer contracts remain satisfied at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat
from ..domain.models import DeliveryResponse, ResolvedMessage, TemplateConfig

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.sendgrid.config import SendGridConfig
    from ..adapters.templates.settings import MailerConfig
    from ..adapters.templates.store import TemplateStore


class TemplateLookup(Protocol):
    """Read-only lookup of template configurations by name."""

    def lookup(self, name: str) -> TemplateConfig: ...


class DeliveryGateway(Protocol):
    """Deliver one resolved message and return the provider response."""

    def __call__(self, message: ResolvedMessage) -> DeliveryResponse: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadTemplateStore(Protocol):
    """Build the template store from an explicit path or the bundled catalog."""

    def __call__(self, path: Path | None = ...) -> TemplateStore: ...


class SendMessage(Protocol):
    """Deliver a resolved message through the SendGrid v3 API."""

    def __call__(self, message: ResolvedMessage, *, config: SendGridConfig) -> DeliveryResponse: ...


class LoadSendGridConfigFromDict(Protocol):
    """Load SendGridConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> SendGridConfig: ...


class LoadMailerConfigFromDict(Protocol):
    """Load MailerConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> MailerConfig: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DeliveryGateway",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadMailerConfigFromDict",
    "LoadSendGridConfigFromDict",
    "LoadTemplateStore",
    "SendMessage",
    "TemplateLookup",
]

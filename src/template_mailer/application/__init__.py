"""Application layer - use cases and port definitions.

Contents:
    * :mod:`.ports` - Protocol definitions for adapters and collaborators
    * :mod:`.resolver` - The template resolution use case
"""

from __future__ import annotations

from .ports import (
    DeliveryGateway,
    DisplayConfig,
    GetConfig,
    InitLogging,
    LoadMailerConfigFromDict,
    LoadSendGridConfigFromDict,
    LoadTemplateStore,
    SendMessage,
    TemplateLookup,
)
from .resolver import TemplateResolver

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
    "TemplateResolver",
]

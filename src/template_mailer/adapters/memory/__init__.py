"""In-memory ports used by ``build_testing`` and the test-suite.

No files, no HTTP and no logging runtime: the catalog is
:data:`SAMPLE_TEMPLATES` and delivery goes to a :class:`DeliverySpy`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import display_config_in_memory, get_config_in_memory
from .delivery import DeliverySpy
from .logging import init_logging_in_memory
from .templates import SAMPLE_TEMPLATES, load_template_store_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from template_mailer.application.ports import (
        DeliveryGateway,
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadTemplateStore,
        SendMessage,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_load_template_store: LoadTemplateStore = load_template_store_in_memory
    _assert_send_message: SendMessage = DeliverySpy().send_message
    _assert_gateway: DeliveryGateway = DeliverySpy()

__all__ = [
    "SAMPLE_TEMPLATES",
    "DeliverySpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_template_store_in_memory",
]

"""Composition root wiring adapters to application ports."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from lib_layered_config import Config
from pydantic import ValidationError

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config, get_default_config_path

# Logging services
from ..adapters.logging.setup import init_logging

# Delivery services
from ..adapters.sendgrid.config import load_sendgrid_config_from_dict
from ..adapters.sendgrid.transport import send_message

# Template services
from ..adapters.templates.settings import load_mailer_config_from_dict
from ..adapters.templates.store import load_template_store
from ..application.resolver import TemplateResolver
from ..domain.errors import ConfigError

# Static conformance assertions: pyright verifies that each adapter function
# structurally satisfies its corresponding Protocol at type-check time.
if TYPE_CHECKING:
    from ..adapters.memory.delivery import DeliverySpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadMailerConfigFromDict,
        LoadSendGridConfigFromDict,
        LoadTemplateStore,
        SendMessage,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_load_template_store: LoadTemplateStore = load_template_store
    _assert_send_message: SendMessage = send_message
    _assert_load_sendgrid_config_from_dict: LoadSendGridConfigFromDict = load_sendgrid_config_from_dict
    _assert_load_mailer_config_from_dict: LoadMailerConfigFromDict = load_mailer_config_from_dict
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    load_template_store: LoadTemplateStore
    send_message: SendMessage
    load_sendgrid_config_from_dict: LoadSendGridConfigFromDict
    load_mailer_config_from_dict: LoadMailerConfigFromDict
    init_logging: InitLogging

    def build_resolver(
        self,
        config: Config,
        *,
        templates_file: Path | None = None,
        disable_delivery: bool | None = None,
    ) -> TemplateResolver:
        """Wire a TemplateResolver from layered configuration.

        Args:
            config: Loaded configuration holding ``[sendgrid]`` and ``[mailer]``.
            templates_file: Catalog override; falls back to ``mailer.templates_file``
                and then to the bundled catalog.
            disable_delivery: Override for ``mailer.disable_delivery``.

        Returns:
            Resolver bound to the loaded catalog and the delivery gateway.

        Raises:
            ConfigError: Settings are invalid, the catalog cannot be loaded, or
                no API key is configured while delivery is enabled.
        """
        config_dict = config.as_dict()
        try:
            mailer = self.load_mailer_config_from_dict(config_dict)
            sendgrid = self.load_sendgrid_config_from_dict(config_dict)
        except ValidationError as exc:
            raise ConfigError(f"Invalid mailer configuration: {exc}") from exc

        delivery_disabled = mailer.disable_delivery if disable_delivery is None else disable_delivery
        if not delivery_disabled and sendgrid.api_key is None:
            raise ConfigError("No SendGrid API key configured (sendgrid.api_key is empty)")

        store = self.load_template_store(templates_file if templates_file is not None else mailer.templates_file)
        return TemplateResolver(
            store,
            functools.partial(self.send_message, config=sendgrid),
            disable_delivery=delivery_disabled,
            default_sender=mailer.default_sender(),
        )


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        load_template_store=load_template_store,
        send_message=send_message,
        load_sendgrid_config_from_dict=load_sendgrid_config_from_dict,
        load_mailer_config_from_dict=load_mailer_config_from_dict,
        init_logging=init_logging,
    )


def build_testing(*, spy: DeliverySpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: Optional DeliverySpy instance for capturing delivered messages.
            When None, a fresh DeliverySpy is created. Pass your own spy
            to assert on captured messages in tests.

    Returns:
        AppServices container with in-memory adapters.
    """
    from ..adapters.memory import (
        DeliverySpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_template_store_in_memory,
    )

    delivery_spy = spy if spy is not None else DeliverySpy()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        load_template_store=load_template_store_in_memory,
        send_message=delivery_spy.send_message,
        load_sendgrid_config_from_dict=load_sendgrid_config_from_dict,
        load_mailer_config_from_dict=load_mailer_config_from_dict,
        init_logging=init_logging_in_memory,
    )


def create_resolver(
    *,
    profile: str | None = None,
    templates_file: Path | None = None,
    disable_delivery: bool | None = None,
) -> TemplateResolver:
    """Build a production TemplateResolver from layered configuration.

    Example:
        >>> resolver = create_resolver(disable_delivery=True)  # doctest: +SKIP
        >>> resolver.send_template("dj-sub-second-payment-declined", "Jo", "jo@example.com", "en", {})  # doctest: +SKIP
    """
    services = build_production()
    return services.build_resolver(
        services.get_config(profile=profile),
        templates_file=templates_file,
        disable_delivery=disable_delivery,
    )


__all__ = [
    # Configuration
    "get_config",
    "get_default_config_path",
    "display_config",
    # Templates
    "load_template_store",
    "load_mailer_config_from_dict",
    # Delivery
    "send_message",
    "load_sendgrid_config_from_dict",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
    "create_resolver",
]

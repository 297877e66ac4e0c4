"""Wiring a TemplateResolver from configuration."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from lib_layered_config import Config

from template_mailer.adapters.memory import DeliverySpy
from template_mailer.composition import AppServices, build_production, build_testing
from template_mailer.domain.errors import ConfigError
from template_mailer.domain.models import Identity


@pytest.fixture
def spy() -> DeliverySpy:
    return DeliverySpy()


@pytest.fixture
def services(spy: DeliverySpy) -> AppServices:
    return build_testing(spy=spy)


@pytest.mark.os_agnostic
def test_build_production_wires_real_adapters() -> None:
    """Production services use the SendGrid transport and file-backed catalog."""
    from template_mailer.adapters.sendgrid.transport import send_message
    from template_mailer.adapters.templates.store import load_template_store

    services = build_production()

    assert services.send_message is send_message
    assert services.load_template_store is load_template_store


@pytest.mark.os_agnostic
def test_testing_services_default_config_disables_delivery(services: AppServices, spy: DeliverySpy) -> None:
    """The in-memory config needs no API key and never delivers."""
    resolver = services.build_resolver(services.get_config())

    response = resolver.send_template("dj-sub-second-payment-declined", None, "jo@example.com", "en", {})

    assert response is None
    assert resolver.disable_delivery is True
    assert spy.sent_messages == []


@pytest.mark.os_agnostic
def test_enabled_delivery_passes_sendgrid_config_to_gateway(
    services: AppServices, spy: DeliverySpy, config_factory: Callable[[dict[str, Any]], Config]
) -> None:
    """The gateway receives the loaded SendGrid settings with each message."""
    config = config_factory({"sendgrid": {"api_key": "SG.k", "timeout": 7}})
    resolver = services.build_resolver(config)

    response = resolver.send_template("dj-sub-second-payment-declined", None, "jo@example.com", "en", {})

    assert response is not None
    assert [m.template_id for m in spy.sent_messages] == ["T-DJ-2"]
    (sent_config,) = spy.configs
    assert sent_config is not None
    assert sent_config.api_key == "SG.k"
    assert sent_config.timeout == 7.0


@pytest.mark.os_agnostic
def test_missing_api_key_with_delivery_enabled_is_config_error(
    services: AppServices, config_factory: Callable[[dict[str, Any]], Config]
) -> None:
    """Live delivery without a key fails at wiring time."""
    with pytest.raises(ConfigError, match="No SendGrid API key"):
        services.build_resolver(config_factory({"sendgrid": {"api_key": ""}}))


@pytest.mark.os_agnostic
def test_disable_delivery_override_skips_key_check(
    services: AppServices, config_factory: Callable[[dict[str, Any]], Config]
) -> None:
    """An explicit override wins over the configured flag."""
    resolver = services.build_resolver(config_factory({}), disable_delivery=True)

    assert resolver.disable_delivery is True


@pytest.mark.os_agnostic
def test_enable_override_wins_over_configured_disable(
    services: AppServices, spy: DeliverySpy, config_factory: Callable[[dict[str, Any]], Config]
) -> None:
    """disable_delivery=False forces live delivery even when config disables it."""
    config = config_factory({"mailer": {"disable_delivery": True}, "sendgrid": {"api_key": "SG.k"}})

    resolver = services.build_resolver(config, disable_delivery=False)
    resolver.send_template("dj-sub-second-payment-declined", None, "jo@example.com", "en", {})

    assert len(spy.sent_messages) == 1


@pytest.mark.os_agnostic
def test_invalid_settings_are_config_errors(services: AppServices, config_factory: Callable[[dict[str, Any]], Config]) -> None:
    """Pydantic failures are reported as configuration errors."""
    with pytest.raises(ConfigError, match="Invalid mailer configuration"):
        services.build_resolver(config_factory({"sendgrid": {"timeout": -1}}), disable_delivery=True)


@pytest.mark.os_agnostic
def test_configured_default_sender_is_used(services: AppServices, config_factory: Callable[[dict[str, Any]], Config]) -> None:
    """mailer.default_from_* replaces the built-in sender."""
    config = config_factory({"mailer": {"default_from_email": "hello@example.com", "default_from_name": "Example"}})
    resolver = services.build_resolver(config, disable_delivery=True)

    message = resolver.resolve_template("dj-sub-second-payment-declined", None, "jo@example.com", "en", {})

    assert message.sender == Identity("hello@example.com", "Example")


@pytest.mark.os_agnostic
def test_templates_file_argument_overrides_configured_catalog(
    catalog_file: Callable[[Any], Path], config_factory: Callable[[dict[str, Any]], Config], tmp_path: Path
) -> None:
    """An explicit catalog path beats mailer.templates_file."""
    path = catalog_file({"welcome": {"template_params": [], "languages": {"en": {"template_id": "d-w"}}}})
    config = config_factory({"mailer": {"templates_file": str(tmp_path / "ignored.json")}})

    resolver = build_production().build_resolver(config, templates_file=path, disable_delivery=True)

    assert resolver.resolve_template("welcome", None, "jo@example.com", "en", {}).template_id == "d-w"


@pytest.mark.os_agnostic
def test_configured_templates_file_is_loaded(
    catalog_file: Callable[[Any], Path], config_factory: Callable[[dict[str, Any]], Config]
) -> None:
    """mailer.templates_file replaces the bundled catalog."""
    path = catalog_file({"welcome": {"languages": {"en": {"template_id": "d-w"}}}})
    config = config_factory({"mailer": {"templates_file": str(path), "disable_delivery": True}})

    resolver = build_production().build_resolver(config)

    assert resolver.resolve_template("welcome", None, "jo@example.com", "", {}).template_id == "d-w"


@pytest.mark.os_agnostic
def test_unreadable_configured_catalog_is_config_error(
    config_factory: Callable[[dict[str, Any]], Config], tmp_path: Path
) -> None:
    """A missing catalog file fails wiring."""
    config = config_factory({"mailer": {"templates_file": str(tmp_path / "absent.json"), "disable_delivery": True}})

    with pytest.raises(ConfigError, match="cannot read"):
        build_production().build_resolver(config)


@pytest.mark.os_agnostic
def test_production_bundled_catalog_with_delivery_disabled(config_factory: Callable[[dict[str, Any]], Config]) -> None:
    """The bundled catalog resolves real template ids."""
    resolver = build_production().build_resolver(config_factory({}), disable_delivery=True)

    message = resolver.resolve_template(
        "studio-sub-voluntary-cancel",
        "Jo",
        "jo@example.com",
        "fr",
        {"subscription_end_date": "2024-06-01", "plan_name": "Studio"},
    )

    assert message.template_id == "d-8146e370bca14acf955bf1df39d8d93f"
    assert message.language == "en"

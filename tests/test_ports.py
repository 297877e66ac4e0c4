"""Port behavioral contract tests for the in-memory adapters.

Production adapters are covered by their own modules and the CLI tests;
static conformance to the Protocols is checked by pyright.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from lib_layered_config import Config

from template_mailer.adapters.memory import (
    DeliverySpy,
    display_config_in_memory,
    get_config_in_memory,
    init_logging_in_memory,
    load_template_store_in_memory,
)
from template_mailer.adapters.sendgrid.config import SendGridConfig
from template_mailer.domain.errors import DeliveryError, InvalidRecipientError

if TYPE_CHECKING:
    from collections.abc import Callable

    from template_mailer.application.ports import GetConfig, LoadTemplateStore
    from template_mailer.domain.models import ResolvedMessage


@pytest.fixture
def get_config_impl() -> GetConfig:
    return get_config_in_memory


@pytest.fixture
def load_template_store_impl() -> LoadTemplateStore:
    return load_template_store_in_memory


@pytest.mark.os_agnostic
def test_get_config_returns_config_with_delivery_disabled(get_config_impl: GetConfig) -> None:
    """The in-memory config never enables live delivery."""
    config = get_config_impl(profile="anything")

    assert isinstance(config, Config)
    assert config.get("mailer.disable_delivery") is True


@pytest.mark.os_agnostic
def test_get_config_matches_bundled_sender_defaults(get_config_impl: GetConfig) -> None:
    """The in-memory settings carry the same default sender as defaultconfig.toml."""
    config = get_config_impl()

    assert config.get("mailer.default_from_email") == "no-reply@serato.com"
    assert config.get("sendgrid.host") == "https://api.sendgrid.com"
    assert get_config_impl().as_dict() == config.as_dict()


@pytest.mark.os_agnostic
def test_load_template_store_ignores_path(load_template_store_impl: LoadTemplateStore) -> None:
    """The in-memory catalog is the same whatever path is passed."""
    assert load_template_store_impl().names() == load_template_store_impl(None).names()
    assert "studio-sub-voluntary-cancel" in load_template_store_impl()


@pytest.mark.os_agnostic
def test_display_and_logging_are_no_ops() -> None:
    """Neither adapter has side effects or a return value."""
    config = Config({}, {})

    assert display_config_in_memory(config) is None
    assert init_logging_in_memory(config) is None


@pytest.mark.os_agnostic
def test_spy_records_messages_and_configs(message_factory: Callable[..., ResolvedMessage]) -> None:
    """send_message records the message and the SendGrid settings."""
    spy = DeliverySpy()
    config = SendGridConfig(api_key="SG.k")

    response = spy.send_message(message_factory(), config=config)

    assert response.status_code == 202
    assert response.message_id == "spy-1"
    assert spy.configs == [config]


@pytest.mark.os_agnostic
def test_spy_as_gateway_records_no_config(message_factory: Callable[..., ResolvedMessage]) -> None:
    """Called directly, the spy acts as a bare gateway."""
    spy = DeliverySpy(status_code=200)

    assert spy(message_factory()).status_code == 200
    assert spy.configs == [None]


@pytest.mark.os_agnostic
def test_spy_raises_configured_exception_after_recording(message_factory: Callable[..., ResolvedMessage]) -> None:
    """Failures are injected after the call is captured."""
    spy = DeliverySpy(raise_exception=DeliveryError("boom"))

    with pytest.raises(DeliveryError):
        spy(message_factory())

    assert len(spy.sent_messages) == 1


@pytest.mark.os_agnostic
def test_spy_rejects_invalid_recipient(message_factory: Callable[..., ResolvedMessage]) -> None:
    """The spy validates addresses like the real transport."""
    from template_mailer.domain.models import Identity

    spy = DeliverySpy()

    with pytest.raises(InvalidRecipientError):
        spy(message_factory(recipient=Identity("nope")))

    assert spy.sent_messages == []


@pytest.mark.os_agnostic
def test_spy_clear_resets_state(message_factory: Callable[..., ResolvedMessage]) -> None:
    """clear() empties captures and removes injected failures."""
    spy = DeliverySpy(raise_exception=DeliveryError("boom"))
    with pytest.raises(DeliveryError):
        spy(message_factory())

    spy.clear()

    assert spy.sent_messages == []
    assert spy.raise_exception is None

"""Shared pytest fixtures for resolver, gateway and CLI tests.

All shared fixtures live here; tests receive them through pytest's conftest
discovery. Fixture names read as plain English.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import orjson
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

from template_mailer.adapters.memory import SAMPLE_TEMPLATES, DeliverySpy
from template_mailer.adapters.templates.store import TemplateStore
from template_mailer.application.resolver import TemplateResolver
from template_mailer.domain.models import DEFAULT_SENDER, Identity, ResolvedMessage

if TYPE_CHECKING:
    from template_mailer.composition import AppServices

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))


def _remove_ansi_codes(text: str) -> str:
    """Return *text* stripped of ANSI escape sequences."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def _snapshot_cli_config() -> dict[str, object]:
    """Capture every attribute from ``lib_cli_exit_tools.config``."""
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    """Reapply a configuration snapshot captured by ``_snapshot_cli_config``."""
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` when parsing JSON so log lines on stderr cannot
    contaminate the output.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide the production services factory for CLI tests that need no injection."""
    from template_mailer.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return _remove_ansi_codes(value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore them after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config cache before the test.

    Only clears before, so a monkeypatched ``get_config`` never loses its
    ``cache_clear`` afterwards.
    """
    from template_mailer.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts without filesystem I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def sample_store() -> TemplateStore:
    """Template store built from the in-memory sample catalog."""
    return TemplateStore.from_document(SAMPLE_TEMPLATES)


@pytest.fixture
def delivery_spy() -> DeliverySpy:
    """Fresh delivery gateway spy."""
    return DeliverySpy()


@pytest.fixture
def resolver(sample_store: TemplateStore, delivery_spy: DeliverySpy) -> TemplateResolver:
    """Resolver over the sample catalog that delivers into ``delivery_spy``."""
    return TemplateResolver(sample_store, delivery_spy)


@pytest.fixture
def message_factory() -> Callable[..., ResolvedMessage]:
    """Build ResolvedMessage instances with sensible defaults; override any field by keyword."""

    def _factory(**overrides: Any) -> ResolvedMessage:
        values: dict[str, Any] = {
            "template_name": "studio-sub-voluntary-cancel",
            "template_id": "T-FR",
            "language": "fr",
            "sender": DEFAULT_SENDER,
            "recipient": Identity("jo@example.com", "Jo Bloggs"),
            "categories": ("French", "studio-sub-voluntary-cancel"),
            "parameters": {"subscription_end_date": "2024-06-01", "plan_name": "Studio"},
        }
        values.update(overrides)
        return ResolvedMessage(**values)

    return _factory


@pytest.fixture
def catalog_file(tmp_path: Path) -> Callable[[Any], Path]:
    """Write a catalog document (dict, or raw bytes/str) to a temporary JSON file."""

    def _write(document: Any) -> Path:
        path = tmp_path / "email_config.json"
        if isinstance(document, bytes):
            path.write_bytes(document)
        elif isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_bytes(orjson.dumps(document))
        return path

    return _write


@dataclass
class MailerCliContext:
    """Services factory plus the spy capturing everything the CLI delivered."""

    factory: Callable[[], Any]
    spy: DeliverySpy


@pytest.fixture
def mailer_cli_context(clear_config_cache: None) -> Callable[..., MailerCliContext]:
    """Create a CLI test context with injected config and a DeliverySpy gateway.

    Takes the configuration dict (all sections) and returns the wired factory
    and spy. The in-memory sample catalog replaces the bundled one unless
    ``bundled_catalog=True``.

    Example:
        def test_send(cli_runner, mailer_cli_context) -> None:
            ctx = mailer_cli_context({"sendgrid": {"api_key": "SG.test"}})
            result = cli_runner.invoke(cli, ["send", ...], obj=ctx.factory)
            assert ctx.spy.sent_messages
    """
    from template_mailer.adapters.memory import load_template_store_in_memory
    from template_mailer.composition import AppServices, build_production

    def _create(config_data: dict[str, Any] | None = None, *, bundled_catalog: bool = False) -> MailerCliContext:
        spy = DeliverySpy()
        config = Config(config_data or {}, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        def _init_logging_noop(_config: Config) -> None:
            return None

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            load_template_store=prod.load_template_store if bundled_catalog else load_template_store_in_memory,
            send_message=spy.send_message,
            load_sendgrid_config_from_dict=prod.load_sendgrid_config_from_dict,
            load_mailer_config_from_dict=prod.load_mailer_config_from_dict,
            init_logging=_init_logging_noop,
        )
        return MailerCliContext(factory=lambda: test_services, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(clear_config_cache: None) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Create a production services factory whose get_config returns the given data."""
    from template_mailer.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            load_template_store=prod.load_template_store,
            send_message=prod.send_message,
            load_sendgrid_config_from_dict=prod.load_sendgrid_config_from_dict,
            load_mailer_config_from_dict=prod.load_mailer_config_from_dict,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _create

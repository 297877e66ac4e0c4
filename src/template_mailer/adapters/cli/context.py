"""Per-invocation CLI state and the ``lib_cli_exit_tools`` traceback switches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

from template_mailer.adapters.config.overrides import apply_overrides

if TYPE_CHECKING:
    from template_mailer.composition import AppServices


class TracebackState(NamedTuple):
    """Traceback switches of ``lib_cli_exit_tools.config``."""

    traceback: bool
    force_color: bool


@dataclass(slots=True)
class CLIContext:
    """What the root group hands to ``config``, ``templates``, ``resolve`` and ``send``.

    Attributes:
        traceback: Whether ``--traceback`` was given.
        config: Configuration after ``--profile`` and ``--set``; holds the
            ``[sendgrid]``, ``[mailer]`` and ``[lib_log_rich]`` sections.
        services: Wired ports (production or in-memory).
        profile: Root-level profile name.
        set_overrides: Raw ``--set`` strings.
    """

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()

    def config_for(self, profile: str | None) -> tuple[Config, str | None]:
        """Return the config for a subcommand ``--profile`` and the profile in effect.

        Without a profile the root config is reused. A different profile is
        read from scratch and the root ``--set`` assignments are applied again.
        """
        if not profile:
            return self.config, self.profile
        reloaded = self.services.get_config(profile=profile)
        return apply_overrides(reloaded, self.set_overrides), profile


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
    set_overrides: tuple[str, ...] = (),
) -> None:
    """Replace the services factory in ``ctx.obj`` with a :class:`CLIContext`.

    Example:
        >>> from unittest.mock import MagicMock
        >>> from template_mailer.composition import build_testing
        >>> services = build_testing()
        >>> ctx = MagicMock()
        >>> store_cli_context(ctx, traceback=False, config=services.get_config(), services=services)
        >>> ctx.obj.config.get("mailer.disable_delivery")
        True
    """
    ctx.obj = CLIContext(traceback, config, services, profile, set_overrides)


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the state stored by the root group.

    Raises:
        RuntimeError: A command ran without the root group.
    """
    state = ctx.obj
    if isinstance(state, CLIContext):
        return state
    raise RuntimeError("CLI context not initialized. Call store_cli_context first.")


def apply_traceback_preferences(enabled: bool) -> None:
    """Switch full, coloured tracebacks on or off for ``lib_cli_exit_tools``.

    Example:
        >>> apply_traceback_preferences(True)
        >>> bool(lib_cli_exit_tools.config.traceback)
        True
    """
    restore_traceback_state(TracebackState(bool(enabled), bool(enabled)))


def snapshot_traceback_state() -> TracebackState:
    exit_config = lib_cli_exit_tools.config
    return TracebackState(
        bool(getattr(exit_config, "traceback", False)),
        bool(getattr(exit_config, "traceback_force_color", False)),
    )


def restore_traceback_state(state: tuple[bool, bool]) -> None:
    """Write back switches captured by :func:`snapshot_traceback_state`.

    Example:
        >>> before = snapshot_traceback_state()
        >>> apply_traceback_preferences(True)
        >>> restore_traceback_state(before)
        >>> snapshot_traceback_state() == before
        True
    """
    lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = state


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]

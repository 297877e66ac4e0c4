"""The ``template-mailer`` command group.

Every invocation builds its services from ``ctx.obj`` (a factory), loads the
layered configuration for ``--profile``, folds in ``--set`` assignments and
starts logging before any mailer command runs.

Contents:
    * :func:`cli` - Root command group with global options.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

from template_mailer import __init__conf__
from template_mailer.adapters.config.overrides import apply_overrides

from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from template_mailer.composition import AppServices

logger = logging.getLogger(__name__)


def _create_services(factory: object) -> AppServices:
    if not callable(factory):
        raise RuntimeError("template-mailer was started without a services factory")
    return factory()


def _load_config(services: AppServices, profile: str | None, assignments: tuple[str, ...]) -> Config:
    """Read the profile's configuration and apply ``--set`` assignments.

    Malformed assignments become a usage error (exit code 2).
    """
    config = services.get_config(profile=profile)
    try:
        return apply_overrides(config, assignments)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", default=False, help="Print the full traceback when a command fails")
@click.option("--profile", default=None, help="Configuration profile to load, e.g. 'staging'")
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Override one setting, e.g. mailer.disable_delivery=true (repeatable)",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Resolve notification templates and send them through SendGrid.

    Example:
        >>> from click.testing import CliRunner
        >>> from template_mailer.composition import build_testing
        >>> result = CliRunner().invoke(cli, ["templates", "--format", "json"], obj=build_testing)
        >>> result.exit_code
        0
    """
    services = _create_services(ctx.obj)
    config = _load_config(services, profile, set_overrides)
    services.init_logging(config)
    apply_traceback_preferences(traceback)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )
    logger.debug(
        "CLI configured",
        extra={"profile": profile, "overrides": len(set_overrides), "command": ctx.invoked_subcommand},
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _register_commands() -> None:
    # Command modules import this package, so they load after ``cli`` exists.
    from . import commands

    for name in commands.__all__:
        cli.add_command(getattr(commands, name))


_register_commands()


__all__ = ["cli"]

"""``config``: show the merged ``[sendgrid]``, ``[mailer]`` and ``[lib_log_rich]`` settings."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from template_mailer.domain.enums import OutputFormat

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="human (TOML-like) or json",
)
@click.option("--section", default=None, help="Only this section, e.g. 'sendgrid' or 'mailer'")
@click.option("--profile", default=None, help="Show another profile; root --set values still apply")
@click.pass_context
def cli_config(ctx: click.Context, output_format: str, section: str | None, profile: str | None) -> None:
    """Show the configuration the mailer would run with.

    Layers, lowest first: bundled defaults, app, host, user, .env,
    environment variables. The SendGrid API key is masked.
    """
    cli_ctx = get_cli_context(ctx)
    config, shown_profile = cli_ctx.config_for(profile)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(job_id="cli-config", extra={"command": "config", "profile": shown_profile}):
        logger.info("Displaying configuration", extra={"format": fmt.value, "section": section})
        click.echo()
        try:
            cli_ctx.services.display_config(config, output_format=fmt, section=section, profile=shown_profile)
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


__all__ = ["cli_config"]

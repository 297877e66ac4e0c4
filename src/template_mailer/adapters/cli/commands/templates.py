"""Template catalog CLI commands.

Contents:
    * :func:`cli_templates` - List templates or show one configuration.
    * :func:`cli_check_templates` - Audit the catalog for consistency problems.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import lib_log_rich.runtime
import rich_click as click

from template_mailer.adapters.templates.store import TemplateStore
from template_mailer.domain.catalog import audit_templates
from template_mailer.domain.enums import OutputFormat
from template_mailer.domain.errors import ConfigError
from template_mailer.domain.models import TemplateConfig

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode
from ._common import echo_json, execute_with_mailer_error_handling

logger = logging.getLogger(__name__)


def _load_store(cli_ctx: CLIContext, templates_file: str | None) -> TemplateStore:
    """Load the catalog from ``templates_file``, ``mailer.templates_file`` or the bundled one."""
    if templates_file:
        return cli_ctx.services.load_template_store(Path(templates_file))
    try:
        mailer = cli_ctx.services.load_mailer_config_from_dict(cli_ctx.config.as_dict())
    except ValueError as exc:
        raise ConfigError(f"Invalid mailer configuration: {exc}") from exc
    return cli_ctx.services.load_template_store(mailer.templates_file)


def _template_to_dict(config: TemplateConfig) -> dict[str, Any]:
    result: dict[str, Any] = {
        "name": config.name,
        "template_params": list(config.template_params),
        "languages": {
            code: {"template_id": entry.template_id, "categories": list(entry.categories)}
            for code, entry in config.languages.items()
        },
        "categories": list(config.categories),
    }
    if config.sender is not None:
        result["from"] = {"email": config.sender.email, "name": config.sender.name}
    if config.reply_to is not None:
        result["reply_to"] = {"email": config.reply_to.email, "name": config.reply_to.name}
    if config.bcc:
        result["bcc"] = list(config.bcc)
    if config.cc:
        result["cc"] = list(config.cc)
    return result


def _echo_template(config: TemplateConfig) -> None:
    click.echo(f"Template: {config.name}")
    click.echo(f"  Parameters: {', '.join(config.template_params) or '-'}")
    click.echo(f"  Categories: {', '.join(config.categories) or '-'}")
    if config.sender is not None:
        click.echo(f"  From:       {config.sender.email} ({config.sender.name or '-'})")
    if config.reply_to is not None:
        click.echo(f"  Reply-To:   {config.reply_to.email} ({config.reply_to.name or '-'})")
    if config.bcc:
        click.echo(f"  Bcc:        {', '.join(config.bcc)}")
    if config.cc:
        click.echo(f"  Cc:         {', '.join(config.cc)}")
    click.echo("  Languages:")
    for code, entry in sorted(config.languages.items()):
        extra = f" [{', '.join(entry.categories)}]" if entry.categories else ""
        click.echo(f"    {code}: {entry.template_id}{extra}")


@click.command("templates", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--name", "template_name", default=None, help="Show the configuration of a single template")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)
@click.option(
    "--templates-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Template catalog JSON (defaults to mailer.templates_file or the bundled catalog)",
)
@click.pass_context
def cli_templates(ctx: click.Context, template_name: str | None, output_format: str, templates_file: str | None) -> None:
    """List configured email templates, or show one template in detail.

    Example:
        >>> from click.testing import CliRunner
        >>> runner = CliRunner()
        >>> # Real invocation tested in test_cli_templates.py
    """
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())
    extra = {"command": "templates", "template": template_name, "format": fmt.value}

    def _show() -> None:
        store = _load_store(cli_ctx, templates_file)
        if template_name is not None:
            config = store.lookup(template_name)
            if fmt is OutputFormat.JSON:
                echo_json(_template_to_dict(config))
            else:
                _echo_template(config)
            return
        if fmt is OutputFormat.JSON:
            echo_json(store.names())
            return
        for name in store.names():
            languages = ", ".join(sorted(store.lookup(name).languages))
            click.echo(f"{name}  ({languages})")

    with lib_log_rich.runtime.bind(job_id="cli-templates", extra=extra):
        logger.info("Listing templates", extra={"template": template_name})
        execute_with_mailer_error_handling(_show, command="templates")


@click.command("check-templates", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--file",
    "templates_file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Template catalog JSON to check (defaults to mailer.templates_file or the bundled catalog)",
)
@click.pass_context
def cli_check_templates(ctx: click.Context, templates_file: str | None) -> None:
    """Check the template catalog for missing languages and duplicate template ids.

    Exits with code 78 when the catalog cannot be loaded or has problems.
    """
    cli_ctx = get_cli_context(ctx)

    with lib_log_rich.runtime.bind(job_id="cli-check-templates", extra={"command": "check-templates"}):
        store = execute_with_mailer_error_handling(
            lambda: _load_store(cli_ctx, templates_file), command="check-templates"
        )
        problems = audit_templates(store.templates)
        if problems:
            logger.error("Template catalog has problems", extra={"problems": problems})
            click.echo(f"\n{len(problems)} problem(s) found:", err=True)
            for problem in problems:
                click.echo(f"  - {problem}", err=True)
            raise SystemExit(ExitCode.CONFIG_ERROR)
        logger.info("Template catalog is consistent", extra={"templates": len(store)})
        click.echo(f"All {len(store)} templates are consistent.")


__all__ = ["cli_check_templates", "cli_templates"]

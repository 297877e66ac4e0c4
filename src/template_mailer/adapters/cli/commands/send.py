"""Resolve and send templated email from the command line.

Contents:
    * :func:`cli_resolve` - Print the resolved message without sending.
    * :func:`cli_send` - Resolve and deliver through SendGrid.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from template_mailer.adapters.sendgrid.validation import validate_recipient
from template_mailer.domain.models import ResolvedMessage

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ._common import (
    build_resolver,
    echo_json,
    execute_with_mailer_error_handling,
    load_attachments,
    message_to_dict,
    parse_params,
    template_options,
)

logger = logging.getLogger(__name__)


@click.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@template_options
@click.pass_context
def cli_resolve(
    ctx: click.Context,
    template_name: str,
    recipient_email: str,
    recipient_name: str | None,
    language: str,
    params: tuple[str, ...],
    attachments: tuple[str, ...],
    templates_file: str | None,
) -> None:
    """Resolve a template request and print the message as JSON.

    Nothing is sent and no API key is required.

    Example:
        >>> from click.testing import CliRunner
        >>> runner = CliRunner()
        >>> # Real invocation tested in test_cli_send.py
    """
    cli_ctx = get_cli_context(ctx)
    parameters = parse_params(params)
    extra = {"command": "resolve", "template": template_name, "language": language}

    def _resolve() -> ResolvedMessage:
        validate_recipient(recipient_email)
        resolver = build_resolver(cli_ctx, templates_file=templates_file, disable_delivery=True)
        return resolver.resolve_template(
            template_name,
            recipient_name,
            recipient_email,
            language,
            parameters,
            load_attachments(attachments),
        )

    with lib_log_rich.runtime.bind(job_id="cli-resolve", extra=extra):
        message = execute_with_mailer_error_handling(_resolve, command="resolve")
        echo_json(message_to_dict(message))


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@template_options
@click.option(
    "--disable-delivery/--enable-delivery",
    "disable_delivery",
    default=None,
    help="Skip or force delivery (default: mailer.disable_delivery)",
)
@click.pass_context
def cli_send(
    ctx: click.Context,
    template_name: str,
    recipient_email: str,
    recipient_name: str | None,
    language: str,
    params: tuple[str, ...],
    attachments: tuple[str, ...],
    templates_file: str | None,
    disable_delivery: bool | None,
) -> None:
    """Resolve a template request and deliver it through SendGrid.

    Example:
        >>> from click.testing import CliRunner
        >>> runner = CliRunner()
        >>> # Real invocation tested in test_cli_send.py
    """
    cli_ctx = get_cli_context(ctx)
    parameters = parse_params(params)
    extra = {"command": "send", "template": template_name, "language": language, "recipient": recipient_email}

    def _send() -> None:
        validate_recipient(recipient_email)
        resolver = build_resolver(cli_ctx, templates_file=templates_file, disable_delivery=disable_delivery)
        message = resolver.resolve_template(
            template_name,
            recipient_name,
            recipient_email,
            language,
            parameters,
            load_attachments(attachments),
        )
        response = resolver.send(message)
        if response is None:
            click.echo(f"\nDelivery disabled; {message.template_name} ({message.template_id}) was not sent.")
            return
        logger.info(
            "Email sent via CLI",
            extra={"template": message.template_name, "status_code": response.status_code},
        )
        suffix = f", message id {response.message_id}" if response.message_id else ""
        click.echo(f"\nEmail sent successfully! (status {response.status_code}{suffix})")

    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):
        execute_with_mailer_error_handling(_send, command="send")


__all__ = ["cli_resolve", "cli_send"]

"""Shared utilities for template and send CLI commands.

Contains ``--param``/``--attach`` parsing, resolver wiring and the
exception-to-exit-code mapping shared between the
``resolve``, ``send``, ``templates`` and ``check-templates`` commands.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, NoReturn, TypeVar

import orjson
import rich_click as click

from template_mailer.adapters.config.overrides import coerce_value, split_assignment
from template_mailer.adapters.sendgrid.attachments import attachment_from_path
from template_mailer.adapters.sendgrid.payload import identity_to_dict, plain_data
from template_mailer.application.resolver import TemplateResolver
from template_mailer.domain.errors import (
    ConfigError,
    DeliveryError,
    MailerError,
    UnknownTemplateError,
)
from template_mailer.domain.models import Attachment, ResolvedMessage

from ..constants import DEVELOPMENT_MODE_ENV
from ..context import CLIContext
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_params(raw_params: Sequence[str]) -> dict[str, Any]:
    """Parse repeatable ``KEY=VALUE`` options into a parameter mapping.

    Values are decoded like ``--set`` values, but only booleans and JSON
    objects are kept; everything else (numbers, dates, ``null``) stays the
    raw string, since templates accept strings, booleans and mappings.

    Raises:
        click.BadParameter: An entry has no ``=`` or an empty key.

    Examples:
        >>> parse_params(["plan_name=DJ Pro", "trial=true"])
        {'plan_name': 'DJ Pro', 'trial': True}
        >>> parse_params(["subscription_end_date=2024-06-01", "seats=3"])
        {'subscription_end_date': '2024-06-01', 'seats': '3'}
        >>> parse_params(['shop={"city": "Auckland"}'])
        {'shop': {'city': 'Auckland'}}
    """
    params: dict[str, Any] = {}
    for raw in raw_params:
        try:
            key, value = split_assignment(raw)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--param") from exc
        coerced = coerce_value(value)
        params[key] = coerced if isinstance(coerced, (bool, dict)) else value
    return params


def load_attachments(paths: Sequence[str]) -> list[Attachment]:
    """Read attachment files given on the command line.

    Raises:
        FileNotFoundError: A file does not exist.
    """
    return [attachment_from_path(Path(path)) for path in paths]


def build_resolver(
    cli_ctx: CLIContext,
    *,
    templates_file: str | None = None,
    disable_delivery: bool | None = None,
) -> TemplateResolver:
    """Wire a resolver from the stored configuration and CLI overrides."""
    return cli_ctx.services.build_resolver(
        cli_ctx.config,
        templates_file=Path(templates_file) if templates_file else None,
        disable_delivery=disable_delivery,
    )


def message_to_dict(message: ResolvedMessage) -> dict[str, Any]:
    """Convert a resolved message to a JSON-ready dict (attachment bodies omitted)."""
    return {
        "template_name": message.template_name,
        "template_id": message.template_id,
        "language": message.language,
        "from": identity_to_dict(message.sender),
        "reply_to": identity_to_dict(message.reply_to) if message.reply_to else None,
        "to": identity_to_dict(message.recipient),
        "cc": list(message.cc),
        "bcc": list(message.bcc),
        "categories": list(message.categories),
        "parameters": plain_data(message.parameters),
        "attachments": [attachment.filename for attachment in message.attachments],
    }


def echo_json(data: Any) -> None:
    """Write ``data`` as indented JSON to stdout."""
    click.echo(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8"))


def execute_with_mailer_error_handling(operation: Callable[[], T], *, command: str) -> T:
    """Run a command body and map mailer errors onto exit codes.

    Exception Priority Order:
        1. ConfigError -> CONFIG_ERROR (78)
        2. UnknownTemplateError, parameter and recipient errors (ValueError)
           -> INVALID_ARGUMENT (22)
        3. FileNotFoundError -> FILE_NOT_FOUND (2) for missing attachments
        4. DeliveryError -> DELIVERY_FAILURE (69)
        5. Any other MailerError or Exception -> GENERAL_ERROR (1)

    Set ``DEVELOPMENT_MODE`` to re-raise unexpected exceptions with their
    full traceback.

    Raises:
        SystemExit: On any handled error.
    """
    try:
        return operation()
    except ConfigError as exc:
        _fail(exc, "Configuration error", command=command, exit_code=ExitCode.CONFIG_ERROR)
    except (UnknownTemplateError, ValueError) as exc:
        _fail(exc, "Invalid request", command=command, exit_code=ExitCode.INVALID_ARGUMENT)
    except FileNotFoundError as exc:
        _fail(exc, "Attachment file not found", command=command, exit_code=ExitCode.FILE_NOT_FOUND)
    except DeliveryError as exc:
        _fail(exc, "Delivery failed", command=command, exit_code=ExitCode.DELIVERY_FAILURE)
    except MailerError as exc:
        _fail(exc, "Mailer error", command=command, exit_code=ExitCode.GENERAL_ERROR)
    except Exception as exc:
        if os.environ.get(DEVELOPMENT_MODE_ENV):
            raise
        _fail(exc, "Unexpected error", command=command, exit_code=ExitCode.GENERAL_ERROR, log_traceback=True)


def _fail(
    exc: Exception,
    user_message: str,
    *,
    command: str,
    exit_code: ExitCode,
    log_traceback: bool = False,
) -> NoReturn:
    logger.error(
        "%s failed: %s",
        command,
        user_message,
        extra={"error": str(exc), "error_type": type(exc).__name__, "exit_code": int(exit_code)},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code)


def template_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Apply the options shared by ``resolve`` and ``send``."""
    options = [
        click.option("--template", "template_name", required=True, help="Template name from the catalog"),
        click.option("--to", "recipient_email", required=True, help="Recipient email address"),
        click.option("--name", "recipient_name", default=None, help="Recipient display name"),
        click.option(
            "--language",
            default="",
            show_default=False,
            help="Language code; unknown or empty falls back to 'en'",
        ),
        click.option(
            "--param",
            "params",
            multiple=True,
            default=(),
            metavar="KEY=VALUE",
            help="Template parameter (repeatable; JSON values such as true or {...} are decoded)",
        ),
        click.option(
            "--attach",
            "attachments",
            multiple=True,
            default=(),
            type=click.Path(dir_okay=False),
            help="Attach a file (repeatable)",
        ),
        click.option(
            "--templates-file",
            default=None,
            type=click.Path(dir_okay=False),
            help="Template catalog JSON (defaults to mailer.templates_file or the bundled catalog)",
        ),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


__all__ = [
    "build_resolver",
    "echo_json",
    "execute_with_mailer_error_handling",
    "load_attachments",
    "message_to_dict",
    "parse_params",
    "template_options",
]

"""``info``: print the installed package metadata."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from template_mailer import __init__conf__

from ..constants import CLICK_CONTEXT_SETTINGS

logger = logging.getLogger(__name__)


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Show name, version, homepage and author of template-mailer."""
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.info("Displaying package information", extra={"version": __init__conf__.version})
        __init__conf__.print_info()


__all__ = ["cli_info"]

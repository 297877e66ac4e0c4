"""The ``template-mailer`` command line.

``main`` is the process entry; ``cli`` is the rich-click group that the
``info``, ``config``, ``templates``, ``check-templates``, ``resolve`` and
``send`` commands register on.
"""

from __future__ import annotations

from .commands import (
    cli_check_templates,
    cli_config,
    cli_info,
    cli_resolve,
    cli_send,
    cli_templates,
)
from .constants import CLICK_CONTEXT_SETTINGS, DEVELOPMENT_MODE_ENV, TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    CLIContext,
    TracebackState,
    apply_traceback_preferences,
    get_cli_context,
    restore_traceback_state,
    snapshot_traceback_state,
    store_cli_context,
)
from .exit_codes import ExitCode
from .main import main
from .root import cli

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "DEVELOPMENT_MODE_ENV",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "CLIContext",
    "ExitCode",
    "TracebackState",
    "apply_traceback_preferences",
    "cli",
    "cli_check_templates",
    "cli_config",
    "cli_info",
    "cli_resolve",
    "cli_send",
    "cli_templates",
    "get_cli_context",
    "main",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]

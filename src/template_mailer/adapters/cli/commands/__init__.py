"""CLI command implementations.

Collects all subcommand functions and re-exports them for registration
with the root CLI group.

Contents:
    * Info command from :mod:`.info`
    * Config command from :mod:`.config`
    * Catalog commands from :mod:`.templates`
    * Resolve and send commands from :mod:`.send`
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .send import cli_resolve, cli_send
from .templates import cli_check_templates, cli_templates

__all__ = [
    "cli_check_templates",
    "cli_config",
    "cli_info",
    "cli_resolve",
    "cli_send",
    "cli_templates",
]

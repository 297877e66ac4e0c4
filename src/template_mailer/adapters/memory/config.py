"""Configuration ports backed by a fixed in-memory document.

The document mirrors ``defaultconfig.toml`` except that delivery is
disabled, so no SendGrid key is ever needed.
"""

from __future__ import annotations

import copy
from typing import Any

from lib_layered_config import Config

from ...domain.enums import OutputFormat

IN_MEMORY_SETTINGS: dict[str, Any] = {
    "sendgrid": {"api_key": "", "host": "https://api.sendgrid.com", "timeout": 30.0},
    "mailer": {
        "disable_delivery": True,
        "templates_file": "",
        "default_from_email": "no-reply@serato.com",
        "default_from_name": "Serato",
    },
    "lib_log_rich": {"environment": "test"},
}


def get_config_in_memory(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Return a fresh copy of :data:`IN_MEMORY_SETTINGS`; profile and start_dir are ignored."""
    return Config(copy.deepcopy(IN_MEMORY_SETTINGS), {})


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    pass


__all__ = [
    "IN_MEMORY_SETTINGS",
    "display_config_in_memory",
    "get_config_in_memory",
]

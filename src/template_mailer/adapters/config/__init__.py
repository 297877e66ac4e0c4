"""Settings for the mailer: layered loading, ``--set`` overrides and redacted display."""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path
from .overrides import apply_overrides

__all__ = [
    "apply_overrides",
    "display_config",
    "get_config",
    "get_default_config_path",
]

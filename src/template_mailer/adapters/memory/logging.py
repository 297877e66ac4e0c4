"""Logging port that leaves ``lib_log_rich`` untouched."""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """Accept the config and start nothing, so tests keep pytest's log capture."""


__all__ = ["init_logging_in_memory"]

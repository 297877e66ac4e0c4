"""Enumerations shared by the mailer layers."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """How ``config`` and ``templates`` print their results.

    Example:
        >>> OutputFormat("json") is OutputFormat.JSON
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = ["OutputFormat"]

"""Constants shared by the ``template-mailer`` commands."""

from __future__ import annotations

from typing import Final

CLICK_CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {"help_option_names": ["-h", "--help"]}

#: Characters of traceback printed without ``--traceback``.
TRACEBACK_SUMMARY_LIMIT: Final[int] = 500

#: Characters of traceback printed with ``--traceback``.
TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

#: When set, unexpected errors inside mailer commands propagate unformatted.
DEVELOPMENT_MODE_ENV: Final[str] = "DEVELOPMENT_MODE"

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "DEVELOPMENT_MODE_ENV",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
]

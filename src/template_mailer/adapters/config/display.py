"""Print the merged configuration through ``lib_layered_config``.

The library masks secret-looking keys such as ``sendgrid.api_key``; pending
log records are flushed first so they do not interleave with the output.
"""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from template_mailer.domain.enums import OutputFormat


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Render ``config`` as TOML-like text or JSON.

    Args:
        config: Layered configuration after ``--profile`` and ``--set``.
        output_format: ``HUMAN`` or ``JSON``.
        section: Only ``sendgrid``, ``mailer`` or ``lib_log_rich`` when given.
        console: Rich console to write to, mainly for tests.
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: The requested section does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    _lib_display(
        config,
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["display_config"]

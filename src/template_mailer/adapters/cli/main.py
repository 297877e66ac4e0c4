"""Process-level entry for the ``template-mailer`` CLI.

Mailer commands translate their own errors into exit codes. Whatever
escapes them (usage errors, interrupts, bugs) is reported here through
``lib_cli_exit_tools``.

Contents:
    * :func:`main` - Run the CLI and return its exit code.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from template_mailer import __init__conf__

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import restore_traceback_state, snapshot_traceback_state

if TYPE_CHECKING:
    from template_mailer.composition import AppServices


def _report_crash(exc: BaseException) -> int:
    verbose = snapshot_traceback_state().traceback
    lib_cli_exit_tools.print_exception_message(
        trace_back=verbose,
        length_limit=TRACEBACK_VERBOSE_LIMIT if verbose else TRACEBACK_SUMMARY_LIMIT,
    )
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _invoke(args: list[str], services_factory: Callable[[], AppServices]) -> int:
    # run_cli has no way to pass ctx.obj, so click runs non-standalone here.
    from .root import cli

    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, obj=services_factory, standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:  # SystemExit and KeyboardInterrupt end here too
        return _report_crash(exc)
    return 0


def _stop_log_runtime() -> None:
    if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run ``template-mailer`` and return its exit code.

    Args:
        argv: Arguments without the program name; ``sys.argv[1:]`` when None.
        restore_traceback: Put the ``--traceback`` switches back afterwards.
        services_factory: ``build_production`` for real delivery,
            ``build_testing`` for the in-memory spy.

    Raises:
        ValueError: ``services_factory`` is missing.

    Example:
        >>> from template_mailer.composition import build_testing
        >>> main(["check-templates"], services_factory=build_testing)  # doctest: +SKIP
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    saved = snapshot_traceback_state()
    try:
        return _invoke(list(sys.argv[1:] if argv is None else argv), services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(saved)
        _stop_log_runtime()


__all__ = ["main"]

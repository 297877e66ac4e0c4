"""Exit codes of the ``template-mailer`` commands."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit status per failure family.

    ``FILE_NOT_FOUND`` and ``INVALID_ARGUMENT`` follow errno (ENOENT,
    EINVAL); ``DELIVERY_FAILURE`` and ``CONFIG_ERROR`` follow sysexits.h
    (EX_UNAVAILABLE, EX_CONFIG). The 128+N signal codes are produced by
    ``lib_cli_exit_tools`` and listed for reference.

    Example:
        >>> int(ExitCode.DELIVERY_FAILURE)
        69
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    #: missing ``--attach`` file
    FILE_NOT_FOUND = 2
    #: unknown template, bad parameters, malformed recipient
    INVALID_ARGUMENT = 22
    #: SendGrid rejected the message or could not be reached
    DELIVERY_FAILURE = 69
    #: invalid settings, missing API key, broken template catalog
    CONFIG_ERROR = 78
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]

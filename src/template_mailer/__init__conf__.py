"""Static package metadata and layered-configuration identifiers.

The version line is kept in sync with ``pyproject.toml``.
"""

from __future__ import annotations

name = "template_mailer"
title = "Resolve templated notifications into SendGrid-ready messages"
version = "1.0.0"
author = "Serato"
author_email = "no-reply@serato.com"
shell_command = "template-mailer"

#: Identifiers used by lib_layered_config to locate configuration files.
LAYEREDCONF_VENDOR = "serato"
LAYEREDCONF_APP = "template-mailer"
LAYEREDCONF_SLUG = "template-mailer"


def print_info() -> None:
    """Print the summarised metadata block for the CLI ``info`` command."""
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))

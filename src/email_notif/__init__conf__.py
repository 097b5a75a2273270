"""Static package metadata surfaced to CLI commands and documentation.

Values are kept in sync with ``pyproject.toml`` on release. The
``LAYEREDCONF_*`` identifiers determine where lib_layered_config looks for
configuration files on each platform.
"""

from __future__ import annotations

import click

name = "email_notif"
title = "Email notifications for long-running processes"
version = "0.2.0"
author = "email-notif contributors"
shell_command = "email-notif"

#: Vendor, application and slug used for configuration discovery.
LAYEREDCONF_VENDOR = "email-notif"
LAYEREDCONF_APP = "email-notif"
LAYEREDCONF_SLUG = "email-notif"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for email_notif:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    click.echo("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]

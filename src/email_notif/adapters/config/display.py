"""Render the loaded configuration for the ``config`` command."""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from email_notif.domain.enums import OutputFormat

#: Keys whose values are masked before display.
REDACTED_KEYS = frozenset({"secret", "password"})
REDACTED_VALUE = "[REDACTED]"


def _redact(config: Config) -> Config:
    """Return ``config`` with SMTP secrets masked.

    Example:
        >>> cfg = Config({"email": {"secret": "hunter2", "port": 25}}, {})
        >>> _redact(cfg)["email"]["secret"]
        '[REDACTED]'
    """
    email_section = config.as_dict().get("email")
    if not isinstance(email_section, dict):
        return config
    masked = {key: REDACTED_VALUE for key, value in email_section.items() if key in REDACTED_KEYS and value}
    if not masked:
        return config
    return config.with_overrides({"email": masked})


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Print configuration as annotated TOML or as JSON.

    Pending log records are flushed first so they do not interleave with
    the output. SMTP secrets are always shown as ``[REDACTED]``.

    Args:
        config: Loaded layered configuration.
        output_format: ``HUMAN`` for TOML with provenance comments, ``JSON``
            for machine-readable output.
        section: Limit output to one top-level section.
        console: Rich console to print to; used by tests.
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: If ``section`` does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    _lib_display(
        _redact(config),
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["display_config"]

"""Exit codes returned by the CLI.

Values follow errno and sysexits.h. ``run`` additionally passes the
monitored command's own status through, with signals reported as 128+N.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes raised via ``SystemExit`` by CLI commands.

    Example:
        >>> int(ExitCode.SMTP_FAILURE)
        69
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENT = 22  # EINVAL
    SMTP_FAILURE = 69  # EX_UNAVAILABLE
    CONFIG_ERROR = 78  # EX_CONFIG


__all__ = ["ExitCode"]

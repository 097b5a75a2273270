"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised before any notifier exists when the settings needed to reach the
    mail server are absent or malformed. Caught at the CLI boundary and
    mapped to ``EX_CONFIG``.

    Example:
        >>> from email_notif.domain.errors import ConfigurationError
        >>> err = ConfigurationError("email.smtp_host is not configured")
        >>> str(err)
        'email.smtp_host is not configured'
    """


class DeliveryError(Exception):
    """Notification delivery failed at SMTP level.

    Raised when the mail server refuses the connection, the login, or the
    message. Under the default delivery failure policy this is fatal for the
    caller of a send operation.

    Example:
        >>> from email_notif.domain.errors import DeliveryError
        >>> err = DeliveryError("Connection refused by smtp.example.com:587")
        >>> str(err)
        'Connection refused by smtp.example.com:587'
    """


class WorkFailedError(RuntimeError):
    """A monitored external command exited with a non-zero status.

    Carries the exit status so the CLI can hand it back to the shell after
    the error notification went out.

    Example:
        >>> err = WorkFailedError(["make", "all"], 2)
        >>> err.returncode
        2
        >>> str(err)
        "Command ['make', 'all'] exited with status 2"
    """

    def __init__(self, command: list[str], returncode: int) -> None:
        super().__init__(f"Command {command!r} exited with status {returncode}")
        self.command = command
        self.returncode = returncode


__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "WorkFailedError",
]

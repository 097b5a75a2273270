"""Type-safe domain enums for notifications, delivery policy and output formats."""

from __future__ import annotations

from enum import Enum


class NotificationKind(str, Enum):
    """The three kinds of outbound notification.

    Attributes:
        UPDATE: Progress message sent any number of times during a run.
        SUCCESS: Terminal message for a run that returned normally.
        ERROR: Terminal message for a run that raised.

    Example:
        >>> NotificationKind.UPDATE.value
        'update'
        >>> NotificationKind.ERROR.is_terminal
        True
    """

    UPDATE = "update"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        """Return True for the kinds that end a captured run."""
        return self is not NotificationKind.UPDATE


class DeliveryFailurePolicy(str, Enum):
    """What a send operation does when the mail server rejects a message.

    Inherits from str so TOML and ``--set`` values compare directly.

    Attributes:
        RAISE: Raise :class:`~email_notif.domain.errors.DeliveryError`.
        WARN: Log a warning and report ``False`` to the caller.

    Example:
        >>> DeliveryFailurePolicy("warn") is DeliveryFailurePolicy.WARN
        True
        >>> DeliveryFailurePolicy.RAISE == "raise"
        True
    """

    RAISE = "raise"
    WARN = "warn"


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = [
    "DeliveryFailurePolicy",
    "NotificationKind",
    "OutputFormat",
]

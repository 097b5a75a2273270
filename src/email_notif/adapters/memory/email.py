"""In-memory email adapters for testing.

Provides email functions that satisfy the same Protocols as production
adapters but perform no SMTP operations.

Contents:
    * :class:`NotificationSpy` - Captures notification sends for test assertions.
    * :func:`load_email_config_from_dict_in_memory` - In-memory config loader.
    * :func:`load_email_config_from_json_in_memory` - Settings-file loader that reads nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..email.config import EmailConfig


def _empty_notification_list() -> list[dict[str, Any]]:
    """Create an empty typed list for notification records."""
    return []


@dataclass
class NotificationSpy:
    """Captures notification sends for test assertions.

    Each test should create its own NotificationSpy instance to avoid
    cross-test pollution. ``send_notification`` matches the
    SendNotification port signature.

    Attributes:
        sent_notifications: Captured send_notification calls, in call order.
        should_fail: When True, sends return False to simulate a rejected message.
        raise_exception: When set, sends raise this exception after recording.

    Example:
        >>> spy = NotificationSpy()
        >>> config = EmailConfig(smtp_host="smtp.test.com")
        >>> spy.send_notification(config=config, subject="Hi", message="Hello")
        True
        >>> spy.subjects
        ['Hi']
    """

    sent_notifications: list[dict[str, Any]] = field(default_factory=_empty_notification_list)
    should_fail: bool = False
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent_notifications.clear()
        self.raise_exception = None

    @property
    def subjects(self) -> list[str]:
        """Subjects of every captured send, in order."""
        return [sent["subject"] for sent in self.sent_notifications]

    def send_notification(
        self,
        *,
        config: EmailConfig,
        subject: str,
        message: str,
    ) -> bool:
        """Record the call and return success/failure based on spy state.

        Args:
            config: Email configuration (captured for assertions).
            subject: Notification subject line.
            message: Notification message body.

        Returns:
            False if should_fail is True, otherwise True.

        Raises:
            Exception: If raise_exception is set, raises that exception.
        """
        self.sent_notifications.append(
            {
                "config": config,
                "subject": subject,
                "message": message,
            }
        )
        if self.raise_exception is not None:
            raise self.raise_exception
        return not self.should_fail


def load_email_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
) -> EmailConfig:
    """Parse email config from dict using the real Pydantic model."""
    email_raw = config_dict.get("email", {})
    return EmailConfig.model_validate(email_raw if email_raw else {})


def load_email_config_from_json_in_memory(path: Path) -> EmailConfig:
    """Return an empty EmailConfig without touching the filesystem."""
    return EmailConfig()


__all__ = [
    "NotificationSpy",
    "load_email_config_from_dict_in_memory",
    "load_email_config_from_json_in_memory",
]

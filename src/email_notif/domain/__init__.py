"""Domain layer - pure notification logic with no I/O or framework dependencies.

Contents:
    * :mod:`.notifications` - Notification value object and subject/body builders
    * :mod:`.outcome` - Result type used by the capture wrapper
    * :mod:`.enums` - Domain enumerations (NotificationKind, DeliveryFailurePolicy, OutputFormat)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .enums import DeliveryFailurePolicy, NotificationKind, OutputFormat
from .errors import ConfigurationError, DeliveryError, WorkFailedError
from .notifications import Notification, build_error, build_success, build_update
from .outcome import Outcome

__all__ = [
    # Notifications
    "Notification",
    "build_error",
    "build_success",
    "build_update",
    "Outcome",
    # Enums
    "DeliveryFailurePolicy",
    "NotificationKind",
    "OutputFormat",
    # Errors
    "ConfigurationError",
    "DeliveryError",
    "WorkFailedError",
]

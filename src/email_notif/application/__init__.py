"""Application layer - the notifier service and port definitions.

Contents:
    * :mod:`.notifier` - EmailNotifier, the wrap-and-notify service
    * :mod:`.settings` - which email settings a notifier is built with
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
"""

from __future__ import annotations

from .notifier import EmailNotifier
from .ports import (
    DisplayConfig,
    GetConfig,
    InitLogging,
    LoadEmailConfigFromDict,
    LoadEmailConfigFromJson,
    SendNotification,
)
from .settings import resolve_email_config

__all__ = [
    "DisplayConfig",
    "EmailNotifier",
    "GetConfig",
    "InitLogging",
    "LoadEmailConfigFromDict",
    "LoadEmailConfigFromJson",
    "SendNotification",
    "resolve_email_config",
]

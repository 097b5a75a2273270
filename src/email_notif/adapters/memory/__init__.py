"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no SMTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.email` - In-memory email adapters (NotificationSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import (
    display_config_in_memory,
    get_config_in_memory,
)
from .email import (
    NotificationSpy,
    load_email_config_from_dict_in_memory,
    load_email_config_from_json_in_memory,
)
from .logging import init_logging_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from email_notif.application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadEmailConfigFromDict,
        LoadEmailConfigFromJson,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_load_email_config: LoadEmailConfigFromDict = load_email_config_from_dict_in_memory
    _assert_load_email_config_json: LoadEmailConfigFromJson = load_email_config_from_json_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory

__all__ = [
    "NotificationSpy",
    "display_config_in_memory",
    "get_config_in_memory",
    "init_logging_in_memory",
    "load_email_config_from_dict_in_memory",
    "load_email_config_from_json_in_memory",
]

"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config
from ..adapters.email.config import (
    EmailConfig,
    legacy_config_path,
    load_email_config_from_dict,
    load_email_config_from_json,
)
from ..adapters.email.transport import send_notification
from ..adapters.logging.setup import init_logging
from ..application.notifier import EmailNotifier
from ..application.settings import resolve_email_config

if TYPE_CHECKING:
    from ..adapters.memory.email import NotificationSpy
    from ..application.ports import (
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadEmailConfigFromDict,
        LoadEmailConfigFromJson,
        SendNotification,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_send_notification: SendNotification = send_notification
    _assert_load_email_config_from_dict: LoadEmailConfigFromDict = load_email_config_from_dict
    _assert_load_email_config_from_json: LoadEmailConfigFromJson = load_email_config_from_json
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    send_notification: SendNotification
    load_email_config_from_dict: LoadEmailConfigFromDict
    load_email_config_from_json: LoadEmailConfigFromJson
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        send_notification=send_notification,
        load_email_config_from_dict=load_email_config_from_dict,
        load_email_config_from_json=load_email_config_from_json,
        init_logging=init_logging,
    )


def build_testing(*, spy: NotificationSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: NotificationSpy that records every send. A fresh one is
            created when omitted; pass your own to assert on it.
    """
    from ..adapters.memory import (
        NotificationSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_email_config_from_dict_in_memory,
        load_email_config_from_json_in_memory,
    )

    notification_spy = spy if spy is not None else NotificationSpy()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        send_notification=notification_spy.send_notification,
        load_email_config_from_dict=load_email_config_from_dict_in_memory,
        load_email_config_from_json=load_email_config_from_json_in_memory,
        init_logging=init_logging_in_memory,
    )


def create_notifier(
    tag: object,
    *,
    config: EmailConfig | None = None,
    config_path: Path | None = None,
    profile: str | None = None,
    services: AppServices | None = None,
    legacy_path: Path | None = None,
) -> EmailNotifier:
    """Build an :class:`EmailNotifier` for ``tag``.

    Without ``config`` the settings come from ``config_path``, else the
    ``[email]`` section of the layered configuration, else the per-user
    ``~/.email_notifier.json``.

    Args:
        tag: Name of the monitored process.
        config: Ready-made configuration; skips all loading.
        config_path: JSON settings file to load.
        profile: Layered configuration profile.
        services: Port implementations; production adapters when omitted.
        legacy_path: Per-user JSON file location, defaults to
            :func:`legacy_config_path`.

    Raises:
        ConfigurationError: When no complete configuration can be found.

    Example:
        >>> notifier = create_notifier("Nightly backup")  # doctest: +SKIP
        >>> notifier.capture(lambda n: run_backup())  # doctest: +SKIP
    """
    wired = services if services is not None else build_production()
    if config is None:
        config = resolve_email_config(
            wired.get_config(profile=profile).as_dict(),
            load_from_dict=wired.load_email_config_from_dict,
            load_from_json=wired.load_email_config_from_json,
            legacy_path=legacy_path if legacy_path is not None else legacy_config_path(),
            config_path=config_path,
        )
    return EmailNotifier(tag, config, send=wired.send_notification)


__all__ = [
    # Configuration
    "get_config",
    "display_config",
    # Email
    "send_notification",
    "load_email_config_from_dict",
    "load_email_config_from_json",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
    "create_notifier",
]

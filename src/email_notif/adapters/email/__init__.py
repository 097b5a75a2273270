"""Email adapter - SMTP notification delivery.

Structure:
    * :mod:`.config` - Email configuration model and loaders
    * :mod:`.transport` - SMTP send function

Contents:
    * :class:`.config.EmailConfig` - Email configuration container
    * :func:`.config.load_email_config_from_dict` - Layered config loader
    * :func:`.config.load_email_config_from_json` - JSON settings file loader
    * :func:`.transport.send_notification` - One plain-text delivery attempt
"""

from __future__ import annotations

from .config import (
    EmailConfig,
    legacy_config_path,
    load_email_config_from_dict,
    load_email_config_from_json,
)
from .transport import send_notification

__all__ = [
    "EmailConfig",
    "legacy_config_path",
    "load_email_config_from_dict",
    "load_email_config_from_json",
    "send_notification",
]

"""Email notifications for long-running processes.

Public surface:

- :func:`create_notifier` builds a notifier from layered configuration
  (or the per-user ``~/.email_notifier.json``).
- :class:`EmailNotifier` sends tagged update, success and error emails and
  wraps work with :meth:`EmailNotifier.capture`.
- :class:`EmailConfig` holds the SMTP settings.
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Configuration model
from .adapters.email.config import EmailConfig

# Application
from .application.notifier import EmailNotifier

# Composition exports (wired adapters)
from .composition import create_notifier, get_config

# Domain exports
from .domain.errors import ConfigurationError, DeliveryError, WorkFailedError

__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "EmailConfig",
    "EmailNotifier",
    "WorkFailedError",
    "create_notifier",
    "get_config",
    "print_info",
]

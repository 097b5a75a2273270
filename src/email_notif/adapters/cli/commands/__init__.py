"""CLI command implementations.

Contents:
    * Info commands from :mod:`.info`
    * Config command from :mod:`.config`
    * Notification commands from :mod:`.notify`
"""

from __future__ import annotations

from .config import cli_config
from .info import cli_info
from .notify import cli_run, cli_send_update

__all__ = [
    "cli_config",
    "cli_info",
    "cli_run",
    "cli_send_update",
]

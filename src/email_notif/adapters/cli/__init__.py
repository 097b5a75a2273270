"""Command-line interface for email-notif.

Contents:
    * Root command group from :mod:`.root`
    * Entry point from :mod:`.main`
    * Command functions from :mod:`.commands`
    * Click context and traceback helpers from :mod:`.context`
"""

from __future__ import annotations

from .commands import cli_config, cli_info, cli_run, cli_send_update
from .constants import CLICK_CONTEXT_SETTINGS, TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    CLIContext,
    TracebackState,
    apply_traceback_preferences,
    get_cli_context,
    restore_traceback_state,
    snapshot_traceback_state,
    store_cli_context,
)
from .exit_codes import ExitCode
from .main import main
from .root import cli

__all__ = [
    # Constants
    "CLICK_CONTEXT_SETTINGS",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "ExitCode",
    # Context and traceback management
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
    # Root command and entry point
    "cli",
    "main",
    # Commands
    "cli_config",
    "cli_info",
    "cli_run",
    "cli_send_update",
]

"""CLI entry point shared by the console script and ``python -m email_notif``."""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import click
import lib_cli_exit_tools
import lib_log_rich.runtime

from email_notif import __init__conf__

from .constants import TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
)

if TYPE_CHECKING:
    from email_notif.composition import AppServices


def _report_unhandled(exc: BaseException) -> int:
    """Print ``exc`` through lib_cli_exit_tools and return its exit code."""
    verbose = bool(getattr(lib_cli_exit_tools.config, "traceback", False))
    apply_traceback_preferences(verbose)
    lib_cli_exit_tools.print_exception_message(
        trace_back=verbose,
        length_limit=TRACEBACK_VERBOSE_LIMIT if verbose else TRACEBACK_SUMMARY_LIMIT,
    )
    return lib_cli_exit_tools.get_system_exit_code(exc)


def _run_cli(argv: Sequence[str] | None, *, services_factory: Callable[[], AppServices]) -> int:
    """Invoke the root group with the services factory as ``ctx.obj``.

    ``lib_cli_exit_tools.run_cli`` cannot pass ``obj``, so its exit-code
    handling is reproduced here.
    """
    from .root import cli

    try:
        cli.main(
            args=list(argv) if argv is not None else sys.argv[1:],
            prog_name=__init__conf__.shell_command,
            obj=services_factory,
            standalone_mode=False,
        )
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except SystemExit as exc:
        # Commands raise SystemExit after reporting, or to pass a child's status through.
        return lib_cli_exit_tools.get_system_exit_code(exc)
    except BaseException as exc:  # noqa: BLE001
        return _report_unhandled(exc)
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run the CLI and return its exit code.

    Args:
        argv: Arguments without the program name; ``sys.argv[1:]`` when None.
        restore_traceback: Put the traceback flags back afterwards.
        services_factory: Returns the wired AppServices; callers pass
            ``build_production`` (or ``build_testing`` in tests).

    Raises:
        ValueError: If ``services_factory`` is missing.

    Example:
        >>> from email_notif.composition import build_testing
        >>> main(["info"], services_factory=build_testing)  # doctest: +SKIP
        0
    """
    if services_factory is None:
        raise ValueError("services_factory is required. Pass build_production from composition layer.")

    previous_state = snapshot_traceback_state()
    try:
        return _run_cli(argv, services_factory=services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(previous_state)
        # Worker threads must not shut down the process-wide logging runtime.
        if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
            lib_log_rich.runtime.shutdown()


__all__ = ["main"]

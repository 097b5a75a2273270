"""Notification CLI commands.

Contents:
    * :func:`cli_send_update` - Send one update email for a tag.
    * :func:`cli_run` - Run an external command and email its outcome.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import NoReturn

import lib_log_rich.runtime
import rich_click as click
from pydantic import ValidationError

from email_notif.adapters.email.config import legacy_config_path
from email_notif.application.notifier import EmailNotifier
from email_notif.application.settings import resolve_email_config
from email_notif.domain.errors import ConfigurationError, DeliveryError, WorkFailedError

from ..constants import CLICK_CONTEXT_SETTINGS, PASSTHROUGH_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

_config_file_option = click.option(
    "--config-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON settings file to use instead of the [email] configuration section",
)


def normalize_returncode(code: int) -> int:
    """Map ``subprocess`` signal results (negative) to the shell's 128+N.

    Example:
        >>> normalize_returncode(-15)
        143
        >>> normalize_returncode(3)
        3
    """
    if code < 0:
        return 128 + abs(code)
    return code


def run_command(command: list[str]) -> int:
    """Run ``command`` in the foreground, inheriting stdio.

    Returns:
        Zero when the command succeeded.

    Raises:
        WorkFailedError: When the command exits non-zero or dies by signal.
        FileNotFoundError: When the executable does not exist.
    """
    logger.debug("Running monitored command", extra={"command": command})
    result = subprocess.run(command, check=False)  # noqa: S603
    returncode = normalize_returncode(result.returncode)
    if returncode != 0:
        raise WorkFailedError(command, returncode)
    return returncode


def _build_notifier(cli_ctx: CLIContext, tag: str, config_file: Path | None) -> EmailNotifier:
    services = cli_ctx.services
    email_config = resolve_email_config(
        cli_ctx.config.as_dict(),
        load_from_dict=services.load_email_config_from_dict,
        load_from_json=services.load_email_config_from_json,
        legacy_path=legacy_config_path(),
        config_path=config_file,
    )
    return EmailNotifier(tag, email_config, send=services.send_notification)


def _fail(exc: Exception, log_message: str, user_message: str, exit_code: ExitCode) -> NoReturn:
    logger.error(log_message, extra={"error": str(exc), "error_type": type(exc).__name__})
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code) from exc


@contextmanager
def _exit_on_notifier_errors() -> Iterator[None]:
    """Translate configuration and delivery failures into exit codes."""
    try:
        yield
    except ConfigurationError as exc:
        _fail(exc, "Email configuration error", "Configuration error", ExitCode.CONFIG_ERROR)
    except ValidationError as exc:
        _fail(exc, "Invalid email configuration", "Invalid configuration value", ExitCode.INVALID_ARGUMENT)
    except DeliveryError as exc:
        _fail(exc, "SMTP delivery failed", "Failed to send notification", ExitCode.SMTP_FAILURE)


@click.command("send-update", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--tag", required=True, help="Name of the monitored process (used in the subject)")
@click.option("--message", required=True, help="Update text (plain text body)")
@_config_file_option
@click.pass_context
def cli_send_update(ctx: click.Context, tag: str, message: str, config_file: Path | None) -> None:
    """Send one "<TAG> Update" email with the given message."""
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send-update", "tag": tag}

    with lib_log_rich.runtime.bind(job_id="cli-send-update", extra=extra), _exit_on_notifier_errors():
        notifier = _build_notifier(cli_ctx, tag, config_file)
        delivered = notifier.send_update(message)

    if not delivered:
        click.echo("\nUpdate was not delivered.", err=True)
        raise SystemExit(ExitCode.SMTP_FAILURE)
    click.echo("\nUpdate sent.")


@click.command("run", context_settings=PASSTHROUGH_CONTEXT_SETTINGS)
@click.option("--tag", required=True, help="Name of the monitored process (used in the subject)")
@_config_file_option
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_context
def cli_run(ctx: click.Context, tag: str, config_file: Path | None, command: tuple[str, ...]) -> None:
    r"""Run COMMAND and email "<TAG> Complete" or "<TAG> Error!" when it ends.

    The command's exit status is passed through. Put ``--`` before the
    command so its own options are not read as ours:

    \b
        email-notif run --tag "Nightly backup" -- rsync -a /data /backup
    """
    cli_ctx = get_cli_context(ctx)
    argv = list(command)
    extra = {"command": "run", "tag": tag, "argv": argv}

    with lib_log_rich.runtime.bind(job_id="cli-run", extra=extra):
        with _exit_on_notifier_errors():
            notifier = _build_notifier(cli_ctx, tag, config_file)
        logger.info("Running monitored command", extra={"argv": argv})
        try:
            with _exit_on_notifier_errors():
                notifier.capture(lambda _notifier: run_command(argv))
        except WorkFailedError as exc:
            logger.warning("Monitored command failed", extra={"returncode": exc.returncode})
            raise SystemExit(exc.returncode) from exc


__all__ = ["cli_run", "cli_send_update", "normalize_returncode", "run_command"]

"""Shared pytest fixtures for notifier, CLI and module-entry tests."""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner
from lib_layered_config import Config

if TYPE_CHECKING:
    from email_notif.adapters.email.config import EmailConfig
    from email_notif.adapters.memory.email import NotificationSpy
    from email_notif.application.notifier import EmailNotifier
    from email_notif.composition import AppServices

_COVERAGE_BASENAME = ".coverage.email_notif"


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Keep the coverage database on a local temp directory.

    Runs before pytest-cov creates its ``Coverage()`` object, so the
    ``COVERAGE_FILE`` value applies however pytest is invoked.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _load_dotenv() -> None:
    """Load .env file when it exists for integration test configuration."""
    from dotenv import load_dotenv

    env_file = Path(__file__).parent.parent / ".env"
    if env_file.exists():
        load_dotenv(env_file)


_load_dotenv()

ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-?]*[ -/]*[@-~]")
CONFIG_FIELDS: tuple[str, ...] = tuple(field.name for field in fields(type(lib_cli_exit_tools.config)))

#: A complete ``[email]`` section, as it would appear in a TOML file.
COMPLETE_EMAIL_SECTION: dict[str, Any] = {
    "smtp_host": "smtp.test.com",
    "port": 587,
    "sender_address": "sender@test.com",
    "secret": "s3cr3t",
    "recipient_address": "recipient@test.com",
}


def _snapshot_cli_config() -> dict[str, object]:
    return {name: getattr(lib_cli_exit_tools.config, name) for name in CONFIG_FIELDS}


def _restore_cli_config(snapshot: dict[str, object]) -> None:
    for name, value in snapshot.items():
        setattr(lib_cli_exit_tools.config, name, value)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a fresh CliRunner per test.

    Use ``result.stdout`` for clean output (e.g. JSON parsing) so log lines
    on stderr do not get in the way.
    """
    return CliRunner()


@pytest.fixture
def production_factory() -> Callable[[], AppServices]:
    """Provide ``build_production`` for CLI tests that need no injection."""
    from email_notif.composition import build_production

    return build_production


@pytest.fixture
def strip_ansi() -> Callable[[str], str]:
    """Return a helper that strips ANSI escape sequences from a string."""

    def _strip(value: str) -> str:
        return ANSI_ESCAPE_PATTERN.sub("", value)

    return _strip


@pytest.fixture
def managed_traceback_state() -> Iterator[None]:
    """Reset traceback flags to a known baseline and restore after the test."""
    lib_cli_exit_tools.reset_config()
    lib_cli_exit_tools.config.traceback = False
    lib_cli_exit_tools.config.traceback_force_color = False
    snapshot = _snapshot_cli_config()
    try:
        yield
    finally:
        _restore_cli_config(snapshot)


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before the test.

    Only clears before, since a test may monkeypatch ``get_config`` away.
    """
    from email_notif.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at an empty temp dir.

    Keeps a developer's real ``~/.email_notifier.json`` out of the tests.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts, without file I/O."""

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def email_section() -> dict[str, Any]:
    """Return a fresh copy of a complete ``[email]`` section."""
    return dict(COMPLETE_EMAIL_SECTION)


@pytest.fixture
def email_config(email_section: dict[str, Any]) -> EmailConfig:
    """Complete EmailConfig pointing at a fake server."""
    from email_notif.adapters.email.config import EmailConfig

    return EmailConfig.model_validate(email_section)


@pytest.fixture
def notification_spy() -> NotificationSpy:
    """Fresh NotificationSpy recording every send."""
    from email_notif.adapters.memory import NotificationSpy

    return NotificationSpy()


@pytest.fixture
def notifier_factory(
    email_config: EmailConfig,
    notification_spy: NotificationSpy,
) -> Callable[..., EmailNotifier]:
    """Build notifiers that send through ``notification_spy``.

    Keyword arguments replace fields of ``email_config``, e.g.
    ``notifier_factory("Job", delivery_failure="warn")``.
    """
    from email_notif.adapters.email.config import EmailConfig
    from email_notif.application.notifier import EmailNotifier

    def _build(tag: object = "Test", **config_changes: Any) -> EmailNotifier:
        config = email_config
        if config_changes:
            config = EmailConfig.model_validate({**email_config.model_dump(), **config_changes})
        return EmailNotifier(tag, config, send=notification_spy.send_notification)

    return _build


@dataclass
class NotifyCliContext:
    """Services factory and the spy behind it, for notification CLI tests."""

    factory: Callable[[], Any]
    spy: NotificationSpy


@pytest.fixture
def notify_cli_context(
    clear_config_cache: None,
    isolated_home: Path,
) -> Callable[[dict[str, Any]], NotifyCliContext]:
    """Return a builder for CLI services with a given ``[email]`` section.

    Configuration comes from the dict, sends land in the returned spy,
    display and logging stay real.

    Example:
        def test_update(cli_runner, notify_cli_context) -> None:
            ctx = notify_cli_context({"smtp_host": "smtp.test.com", ...})
            cli_runner.invoke(cli, ["send-update", "--tag", "T", "--message", "m"], obj=ctx.factory)
            assert ctx.spy.subjects == ["T Update"]
    """
    from email_notif.adapters.memory import NotificationSpy
    from email_notif.composition import AppServices, build_production

    def _create(email_data: dict[str, Any]) -> NotifyCliContext:
        spy = NotificationSpy()
        config = Config({"email": email_data}, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            send_notification=spy.send_notification,
            load_email_config_from_dict=prod.load_email_config_from_dict,
            load_email_config_from_json=prod.load_email_config_from_json,
            init_logging=prod.init_logging,
        )
        return NotifyCliContext(factory=lambda: test_services, spy=spy)

    return _create


@pytest.fixture
def config_cli_context(
    clear_config_cache: None,
) -> Callable[[dict[str, Any]], Callable[[], AppServices]]:
    """Return a builder for CLI services whose configuration is the given dict."""
    from email_notif.composition import AppServices, build_production

    def _create(config_data: dict[str, Any]) -> Callable[[], AppServices]:
        config = Config(config_data, {})
        prod = build_production()

        def _fake_get_config(**_kwargs: Any) -> Config:
            return config

        test_services = AppServices(
            get_config=_fake_get_config,
            display_config=prod.display_config,
            send_notification=prod.send_notification,
            load_email_config_from_dict=prod.load_email_config_from_dict,
            load_email_config_from_json=prod.load_email_config_from_json,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _create


@pytest.fixture
def inject_config_with_profile_capture(
    clear_config_cache: None,
) -> Callable[[Config, list[str | None]], Callable[[], AppServices]]:
    """Return a builder whose get_config records every profile it is asked for."""
    from email_notif.composition import AppServices, build_production

    def _inject(config: Config, captured_profiles: list[str | None]) -> Callable[[], AppServices]:
        def _capturing_get_config(*, profile: str | None = None, **_kwargs: Any) -> Config:
            captured_profiles.append(profile)
            return config

        prod = build_production()
        test_services = AppServices(
            get_config=_capturing_get_config,
            display_config=prod.display_config,
            send_notification=prod.send_notification,
            load_email_config_from_dict=prod.load_email_config_from_dict,
            load_email_config_from_json=prod.load_email_config_from_json,
            init_logging=prod.init_logging,
        )
        return lambda: test_services

    return _inject

"""CLI config stories: display, JSON format, sections, profile, --set, redaction."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from click.testing import CliRunner, Result
from lib_layered_config import Config

from email_notif.adapters import cli as cli_mod
from email_notif.adapters.cli.exit_codes import ExitCode

SAMPLE_CONFIG: dict[str, Any] = {
    "email": {
        "smtp_host": "smtp.example.com",
        "port": 587,
        "sender_address": "bot@example.com",
        "secret": "hunter2",
        "recipient_address": "ops@example.com",
    },
    "lib_log_rich": {"service": "email_notif"},
}


@pytest.mark.os_agnostic
def test_when_config_is_invoked_it_displays_configuration(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
    clear_config_cache: None,
) -> None:
    """The packaged defaults alone are enough to render."""
    result: Result = cli_runner.invoke(cli_mod.cli, ["config"], obj=production_factory)

    assert result.exit_code == 0
    assert "[email]" in result.stdout


@pytest.mark.os_agnostic
def test_when_config_is_invoked_with_mocked_data_it_displays_sections(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["config"], obj=config_cli_context(SAMPLE_CONFIG))

    assert result.exit_code == 0
    assert "[email]" in result.stdout
    assert "smtp.example.com" in result.stdout
    assert "[lib_log_rich]" in result.stdout


@pytest.mark.os_agnostic
def test_when_config_is_invoked_with_json_format_it_outputs_json(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["config", "--format", "json"], obj=config_cli_context(SAMPLE_CONFIG))

    assert result.exit_code == 0
    assert '"smtp_host": "smtp.example.com"' in result.stdout


@pytest.mark.os_agnostic
def test_when_config_is_invoked_with_section_only_that_section_shows(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    result: Result = cli_runner.invoke(
        cli_mod.cli, ["config", "--format", "json", "--section", "email"], obj=config_cli_context(SAMPLE_CONFIG)
    )

    assert result.exit_code == 0
    assert "smtp.example.com" in result.stdout
    assert "lib_log_rich" not in result.stdout


@pytest.mark.os_agnostic
def test_when_config_is_invoked_with_nonexistent_section_it_fails(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    result: Result = cli_runner.invoke(
        cli_mod.cli, ["config", "--section", "nonexistent"], obj=config_cli_context(SAMPLE_CONFIG)
    )

    assert result.exit_code == ExitCode.INVALID_ARGUMENT
    assert "not found" in result.stderr


# ======================== Redaction ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize("output_format", ["human", "json"])
def test_when_config_displays_it_redacts_the_secret(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
    output_format: str,
) -> None:
    result: Result = cli_runner.invoke(
        cli_mod.cli, ["config", "--format", output_format], obj=config_cli_context(SAMPLE_CONFIG)
    )

    assert result.exit_code == 0
    assert "hunter2" not in result.stdout
    assert "[REDACTED]" in result.stdout
    assert "bot@example.com" in result.stdout


# ======================== Profiles and --set ========================


@pytest.mark.os_agnostic
def test_when_config_is_invoked_with_profile_it_passes_profile_to_get_config(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config_with_profile_capture: Callable[[Config, list[str | None]], Callable[[], Any]],
) -> None:
    captured_profiles: list[str | None] = []
    factory = inject_config_with_profile_capture(config_factory(SAMPLE_CONFIG), captured_profiles)

    result: Result = cli_runner.invoke(cli_mod.cli, ["config", "--profile", "staging"], obj=factory)

    assert result.exit_code == 0
    assert captured_profiles == [None, "staging"]


@pytest.mark.os_agnostic
def test_when_root_profile_is_given_it_reaches_get_config(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config_with_profile_capture: Callable[[Config, list[str | None]], Callable[[], Any]],
) -> None:
    captured_profiles: list[str | None] = []
    factory = inject_config_with_profile_capture(config_factory(SAMPLE_CONFIG), captured_profiles)

    result: Result = cli_runner.invoke(cli_mod.cli, ["--profile", "production", "config"], obj=factory)

    assert result.exit_code == 0
    assert captured_profiles == ["production"]


@pytest.mark.os_agnostic
def test_when_set_is_given_config_shows_the_override(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "email.port=2525", "config", "--format", "json", "--section", "email"],
        obj=config_cli_context(SAMPLE_CONFIG),
    )

    assert result.exit_code == 0
    assert '"port": 2525' in result.stdout


@pytest.mark.os_agnostic
def test_when_profile_reloads_root_set_overrides_are_reapplied(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config_with_profile_capture: Callable[[Config, list[str | None]], Callable[[], Any]],
) -> None:
    captured_profiles: list[str | None] = []
    factory = inject_config_with_profile_capture(config_factory(SAMPLE_CONFIG), captured_profiles)

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "email.smtp_host=relay.example.com", "config", "--profile", "test", "--format", "json"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "relay.example.com" in result.stdout
    assert '"smtp.example.com"' not in result.stdout


@pytest.mark.os_agnostic
def test_when_set_is_malformed_it_is_a_usage_error(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["--set", "port=25", "config"], obj=config_cli_context(SAMPLE_CONFIG))

    assert result.exit_code == 2

"""Email configuration model and loaders.

Provides the EmailConfig Pydantic model for validated, immutable SMTP
settings and the loaders that create it from layered configuration
dictionaries or from the per-user JSON settings file.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

import orjson
from btx_lib_mail import validate_email_address, validate_smtp_host
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from email_notif.domain.enums import DeliveryFailurePolicy
from email_notif.domain.errors import ConfigurationError

#: File name of the per-user JSON settings file in the home directory.
LEGACY_CONFIG_FILENAME = ".email_notifier.json"

_REQUIRED_FIELDS: tuple[str, ...] = ("smtp_host", "sender_address", "recipient_address")

#: Implicit-TLS submission port; btx_lib_mail only speaks plain SMTP and STARTTLS.
IMPLICIT_TLS_PORT = 465


def _reject_port_in_host(host: str) -> None:
    """Refuse ``host:port`` in ``smtp_host``; the port has its own key.

    Bare IPv6 literals contain several colons and are allowed.

    Example:
        >>> _reject_port_in_host("smtp.example.com:2525")
        Traceback (most recent call last):
        ...
        ValueError: smtp_host must not include a port, got 'smtp.example.com:2525'; set email.port instead
    """
    has_port = "]:" in host if host.startswith("[") else host.count(":") == 1
    if has_port:
        raise ValueError(f"smtp_host must not include a port, got {host!r}; set email.port instead")


class EmailConfig(BaseModel):
    """Validated, immutable email configuration.

    Field names follow the ``[email]`` TOML section. The JSON settings file
    spells them ``smtp_server``, ``sender_email``, ``password`` and
    ``recipient_email``; both spellings are accepted.

    Example:
        >>> config = EmailConfig(
        ...     smtp_host="smtp.example.com",
        ...     sender_address="noreply@example.com",
        ...     recipient_address="ops@example.com",
        ... )
        >>> config.smtp_endpoint
        'smtp.example.com:587'
        >>> config.missing_fields()
        ()
    """

    # Validation errors must not echo the input, which carries the secret.
    model_config = ConfigDict(frozen=True, hide_input_in_errors=True)

    smtp_host: str | None = Field(default=None, validation_alias=AliasChoices("smtp_host", "smtp_server"))
    port: int = 587
    sender_address: str | None = Field(
        default=None, validation_alias=AliasChoices("sender_address", "sender_email")
    )
    secret: str | None = Field(default=None, validation_alias=AliasChoices("secret", "password"))
    recipient_address: str | None = Field(
        default=None, validation_alias=AliasChoices("recipient_address", "recipient_email")
    )
    use_starttls: bool = True
    timeout: float = 30.0
    delivery_failure: DeliveryFailurePolicy = DeliveryFailurePolicy.RAISE

    @field_validator("smtp_host", "sender_address", "secret", "recipient_address", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        """Coerce empty or whitespace-only strings to None.

        Treats empty strings from config files as "not configured" rather than
        explicit empty values, so an empty secret never triggers a login.
        """
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("delivery_failure", mode="before")
    @classmethod
    def _normalise_policy(cls, v: Any) -> Any:
        """Accept policy names in any letter case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def _validate_config(self) -> EmailConfig:
        """Validate configuration values.

        Raises:
            ValueError: When configuration values are invalid.

        Example:
            >>> EmailConfig(timeout=-5.0)  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: ...
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be 1-65535, got {self.port}")

        if self.sender_address is not None:
            validate_email_address(self.sender_address)

        if self.recipient_address is not None:
            validate_email_address(self.recipient_address)

        if self.smtp_host is not None:
            _reject_port_in_host(self.smtp_host)
            validate_smtp_host(self.smtp_endpoint)

        return self

    @property
    def smtp_endpoint(self) -> str:
        """Return ``host:port`` as understood by btx_lib_mail.

        IPv6 literals are wrapped in brackets.

        Example:
            >>> EmailConfig(smtp_host="::1", port=25).smtp_endpoint
            '[::1]:25'
        """
        host = self.smtp_host or ""
        if host.count(":") >= 2 and not host.startswith("["):
            host = f"[{host}]"
        return f"{host}:{self.port}"

    @property
    def credentials(self) -> tuple[str, str] | None:
        """Return (login, secret) when a secret is configured.

        The sender address doubles as the SMTP login.
        """
        if self.sender_address is not None and self.secret is not None:
            return (self.sender_address, self.secret)
        return None

    def missing_fields(self) -> tuple[str, ...]:
        """Return the names of required fields that are not configured.

        Example:
            >>> EmailConfig(smtp_host="smtp.example.com").missing_fields()
            ('sender_address', 'recipient_address')
        """
        return tuple(name for name in _REQUIRED_FIELDS if getattr(self, name) is None)

    def require_complete(self) -> EmailConfig:
        """Return self, or raise when a notification could not be addressed.

        Raises:
            ConfigurationError: When smtp_host, sender_address or
                recipient_address is missing.
        """
        missing = self.missing_fields()
        if missing:
            names = ", ".join(f"email.{name}" for name in missing)
            raise ConfigurationError(f"Incomplete email configuration, not set: {names}")
        return self

    def __repr__(self) -> str:
        """Return string representation with the secret redacted.

        Example:
            >>> config = EmailConfig(smtp_host="smtp.example.com", secret="hunter2")
            >>> "hunter2" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "secret" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"EmailConfig({', '.join(fields)})"


def load_email_config_from_dict(config_dict: Mapping[str, Any]) -> EmailConfig:
    """Load EmailConfig from a configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    EmailConfig Pydantic model.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.
            Expected to have an 'email' section.

    Returns:
        Email settings with defaults for missing values.

    Example:
        >>> email_config = load_email_config_from_dict(
        ...     {"email": {"smtp_host": "smtp.example.com", "port": 2525}}
        ... )
        >>> email_config.smtp_endpoint
        'smtp.example.com:2525'
    """
    email_section: Any = config_dict.get("email", {})

    # Non-dict sections (e.g. "email": "invalid") are left to Pydantic to reject
    if not isinstance(email_section, Mapping):
        return EmailConfig.model_validate(email_section)

    email_raw = dict(cast(Mapping[str, Any], email_section))
    return EmailConfig.model_validate(email_raw if email_raw else {})


def legacy_config_path(home: Path | None = None) -> Path:
    """Return the per-user JSON settings file location.

    Args:
        home: Home directory to resolve against. Defaults to ``Path.home()``.

    Example:
        >>> legacy_config_path(Path("/home/ada")).as_posix()
        '/home/ada/.email_notifier.json'
    """
    return (home if home is not None else Path.home()) / LEGACY_CONFIG_FILENAME


def load_email_config_from_json(path: Path) -> EmailConfig:
    """Load EmailConfig from a JSON settings file.

    The file holds a single object with the keys ``smtp_server``,
    ``sender_email``, ``password``, ``recipient_email`` and ``port``.
    Files written for the earlier notifier often say ``"port": 465``; that
    port expects implicit TLS and is refused here. Without ``port`` the
    submission port 587 with STARTTLS is used.

    Args:
        path: Location of the JSON file.

    Returns:
        Parsed and validated configuration.

    Raises:
        ConfigurationError: When the file cannot be read, is not a JSON
            object or asks for port 465.
        pydantic.ValidationError: When a value fails validation.
    """
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ConfigurationError(f"error opening config file at {path}") from exc

    try:
        data: Any = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ConfigurationError(f"config file at {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"config file at {path} must contain a JSON object")

    if data.get("port") == IMPLICIT_TLS_PORT:
        raise ConfigurationError(
            f"config file at {path} sets port {IMPLICIT_TLS_PORT} (implicit TLS), which is not supported; "
            "use the submission port 587 with STARTTLS"
        )

    return EmailConfig.model_validate(data)


__all__ = [
    "LEGACY_CONFIG_FILENAME",
    "EmailConfig",
    "legacy_config_path",
    "load_email_config_from_dict",
    "load_email_config_from_json",
]

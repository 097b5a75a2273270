"""Application ports: callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function.  Existing module-level functions
satisfy these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters.  Infrastructure types (``Config``,
    ``EmailConfig``) are imported under ``TYPE_CHECKING`` only so that
    the application layer never imports adapters at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.email.config import EmailConfig


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class SendNotification(Protocol):
    """Make one delivery attempt for a plain-text notification."""

    def __call__(
        self,
        *,
        config: EmailConfig,
        subject: str,
        message: str,
    ) -> bool: ...


class LoadEmailConfigFromDict(Protocol):
    """Load EmailConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> EmailConfig: ...


class LoadEmailConfigFromJson(Protocol):
    """Load EmailConfig from a JSON settings file."""

    def __call__(self, path: Path) -> EmailConfig: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadEmailConfigFromDict",
    "LoadEmailConfigFromJson",
    "SendNotification",
]

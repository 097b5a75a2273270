"""Logging initialization shared by every entry point.

The CLI (console script and ``python -m email_notif``) configures the
lib_log_rich runtime here exactly once. Library users who only construct an
:class:`~email_notif.application.notifier.EmailNotifier` keep whatever
standard-library logging their application already set up: every module
logs through ``logging.getLogger(__name__)`` and lib_log_rich picks those
records up once :func:`init_logging` has attached the bridge.

Contents:
    * :class:`LoggingConfigModel` - validation of the ``[lib_log_rich]`` section.
    * :func:`init_logging` - idempotent runtime initialization.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from email_notif import __init__conf__


class LoggingConfigModel(BaseModel):
    """Pydantic model for the ``[lib_log_rich]`` config section.

    Unknown keys pass through untouched to ``lib_log_rich.runtime.RuntimeConfig``.

    Example:
        >>> LoggingConfigModel(service="nightly-notifier").service
        'nightly-notifier'
        >>> LoggingConfigModel().environment
        'prod'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a RuntimeConfig.

    The service name falls back to the package name when not configured.
    """
    log_raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})
    extra_config = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)

    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **extra_config,
    )


def init_logging(config: Config) -> None:
    """Initialize the lib_log_rich runtime once per process.

    Loads ``.env`` files so ``LOG_*`` variables apply, builds the runtime
    from the ``[lib_log_rich]`` section and bridges standard logging into
    it. Later calls return immediately.

    Args:
        config: Already-loaded layered configuration.

    Example:
        >>> from lib_layered_config import Config
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]

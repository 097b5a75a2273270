"""Choose which email settings a notifier is built with."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..adapters.email.config import EmailConfig
    from .ports import LoadEmailConfigFromDict, LoadEmailConfigFromJson

logger = logging.getLogger(__name__)


def resolve_email_config(
    config_dict: Mapping[str, Any],
    *,
    load_from_dict: LoadEmailConfigFromDict,
    load_from_json: LoadEmailConfigFromJson,
    legacy_path: Path,
    config_path: Path | None = None,
) -> EmailConfig:
    """Return the email settings, in order of preference.

    1. ``config_path``, a JSON settings file named by the caller.
    2. The ``[email]`` section of ``config_dict`` when it sets ``smtp_host``.
    3. ``legacy_path`` when that file exists.
    4. The ``[email]`` section as is; the notifier rejects it if incomplete.
    """
    if config_path is not None:
        return load_from_json(config_path)

    layered = load_from_dict(config_dict)
    if layered.smtp_host is not None or not legacy_path.is_file():
        return layered

    logger.info("No email.smtp_host configured, reading %s", legacy_path)
    return load_from_json(legacy_path)


__all__ = ["resolve_email_config"]

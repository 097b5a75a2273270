"""Configuration adapter built on lib_layered_config.

Contents:
    * :mod:`.loader` - cached layered loading with profile support
    * :mod:`.display` - TOML/JSON rendering with secrets redacted
    * :mod:`.overrides` - ``--set`` parsing and merging
"""

from __future__ import annotations

from .display import display_config
from .loader import get_config, get_default_config_path, validate_profile
from .overrides import apply_overrides

__all__ = [
    "apply_overrides",
    "display_config",
    "get_config",
    "get_default_config_path",
    "validate_profile",
]

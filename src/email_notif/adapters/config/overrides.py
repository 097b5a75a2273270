"""``--set SECTION.KEY=VALUE`` overrides applied on top of the loaded Config.

Typical use is a one-off change without editing a file::

    email-notif --set email.port=2525 --set email.use_starttls=false send-update ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``--set`` argument."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue

    @property
    def dotted_key(self) -> str:
        return ".".join((self.section, *self.key_path))


def coerce_value(raw: str) -> CoercedValue:
    """Interpret ``raw`` as JSON, falling back to the literal string.

    Examples:
        >>> coerce_value("2525")
        2525
        >>> coerce_value("false")
        False
        >>> coerce_value("warn")
        'warn'
        >>> coerce_value("")
        ''
    """
    if not raw:
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE``.

    Only the first ``=`` splits path from value, so values may contain
    ``=`` themselves.

    Raises:
        ValueError: If ``=`` is missing, the path has no dot, or a path
            component is empty.

    Examples:
        >>> parse_override("email.port=2525")
        ConfigOverride(section='email', key_path=('port',), value=2525)
        >>> parse_override("email.secret=a=b").value
        'a=b'
    """
    path, sep, value = raw.partition("=")
    if not sep:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    section, dot, rest = path.partition(".")
    if not dot:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")

    key_path = tuple(rest.split("."))
    if not all(key_path):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(section=section, key_path=key_path, value=coerce_value(value))


def _merge_into(tree: dict[str, Any], override: ConfigOverride) -> None:
    """Write ``override`` into the nested ``tree``, creating tables on the way."""
    node = tree.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        child = node.setdefault(part, {})
        if not isinstance(child, dict):
            raise TypeError(f"Cannot set {override.dotted_key}: {part!r} is already a {type(child).__name__}")
        node = child
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return ``config`` with every ``--set`` override deep-merged in.

    Later overrides for the same key win. An empty tuple returns
    ``config`` itself.

    Raises:
        ValueError: If any override is malformed.

    Example:
        >>> cfg = Config({"email": {"port": 587}}, {})
        >>> apply_overrides(cfg, ("email.port=25",))["email"]["port"]
        25
    """
    if not raw_overrides:
        return config

    tree: dict[str, Any] = {}
    for raw in raw_overrides:
        _merge_into(tree, parse_override(raw))
    return config.with_overrides(tree)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]

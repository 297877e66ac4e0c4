"""Parse ``KEY=VALUE`` command-line assignments.

Used for ``--set SECTION.KEY=VALUE`` configuration overrides and for the
``--param KEY=VALUE`` template parameters of ``resolve``/``send``. Values are
decoded the same way in both places.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""Union of types that :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """A single parsed configuration override."""

    section: str
    key_path: tuple[str, ...]
    value: CoercedValue


def split_assignment(raw: str) -> tuple[str, str]:
    """Split ``KEY=VALUE`` at the first ``=``.

    Raises:
        ValueError: No ``=`` is present or the key is empty.

    Examples:
        >>> split_assignment("plan_name=DJ Pro")
        ('plan_name', 'DJ Pro')
        >>> split_assignment("shop.url=https://x.test/?a=b")
        ('shop.url', 'https://x.test/?a=b')
    """
    key, sep, value = raw.partition("=")
    key = key.strip()
    if not sep:
        raise ValueError(f"Invalid assignment {raw!r}: must contain '='")
    if not key:
        raise ValueError(f"Invalid assignment {raw!r}: key is empty")
    return key, value


def coerce_value(raw: str) -> CoercedValue:
    """Decode a raw string as JSON, falling back to the string itself.

    Examples:
        >>> coerce_value("true")
        True
        >>> coerce_value("12.5")
        12.5
        >>> coerce_value('{"city": "Auckland"}')
        {'city': 'Auckland'}
        >>> coerce_value("no-reply@serato.com")
        'no-reply@serato.com'
        >>> coerce_value("")
        ''
    """
    if raw == "":
        return ""
    try:
        return orjson.loads(raw)
    except (orjson.JSONDecodeError, ValueError):
        return raw


def parse_override(raw: str) -> ConfigOverride:
    """Parse ``SECTION.KEY[.SUBKEY...]=VALUE`` into a ConfigOverride.

    Raises:
        ValueError: The string lacks ``=``, the key has no dot, or a path
            component is empty.

    Examples:
        >>> override = parse_override("mailer.disable_delivery=true")
        >>> override.section, override.key_path, override.value
        ('mailer', ('disable_delivery',), True)
        >>> parse_override("sendgrid.timeout=10").value
        10
        >>> parse_override("lib_log_rich.payload_limits.max_chars=8192").key_path
        ('payload_limits', 'max_chars')
    """
    path, value = split_assignment(raw)
    section, dot, rest = path.partition(".")
    if not dot:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    key_path = tuple(rest.split("."))
    if not section:
        raise ValueError(f"Invalid override {raw!r}: section name is empty")
    if not all(key_path):
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")
    return ConfigOverride(section=section, key_path=key_path, value=coerce_value(value))


def _nest_override(target: dict[str, dict[str, object]], override: ConfigOverride) -> None:
    """Insert ``override`` into the nested dict passed to ``Config.with_overrides``.

    Raises:
        ValueError: An earlier override set a scalar where this one needs a table.

    Examples:
        >>> d: dict[str, dict[str, object]] = {}
        >>> _nest_override(d, parse_override("lib_log_rich.payload_limits.max_chars=1"))
        >>> d
        {'lib_log_rich': {'payload_limits': {'max_chars': 1}}}
    """
    node: dict[str, object] = target.setdefault(override.section, {})
    for part in override.key_path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            raise ValueError(f"Cannot override {override.section}.{part}: expected a table, got {type(existing).__name__}")
        node = cast("dict[str, object]", existing)
    node[override.key_path[-1]] = override.value


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Deep-merge ``--set`` overrides into a Config instance.

    Returns the original object when there is nothing to apply.

    Raises:
        ValueError: Any override string is malformed.

    Examples:
        >>> cfg = Config({"sendgrid": {"timeout": 30.0}}, {})
        >>> apply_overrides(cfg, ("sendgrid.timeout=5",))["sendgrid"]["timeout"]
        5
        >>> apply_overrides(cfg, ()) is cfg
        True
    """
    if not raw_overrides:
        return config

    overrides: dict[str, dict[str, object]] = {}
    for raw in raw_overrides:
        _nest_override(overrides, parse_override(raw))
    return config.with_overrides(overrides)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_overrides",
    "coerce_value",
    "parse_override",
    "split_assignment",
]

"""Read the mailer settings through ``lib_layered_config``.

Layers, lowest precedence first: the bundled ``defaultconfig.toml``, app,
host and user files, ``.env``, then environment variables such as
``TEMPLATE_MAILER___SENDGRID__API_KEY``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Protocol, cast

from lib_layered_config import DEFAULT_MAX_PROFILE_LENGTH, Config, read_config, validate_profile_name

from template_mailer import __init__conf__

DEFAULT_CONFIG_FILE = Path(__file__).with_name("defaultconfig.toml")


class ConfigLoaderProtocol(Protocol):
    def __call__(self, *, profile: str | None = None, start_dir: str | None = None) -> Config: ...
    def cache_clear(self) -> None: ...


def validate_profile(profile: str, max_length: int | None = None) -> None:
    """Reject empty, overlong or path-like profile names.

    Raises:
        ValueError: The profile name is invalid.

    Examples:
        >>> validate_profile("staging")
        >>> validate_profile("../etc/passwd")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ValueError: profile contains invalid characters: ../etc/passwd
    """
    validate_profile_name(profile, max_length=max_length or DEFAULT_MAX_PROFILE_LENGTH)


def get_default_config_path() -> Path:
    """Return the bundled ``defaultconfig.toml``.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return DEFAULT_CONFIG_FILE


@lru_cache(maxsize=4)
def _read_layers(profile: str | None, start_dir: str | None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=DEFAULT_CONFIG_FILE,
        start_dir=start_dir,
    )


def _get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Return the merged ``[sendgrid]``, ``[mailer]`` and ``[lib_log_rich]`` settings.

    Results are cached per ``(profile, start_dir)``.

    Args:
        profile: Adds ``profile/<name>/`` to every search path, so a
            ``staging`` profile can carry its own SendGrid key.
        start_dir: Where ``.env`` discovery starts; the working directory
            when None.

    Raises:
        ValueError: The profile name is invalid.

    Example:
        >>> config = get_config()
        >>> config.get("sendgrid.host")
        'https://api.sendgrid.com'
        >>> config.get("mailer.disable_delivery")
        False
    """
    if profile is not None:
        validate_profile(profile)
    return _read_layers(profile, start_dir)


_get_config.cache_clear = _read_layers.cache_clear  # type: ignore[attr-defined]
get_config: ConfigLoaderProtocol = cast(ConfigLoaderProtocol, _get_config)


__all__ = [
    "get_config",
    "get_default_config_path",
    "validate_profile",
]

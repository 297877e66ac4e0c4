"""Read-only template catalog loaded once from a JSON document.

Contents:
    * :class:`TemplateStore` - Immutable name → TemplateConfig mapping.
    * :func:`get_default_templates_path` - Location of the bundled catalog.
    * :func:`load_template_store` - Build a store from a path or the bundled catalog.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

import orjson
from pydantic import ValidationError

from template_mailer.domain.errors import ConfigError, UnknownTemplateError
from template_mailer.domain.models import TemplateConfig

from .schema import parse_template_config

logger = logging.getLogger(__name__)

_INVALID_CONFIG = "Invalid email configuration"


class TemplateStore:
    """Immutable mapping from template name to :class:`TemplateConfig`.

    Populated once at construction and safe for unsynchronized concurrent
    reads afterwards.

    Example:
        >>> store = TemplateStore.from_json(
        ...     b'{"welcome": {"template_params": [], "languages": {"en": {"template_id": "d-1"}}}}'
        ... )
        >>> store.names()
        ['welcome']
        >>> store.lookup("welcome").languages["en"].template_id
        'd-1'
        >>> "welcome" in store
        True
    """

    __slots__ = ("_templates",)

    def __init__(self, templates: Mapping[str, TemplateConfig]) -> None:
        if not templates:
            raise ConfigError(f"{_INVALID_CONFIG}: no templates configured")
        self._templates: Mapping[str, TemplateConfig] = MappingProxyType(dict(templates))

    @classmethod
    def from_document(cls, document: Any) -> TemplateStore:
        """Build a store from an already decoded JSON document.

        Raises:
            ConfigError: The document is not a non-empty mapping or an entry
                violates the template schema.
        """
        if not isinstance(document, Mapping) or not document:
            raise ConfigError(f"{_INVALID_CONFIG}: expected a non-empty mapping of template names")

        templates: dict[str, TemplateConfig] = {}
        for name, raw in cast(Mapping[Any, Any], document).items():
            if not isinstance(name, str) or not name:
                raise ConfigError(f"{_INVALID_CONFIG}: template names must be non-empty strings")
            try:
                templates[name] = parse_template_config(name, raw)
            except ValidationError as exc:
                raise ConfigError(f"{_INVALID_CONFIG}: template {name!r}: {exc}") from exc
        return cls(templates)

    @classmethod
    def from_json(cls, raw: bytes | str) -> TemplateStore:
        """Parse JSON text and build a store.

        Raises:
            ConfigError: The text is not valid JSON or the document is invalid.
        """
        try:
            document = orjson.loads(raw)
        except orjson.JSONDecodeError as exc:
            raise ConfigError(f"{_INVALID_CONFIG}: {exc}") from exc
        return cls.from_document(document)

    @property
    def templates(self) -> Mapping[str, TemplateConfig]:
        """Read-only view of all template configurations."""
        return self._templates

    def lookup(self, name: str) -> TemplateConfig:
        """Return the configuration for ``name``.

        Raises:
            UnknownTemplateError: ``name`` is not configured.
        """
        try:
            return self._templates[name]
        except KeyError:
            raise UnknownTemplateError(name) from None

    def names(self) -> list[str]:
        """Return all template names, sorted."""
        return sorted(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


@lru_cache(maxsize=1)
def get_default_templates_path() -> Path:
    """Return the path to the catalog bundled with the package.

    Example:
        >>> get_default_templates_path().name
        'email_config.json'
    """
    return Path(__file__).parent / "email_config.json"


def load_template_store(path: Path | None = None) -> TemplateStore:
    """Read a JSON catalog and build the template store.

    Args:
        path: Explicit catalog file, or None for the bundled catalog.

    Returns:
        Loaded, validated template store.

    Raises:
        ConfigError: The file cannot be read, is not valid JSON, is empty, or
            violates the template schema.
    """
    source = path if path is not None else get_default_templates_path()
    try:
        raw = source.read_bytes()
    except OSError as exc:
        raise ConfigError(f"{_INVALID_CONFIG}: cannot read {source}: {exc.strerror or exc}") from exc

    store = TemplateStore.from_json(raw)
    logger.debug("Loaded template catalog", extra={"path": str(source), "templates": len(store)})
    return store


__all__ = [
    "TemplateStore",
    "get_default_templates_path",
    "load_template_store",
]

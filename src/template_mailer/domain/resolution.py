"""Pure resolution rules turning a template configuration into message fields."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from typing import Any

from .errors import InvalidParameterTypeError, MissingParameterError, UnknownParameterError
from .models import DEFAULT_LANGUAGE, DEFAULT_SENDER, Identity, LanguageEntry, TemplateConfig


def _is_supported_value(value: Any) -> bool:
    return isinstance(value, (str, bool, Mapping))


def validate_parameters(provided: Mapping[str, Any], required: Collection[str]) -> None:
    """Check that ``provided`` matches the declared parameter set exactly.

    Each provided key is checked in order (first for membership, then for its
    value type); afterwards every required name must be present.

    Args:
        provided: Caller-supplied parameter map.
        required: The template's ``template_params``.

    Raises:
        UnknownParameterError: A key is not declared for the template.
        InvalidParameterTypeError: A value is not a string, boolean or mapping.
        MissingParameterError: A declared parameter is absent.

    Example:
        >>> validate_parameters({"plan_name": "DJ"}, ["plan_name"])
        >>> validate_parameters({"plan_name": 3}, ["plan_name"])  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        InvalidParameterTypeError: ...
    """
    for key, value in provided.items():
        if key not in required:
            raise UnknownParameterError(key)
        if not _is_supported_value(value):
            raise InvalidParameterTypeError(key)

    for name in required:
        if name not in provided:
            raise MissingParameterError(name)


def resolve_language(requested: str, languages: Mapping[str, LanguageEntry]) -> str:
    """Return ``requested`` when configured, otherwise ``"en"``.

    The fallback is silent: empty or unsupported locales still produce an
    English send.

    Example:
        >>> langs = {"en": LanguageEntry("T-EN"), "fr": LanguageEntry("T-FR")}
        >>> resolve_language("fr", langs)
        'fr'
        >>> resolve_language("", langs)
        'en'
        >>> resolve_language("zh", langs)
        'en'
    """
    if requested and requested in languages:
        return requested
    return DEFAULT_LANGUAGE


def resolve_categories(language_entry: LanguageEntry, template_categories: Iterable[str]) -> tuple[str, ...]:
    """Union of language-level and template-level categories, deduplicated.

    Order follows first occurrence, language categories first.

    Example:
        >>> resolve_categories(LanguageEntry("T-FR", ("French",)), ["studio", "French"])
        ('French', 'studio')
    """
    return tuple(dict.fromkeys((*language_entry.categories, *template_categories)))


def resolve_sender_identity(
    config: TemplateConfig,
    default_sender: Identity = DEFAULT_SENDER,
) -> tuple[Identity, Identity | None]:
    """Return ``(sender, reply_to)`` for a template.

    The sender falls back to ``default_sender``; no reply-to is synthesized
    when the template does not configure one.
    """
    sender = config.sender if config.sender is not None else default_sender
    return sender, config.reply_to


__all__ = [
    "resolve_categories",
    "resolve_language",
    "resolve_sender_identity",
    "validate_parameters",
]

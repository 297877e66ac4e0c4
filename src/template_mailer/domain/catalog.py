"""Cross-template consistency checks for a whole template catalog."""

from __future__ import annotations

from collections.abc import Mapping

from .models import DEFAULT_LANGUAGE, TemplateConfig


def audit_templates(templates: Mapping[str, TemplateConfig]) -> list[str]:
    """Return the problems found in a template catalog (empty when consistent).

    Checks that every template configures the default language, that every
    language entry has a non-empty template id, and that template ids are
    unique across the catalog.

    Example:
        >>> from template_mailer.domain.models import LanguageEntry
        >>> a = TemplateConfig("a", (), {"en": LanguageEntry("d-1")})
        >>> b = TemplateConfig("b", (), {"en": LanguageEntry("d-1")})
        >>> audit_templates({"a": a, "b": b})
        ["Template id 'd-1' of 'b' (en) is already used by 'a' (en)"]
    """
    problems: list[str] = []
    seen: dict[str, tuple[str, str]] = {}

    for name, config in templates.items():
        if DEFAULT_LANGUAGE not in config.languages:
            problems.append(f"Template {name!r} has no {DEFAULT_LANGUAGE!r} language")

        for language, entry in config.languages.items():
            template_id = entry.template_id.strip()
            if not template_id:
                problems.append(f"Template {name!r} ({language}) has an empty template id")
                continue
            if template_id in seen:
                owner, owner_language = seen[template_id]
                problems.append(
                    f"Template id {template_id!r} of {name!r} ({language}) "
                    f"is already used by {owner!r} ({owner_language})"
                )
                continue
            seen[template_id] = (name, language)

    return problems


__all__ = ["audit_templates"]

"""In-memory template catalog for testing.

Contents:
    * :data:`SAMPLE_TEMPLATES` - Small catalog document covering every feature.
    * :func:`load_template_store_in_memory` - LoadTemplateStore without file I/O.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Final

from ..templates.store import TemplateStore

SAMPLE_TEMPLATES: Final[dict[str, Any]] = {
    "studio-sub-voluntary-cancel": {
        "template_params": ["subscription_end_date", "plan_name"],
        "languages": {
            "en": {"template_id": "T-EN", "categories": []},
            "fr": {"template_id": "T-FR", "categories": ["French"]},
        },
        "categories": ["studio-sub-voluntary-cancel"],
    },
    "dj-sub-third-payment-declined": {
        "template_params": ["plan_name", "product"],
        "languages": {
            "en": {"template_id": "T-DJ-EN", "categories": ["payments"]},
            "de": {"template_id": "T-DJ-DE", "categories": ["German", "payments"]},
        },
        "categories": ["payments", "dj-sub-third-payment-declined"],
        "email_from": {
            "from": {"email": "billing@serato.com", "name": "Serato Billing"},
            "reply_to": {"email": "support@serato.com", "name": "Serato Support"},
        },
        "recipients": {"bcc": ["audit@serato.com"], "cc": ["accounts@serato.com"]},
    },
    "dj-sub-second-payment-declined": {
        "template_params": [],
        "languages": {"en": {"template_id": "T-DJ-2"}},
        "categories": [],
    },
}


def load_template_store_in_memory(path: Path | None = None) -> TemplateStore:
    """Build a store from :data:`SAMPLE_TEMPLATES`; ``path`` is ignored."""
    return TemplateStore.from_document(SAMPLE_TEMPLATES)


__all__ = [
    "SAMPLE_TEMPLATES",
    "load_template_store_in_memory",
]

"""Template catalog adapter - JSON template store and resolver settings.

Contents:
    * :mod:`.schema` - Pydantic schema for catalog entries
    * :mod:`.store` - Read-only template store and loader
    * :mod:`.settings` - ``[mailer]`` settings model
"""

from __future__ import annotations

from .settings import MailerConfig, load_mailer_config_from_dict
from .store import TemplateStore, get_default_templates_path, load_template_store

__all__ = [
    "MailerConfig",
    "TemplateStore",
    "get_default_templates_path",
    "load_mailer_config_from_dict",
    "load_template_store",
]

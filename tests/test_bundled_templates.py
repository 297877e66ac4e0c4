"""The catalog bundled with the package is loadable and self-consistent."""

from __future__ import annotations

import pytest

from template_mailer.adapters.templates.store import TemplateStore, load_template_store
from template_mailer.domain.catalog import audit_templates
from template_mailer.domain.models import Identity


@pytest.fixture(scope="module")
def bundled_store() -> TemplateStore:
    return load_template_store()


@pytest.mark.os_agnostic
def test_bundled_catalog_holds_all_subscription_templates(bundled_store: TemplateStore) -> None:
    """Every subscription lifecycle notification is configured."""
    assert len(bundled_store) == 17
    assert "studio-sub-voluntary-cancel" in bundled_store
    assert "dj-sub-third-payment-declined" in bundled_store


@pytest.mark.os_agnostic
def test_bundled_catalog_passes_audit(bundled_store: TemplateStore) -> None:
    """No missing defaults, empty ids or shared ids."""
    assert audit_templates(bundled_store.templates) == []


@pytest.mark.os_agnostic
def test_every_bundled_template_has_english(bundled_store: TemplateStore) -> None:
    """English is always available for fallback."""
    for name in bundled_store:
        assert "en" in bundled_store.lookup(name).languages, name


@pytest.mark.os_agnostic
def test_bundled_template_ids_are_dynamic_template_ids(bundled_store: TemplateStore) -> None:
    """SendGrid dynamic template ids start with d-."""
    for config in bundled_store.templates.values():
        for entry in config.languages.values():
            assert entry.template_id.startswith("d-"), config.name


@pytest.mark.os_agnostic
def test_voluntary_cancel_parameters(bundled_store: TemplateStore) -> None:
    """The cancel notification needs the end date and the plan."""
    config = bundled_store.lookup("studio-sub-voluntary-cancel")

    assert config.template_params == ("subscription_end_date", "plan_name")
    assert config.languages["en"].template_id == "d-8146e370bca14acf955bf1df39d8d93f"


@pytest.mark.os_agnostic
def test_payment_declined_templates_reply_to_support(bundled_store: TemplateStore) -> None:
    """Declined-payment mails route replies to support."""
    config = bundled_store.lookup("dj-sub-second-payment-declined")

    assert config.template_params == ()
    assert config.reply_to == Identity("support@serato.com", "Serato Support")
    assert "payment-declined" in config.categories

"""
Requirements resolution tests.

Missing reference rows and store failures fall back to defaults.
"""

import logging
from decimal import Decimal

from tattsync.services.requirements_service import (
    DEFAULT_AGREEMENT_TEXT,
    PaymentSettingsView,
    resolve_requirements,
)
from tattsync.stores import StoreError


class TestResolveRequirements:

    def test_defaults_without_rows(self, store, seed):
        event = seed.event()

        view = resolve_requirements(event["id"], "artist", store=store)

        assert view.requires_payment is False
        assert view.payment_amount == 0
        assert view.agreement_text == DEFAULT_AGREEMENT_TEXT
        assert view.profile_deadline_days == 30
        assert view.payment_settings == PaymentSettingsView()
        assert view.payment_settings_loaded is False

    def test_configured_rows(self, store, seed):
        event = seed.event()
        seed.requirements(event["id"], "artist")
        seed.payment_settings(event["id"], stripe_enabled=True, allow_installments=True)

        view = resolve_requirements(event["id"], "artist", store=store)

        assert view.requires_payment is True
        assert view.payment_amount == Decimal("150.00")
        assert "liability insurance" in view.agreement_text
        assert view.profile_deadline_days == 21
        assert view.payment_settings.cash_enabled is True
        assert view.payment_settings.bank_details.startswith("Sort Code")
        assert view.payment_settings.stripe_enabled is True
        assert view.payment_settings.allow_installments is True
        assert view.payment_settings_loaded is True

    def test_requirements_are_per_application_type(self, store, seed):
        event = seed.event()
        seed.requirements(event["id"], "trader", payment_amount=Decimal("80.00"))

        artist = resolve_requirements(event["id"], "artist", store=store)
        trader = resolve_requirements(event["id"], "trader", store=store)

        assert artist.requires_payment is False
        assert trader.payment_amount == Decimal("80.00")

    def test_blank_agreement_text_uses_default(self, store, seed):
        event = seed.event()
        seed.requirements(event["id"], "artist", agreement_text="")

        view = resolve_requirements(event["id"], "artist", store=store)

        assert view.agreement_text == DEFAULT_AGREEMENT_TEXT

    def test_payment_settings_without_requirements(self, store, seed):
        event = seed.event()
        seed.payment_settings(event["id"])

        view = resolve_requirements(event["id"], "volunteer", store=store)

        assert view.requires_payment is False
        assert view.payment_settings.cash_enabled is True

    def test_store_failure_is_logged_and_defaulted(self, store, seed, monkeypatch, caplog):
        event = seed.event()
        seed.requirements(event["id"], "artist")

        def broken_find(table, **filters):
            raise StoreError("database_error", "connection reset")

        monkeypatch.setattr(store, "find", broken_find)

        with caplog.at_level(logging.WARNING, logger="tattsync"):
            view = resolve_requirements(event["id"], "artist", store=store)

        assert view.requires_payment is False
        assert view.profile_deadline_days == 30
        assert view.payment_settings_loaded is False
        messages = [r.getMessage() for r in caplog.records]
        assert any("registration_requirements" in m for m in messages)
        assert any("payment_settings" in m for m in messages)

# Overview: Service-layer lookup of registration requirements and payment settings.

"""
Registration Requirements Resolver

Requirements and payment settings are optional reference rows. A missing
row, or a store error while reading one, never blocks registration: the
defaults below are substituted and the failure is logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from ..stores import RegistrationStore, StoreError, get_store


logger = logging.getLogger(__name__)


DEFAULT_AGREEMENT_TEXT = "I agree to participate in this event."
DEFAULT_PROFILE_DEADLINE_DAYS = 30


@dataclass(frozen=True)
class PaymentSettingsView:
    cash_enabled: bool = False
    cash_details: str = ""
    bank_transfer_enabled: bool = False
    bank_details: str = ""
    stripe_enabled: bool = False
    allow_installments: bool = False


@dataclass(frozen=True)
class RequirementsView:
    requires_payment: bool = False
    payment_amount: Decimal = Decimal("0")
    agreement_text: str = DEFAULT_AGREEMENT_TEXT
    profile_deadline_days: int = DEFAULT_PROFILE_DEADLINE_DAYS
    payment_settings: PaymentSettingsView = field(default_factory=PaymentSettingsView)
    # False when no payment_settings row could be read; enabled-method checks are skipped
    payment_settings_loaded: bool = False


def _load_optional(store: RegistrationStore, table: str, **filters) -> dict | None:
    try:
        return store.find_one(table, **filters)
    except StoreError as exc:
        logger.warning("Could not read %s %s, using defaults: %s", table, filters, exc)
        return None


def _payment_settings_from_row(row: dict | None) -> PaymentSettingsView:
    if row is None:
        return PaymentSettingsView()
    return PaymentSettingsView(
        cash_enabled=bool(row.get("cash_enabled")),
        cash_details=row.get("cash_details") or "",
        bank_transfer_enabled=bool(row.get("bank_transfer_enabled")),
        bank_details=row.get("bank_details") or "",
        stripe_enabled=bool(row.get("stripe_enabled")),
        allow_installments=bool(row.get("allow_installments")),
    )


def resolve_requirements(
    event_id: int,
    application_type: str,
    *,
    store: RegistrationStore | None = None,
) -> RequirementsView:
    """Requirements for an (event, application type) pair, with defaults filled in."""
    store = store or get_store()

    requirement = _load_optional(
        store, "registration_requirements", event_id=event_id, application_type=application_type
    )
    settings_row = _load_optional(store, "payment_settings", event_id=event_id)
    settings = _payment_settings_from_row(settings_row)
    settings_loaded = settings_row is not None

    if requirement is None:
        return RequirementsView(payment_settings=settings, payment_settings_loaded=settings_loaded)

    amount = requirement.get("payment_amount")
    deadline_days = requirement.get("profile_deadline_days")
    return RequirementsView(
        requires_payment=bool(requirement.get("requires_payment")),
        payment_amount=Decimal(str(amount)) if amount is not None else Decimal("0"),
        agreement_text=requirement.get("agreement_text") or DEFAULT_AGREEMENT_TEXT,
        profile_deadline_days=deadline_days or DEFAULT_PROFILE_DEADLINE_DAYS,
        payment_settings=settings,
        payment_settings_loaded=settings_loaded,
    )

from __future__ import annotations

from typing import Any


# Longest accepted value per free-text field of the registration form
TEXT_FIELD_LIMITS = {
    "applicant_name": 200,
    "applicant_email": 255,
    "emergency_contact_name": 200,
    "emergency_contact_phone": 64,
    "medical_conditions": 2000,
    "allergies": 2000,
    "medications": 2000,
}

# Application types that must accept the event agreement
AGREEMENT_REQUIRED_TYPES = {"artist", "piercer", "trader", "caterer"}

PAYMENT_CASH = "cash"
PAYMENT_BANK_TRANSFER = "bank_transfer"
PAYMENT_STRIPE_FULL = "stripe_full"
PAYMENT_STRIPE_3_INSTALLMENTS = "stripe_3_installments"
PAYMENT_STRIPE_6_INSTALLMENTS = "stripe_6_installments"

VALID_PAYMENT_METHODS = [
    PAYMENT_CASH,
    PAYMENT_BANK_TRANSFER,
    PAYMENT_STRIPE_FULL,
    PAYMENT_STRIPE_3_INSTALLMENTS,
    PAYMENT_STRIPE_6_INSTALLMENTS,
]

INSTALLMENT_METHODS = {PAYMENT_STRIPE_3_INSTALLMENTS, PAYMENT_STRIPE_6_INSTALLMENTS}


class ValidationError(ValueError):
    """400-level input problem."""

    code = "validation_failure"
    http_status = 400

    def __init__(self, message: str, fields: dict[str, str] | None = None):
        super().__init__(message)
        self.fields = fields or {}


def _enabled_payment_methods(settings) -> set[str]:
    enabled = set()
    if settings.cash_enabled:
        enabled.add(PAYMENT_CASH)
    if settings.bank_transfer_enabled:
        enabled.add(PAYMENT_BANK_TRANSFER)
    if settings.stripe_enabled:
        enabled.add(PAYMENT_STRIPE_FULL)
        if settings.allow_installments:
            enabled.update(INSTALLMENT_METHODS)
    return enabled


def validate_registration_data(payload: Any, application_type: str, requirements) -> dict:
    """
    Validates + normalizes the registration form submitted with a token.

    - payload must be a JSON object
    - free-text fields: string or null, stripped, length-limited
    - agreement_accepted: boolean, must be true for agreement-bound
      application types when the event has agreement text
    - payment_method: one of VALID_PAYMENT_METHODS; mandatory when payment
      is required, and must be enabled for the event when its payment
      settings were loaded

    Returns a cleaned copy of the payload (unknown keys are kept verbatim
    so the confirmed details are stored as submitted).
    Raises ValidationError with one message per offending field.
    """
    if not isinstance(payload, dict):
        raise ValidationError("registration_data must be an object")

    errors: dict[str, str] = {}
    cleaned = dict(payload)

    for key, limit in TEXT_FIELD_LIMITS.items():
        value = payload.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            errors[key] = f"{key} must be a string"
            continue
        value = value.strip()
        if len(value) > limit:
            errors[key] = f"{key} must be at most {limit} characters"
            continue
        cleaned[key] = value

    accepted = payload.get("agreement_accepted", False)
    if not isinstance(accepted, bool):
        errors["agreement_accepted"] = "agreement_accepted must be true or false"
    else:
        cleaned["agreement_accepted"] = accepted
        agreement_text = (requirements.agreement_text or "").strip()
        if application_type in AGREEMENT_REQUIRED_TYPES and agreement_text and not accepted:
            errors["agreement_accepted"] = "You must accept the agreement to continue"

    method = payload.get("payment_method")
    if method in (None, ""):
        cleaned["payment_method"] = None
        if requirements.requires_payment:
            errors["payment_method"] = "Please select a payment method"
    elif method not in VALID_PAYMENT_METHODS:
        errors["payment_method"] = f"payment_method must be one of {VALID_PAYMENT_METHODS}"
    elif (
        requirements.requires_payment
        and requirements.payment_settings_loaded
        and method not in _enabled_payment_methods(requirements.payment_settings)
    ):
        errors["payment_method"] = f"Payment method '{method}' is not available for this event"

    if errors:
        raise ValidationError("Invalid registration data", fields=errors)

    return cleaned

# Overview: Response shapes for the registration API.

from __future__ import annotations

from dataclasses import asdict

from .requirements_service import RequirementsView
from .token_service import TokenRecord


COMPLETION_MESSAGE = "Registration completed successfully"


def assemble_registration_view(record: TokenRecord, requirements: RequirementsView) -> dict:
    """Shape returned by GET /api/registration/<token>."""
    return {
        "token": record.token,
        "application": {
            "id": record.application_id,
            "applicant_name": record.applicant_name,
            "applicant_email": record.applicant_email,
            "application_type": record.application_type,
            "event_name": record.event_name,
            "event_id": record.event_id,
        },
        "requirements": {
            "requires_payment": requirements.requires_payment,
            "payment_amount": float(requirements.payment_amount),
            "agreement_text": requirements.agreement_text,
            "profile_deadline_days": requirements.profile_deadline_days,
        },
        "payment_settings": asdict(requirements.payment_settings),
    }


def assemble_completion(result) -> dict:
    return {
        "message": COMPLETION_MESSAGE,
        "registration_id": result.registration_id,
    }

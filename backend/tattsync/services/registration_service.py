# Overview: Service-layer completion of a registration; redeems a token in one transaction.

"""
Registration Completion Service

WHY: Redeeming a registration token finalises an applicant's place at an
event: their personal details are recorded, a ticket is issued and the
token is spent.

SEQUENCE (single transaction, all-or-nothing):
1. Re-validate the token (unexpired, unused)
2. Upsert the client row when the application belongs to a user
3. Insert the registration submission
4. Insert the ticket (price 0, status active)
5. Claim the token (compare-and-set on used_at IS NULL)
6. Stamp applications.registration_completed

The compare-and-set in step 5 is the concurrency gate. Two requests that
both pass step 1 cannot both claim the token; the loser's steps 2-4 are
rolled back and it fails with TokenAlreadyUsed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from flask import current_app

from ..models import TICKET_STATUS_ACTIVE
from ..stores import RegistrationStore, StoreError, StoreRollbackError, get_store
from ..time_utils import days_from, utcnow
from ..validation import validate_registration_data
from . import token_service
from .errors import PartialCommitFailure, StorageFailure, TokenAlreadyUsed
from .requirements_service import DEFAULT_PROFILE_DEADLINE_DAYS, resolve_requirements


logger = logging.getLogger(__name__)


# Fields refreshed on an existing client; name and email are kept as first recorded
CLIENT_UPDATE_FIELDS = (
    "emergency_contact_name",
    "emergency_contact_phone",
    "medical_conditions",
    "allergies",
    "medications",
)


@dataclass(frozen=True)
class CompletedRegistration:
    registration_id: int
    ticket_id: int
    client_id: int | None


def _profile_deadline_days(requirements) -> int:
    if current_app.config.get("PROFILE_DEADLINE_FROM_REQUIREMENTS", False):
        return requirements.profile_deadline_days
    return DEFAULT_PROFILE_DEADLINE_DAYS


def _client_values(client_id: int, record, data: dict) -> dict:
    return {
        "id": client_id,
        "name": data.get("applicant_name") or record.applicant_name or "",
        "email": data.get("applicant_email") or record.applicant_email or "",
        "emergency_contact_name": data.get("emergency_contact_name"),
        "emergency_contact_phone": data.get("emergency_contact_phone"),
        "medical_conditions": data.get("medical_conditions") or "",
        "allergies": data.get("allergies") or "",
        "medications": data.get("medications") or "",
    }


def complete_registration(
    token: str,
    registration_data,
    *,
    store: RegistrationStore | None = None,
) -> CompletedRegistration:
    """
    Redeem a registration token.

    Args:
        token: Registration token from the emailed link
        registration_data: Confirmed applicant details (JSON object)

    Returns:
        CompletedRegistration with the new submission and ticket ids

    Raises:
        TokenNotFound / TokenExpired / TokenAlreadyUsed: token not redeemable
        ValidationError: registration_data rejected; nothing written
        StorageFailure: a write failed and was rolled back
        PartialCommitFailure: a write failed and the rollback failed too
    """
    store = store or get_store()

    # Read-path checks: reject before any write
    record = token_service.validate_token(token, store=store)
    requirements = resolve_requirements(record.event_id, record.application_type, store=store)
    data = validate_registration_data(registration_data, record.application_type, requirements)

    try:
        with store.transaction():
            now = utcnow()
            record = token_service.validate_token(token, store=store, now=now)

            client_id = record.user_id
            if client_id is not None:
                store.upsert("clients", _client_values(client_id, record, data), update_fields=CLIENT_UPDATE_FIELDS)

            agreement_accepted = data["agreement_accepted"]
            submission = store.insert("registration_submissions", {
                "application_id": record.application_id,
                "client_id": client_id,
                "confirmed_details": data,
                "agreement_accepted": agreement_accepted,
                "agreement_accepted_at": now if agreement_accepted else None,
                "payment_method": data.get("payment_method"),
                "payment_amount": Decimal("0"),
                "submitted_at": now,
                "profile_deadline": days_from(now, _profile_deadline_days(requirements)),
            })

            ticket = store.insert("tickets", {
                "event_id": record.event_id,
                "client_id": client_id,
                "ticket_type": record.application_type,
                "price_gbp": Decimal("0"),
                "purchase_date": now,
                "status": TICKET_STATUS_ACTIVE,
            })

            if not token_service.mark_token_used(record.token, store=store, used_at=now):
                raise TokenAlreadyUsed()

            store.update("applications", {"registration_completed": now}, id=record.application_id)
    except StoreRollbackError as exc:
        logger.error("Registration rollback failed for application %s: %s", record.application_id, exc)
        raise PartialCommitFailure() from exc
    except StoreError as exc:
        logger.warning("Registration for application %s rolled back: %s", record.application_id, exc)
        raise StorageFailure() from exc

    logger.info(
        "Registration completed: application=%s submission=%s ticket=%s",
        record.application_id, submission["id"], ticket["id"],
    )
    return CompletedRegistration(
        registration_id=submission["id"],
        ticket_id=ticket["id"],
        client_id=client_id,
    )

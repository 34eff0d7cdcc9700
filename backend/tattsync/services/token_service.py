# Overview: Service-layer operations for registration tokens; validation, minting and redemption gate.

"""
Registration Token Service

WHY: A registration token is the applicant's one-time credential for
finalising their place at an event. It is minted when an application is
approved and redeemed exactly once.

RULES:
- A token is redeemable iff used_at IS NULL and now < expires_at
- A used token always reports AlreadyUsed, even once it has also expired
- mark_token_used is the only write to a token and is a compare-and-set:
  it succeeds for at most one caller
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime

from flask import current_app

from ..stores import RegistrationStore, get_store
from ..time_utils import as_utc_naive, days_from, utcnow
from .errors import ApplicationNotFound, TokenAlreadyUsed, TokenExpired, TokenNotFound
from ..validation import ValidationError


@dataclass(frozen=True)
class TokenRecord:
    """Token row joined with the applicant and event fields the API returns."""
    token: str
    expires_at: datetime
    used_at: datetime | None
    application_id: int
    user_id: int | None
    applicant_name: str
    applicant_email: str
    application_type: str
    event_id: int
    event_name: str


def generate_token() -> str:
    """URL-safe token, 32 bytes of entropy (sent in registration links)."""
    return secrets.token_urlsafe(32)


def validate_token(
    token: str,
    *,
    store: RegistrationStore | None = None,
    now: datetime | None = None,
) -> TokenRecord:
    """
    Look up a token with its application and event, and check it is redeemable.

    Raises:
        TokenNotFound: blank token, unknown token, or dangling application or event
        TokenAlreadyUsed: used_at is set
        TokenExpired: now >= expires_at
    """
    if not isinstance(token, str) or not token.strip():
        raise TokenNotFound()

    store = store or get_store()
    row = store.get("registration_tokens", token.strip())
    if row is None:
        raise TokenNotFound()

    application = store.get("applications", row["application_id"])
    if application is None:
        raise TokenNotFound()
    event = store.get("events", application["event_id"])
    if event is None:
        raise TokenNotFound()

    if row["used_at"] is not None:
        raise TokenAlreadyUsed()

    now = now or utcnow()
    expires_at = as_utc_naive(row["expires_at"])
    if now >= expires_at:
        raise TokenExpired()

    return TokenRecord(
        token=row["token"],
        expires_at=expires_at,
        used_at=None,
        application_id=application["id"],
        user_id=application["user_id"],
        applicant_name=application["applicant_name"],
        applicant_email=application["applicant_email"],
        application_type=application["application_type"],
        event_id=application["event_id"],
        event_name=event["name"],
    )


def mark_token_used(token: str, *, store: RegistrationStore, used_at: datetime) -> bool:
    """
    Atomically claim a token.

    Equivalent to UPDATE registration_tokens SET used_at = :used_at
    WHERE token = :token AND used_at IS NULL. Returns True only for the
    caller whose update changed the row.
    """
    changed = store.update("registration_tokens", {"used_at": used_at}, token=token, used_at=None)
    return changed == 1


def issue_registration_token(
    application_id: int,
    *,
    ttl_days: int | None = None,
    store: RegistrationStore | None = None,
) -> dict:
    """
    Mint a registration token for an approved application.

    Raises:
        ApplicationNotFound: no such application
        ValidationError: application already registered, or ttl_days < 1
    """
    store = store or get_store()
    if ttl_days is None:
        ttl_days = current_app.config.get("REGISTRATION_TOKEN_TTL_DAYS", 14)
    if ttl_days < 1:
        raise ValidationError("ttl_days must be at least 1")

    with store.transaction():
        application = store.get("applications", application_id)
        if application is None:
            raise ApplicationNotFound(f"Application {application_id} not found")
        if application["registration_completed"] is not None:
            raise ValidationError(f"Application {application_id} has already completed registration")

        now = utcnow()
        return store.insert("registration_tokens", {
            "token": generate_token(),
            "application_id": application_id,
            "expires_at": days_from(now, ttl_days),
            "used_at": None,
            "created_at": now,
        })

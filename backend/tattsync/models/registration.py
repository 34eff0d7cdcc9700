from __future__ import annotations

from ..extensions import db


class RegistrationToken(db.Model):
    """
    Single-use, time-limited credential minted when an application is approved.

    REDEEMABLE iff used_at IS NULL and now < expires_at.
    used_at is written exactly once, by a conditional update guarded on
    used_at IS NULL. Rows are never deleted.
    """
    __tablename__ = "registration_tokens"

    token = db.Column(db.String(128), primary_key=True)
    application_id = db.Column(db.Integer, db.ForeignKey("applications.id"), nullable=False, index=True)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False)
    used_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    application = db.relationship("Application", backref=db.backref("registration_tokens", lazy=True))


class RegistrationSubmission(db.Model):
    """
    Durable record of what the applicant confirmed when redeeming a token.

    One row per redeemed token; confirmed_details keeps the raw payload.
    """
    __tablename__ = "registration_submissions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    application_id = db.Column(db.Integer, db.ForeignKey("applications.id"), nullable=False, index=True)
    client_id = db.Column(db.Integer, db.ForeignKey("clients.id"), nullable=True, index=True)

    confirmed_details = db.Column(db.JSON, nullable=False)
    agreement_accepted = db.Column(db.Boolean, nullable=False, default=False)
    agreement_accepted_at = db.Column(db.DateTime(timezone=True), nullable=True)

    payment_method = db.Column(db.String(32), nullable=True)
    # Written as 0; reconciled later by the payments workflow
    payment_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    submitted_at = db.Column(db.DateTime(timezone=True), nullable=False)
    profile_deadline = db.Column(db.DateTime(timezone=True), nullable=False)

from __future__ import annotations

from ..extensions import db


class Event(db.Model):
    """
    Convention event. Owned by the events subsystem; registration only reads
    the name for display.
    """
    __tablename__ = "events"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    starts_on = db.Column(db.Date, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<Event {self.id} {self.name!r}>"


class Application(db.Model):
    """
    A prospective participant's request to work or attend an event.

    Created by the applications workflow. The registration flow only sets
    registration_completed once a token has been redeemed.
    """
    __tablename__ = "applications"
    __table_args__ = (
        db.Index("ix_applications_event_type", "event_id", "application_type"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    # Account of the applicant, doubles as the client id. Null for guest applications.
    user_id = db.Column(db.Integer, nullable=True, index=True)
    event_id = db.Column(db.Integer, db.ForeignKey("events.id"), nullable=False, index=True)

    applicant_name = db.Column(db.String(200), nullable=False)
    applicant_email = db.Column(db.String(255), nullable=False)
    application_type = db.Column(db.String(32), nullable=False)  # artist, piercer, trader, ...
    status = db.Column(db.String(16), nullable=False, default="pending")  # pending, approved, rejected

    registration_completed = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    event = db.relationship("Event", backref=db.backref("applications", lazy=True))


class RegistrationRequirement(db.Model):
    """
    Payment and profile requirements for one (event, application type) pair.

    Reference data; a missing row means the defaults apply.
    """
    __tablename__ = "registration_requirements"
    __table_args__ = (
        db.UniqueConstraint("event_id", "application_type", name="uq_registration_requirements_event_type"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey("events.id"), nullable=False, index=True)
    application_type = db.Column(db.String(32), nullable=False)

    requires_payment = db.Column(db.Boolean, nullable=False, default=False)
    payment_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    agreement_text = db.Column(db.Text, nullable=True)
    profile_deadline_days = db.Column(db.Integer, nullable=False, default=30)


class PaymentSettings(db.Model):
    """Accepted payment methods for an event. At most one row per event."""
    __tablename__ = "payment_settings"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey("events.id"), nullable=False, unique=True)

    cash_enabled = db.Column(db.Boolean, nullable=False, default=False)
    cash_details = db.Column(db.Text, nullable=True)
    bank_transfer_enabled = db.Column(db.Boolean, nullable=False, default=False)
    bank_details = db.Column(db.Text, nullable=True)
    stripe_enabled = db.Column(db.Boolean, nullable=False, default=False)
    allow_installments = db.Column(db.Boolean, nullable=False, default=False)

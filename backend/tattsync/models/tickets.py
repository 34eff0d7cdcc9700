from __future__ import annotations

from ..extensions import db


TICKET_STATUS_ACTIVE = "active"


class Ticket(db.Model):
    """
    Event entry for a registered participant.

    ticket_type mirrors the application type (artist, trader, ...).
    price_gbp starts at 0 until the payment is reconciled.
    """
    __tablename__ = "tickets"
    __table_args__ = (
        db.Index("ix_tickets_event_status", "event_id", "status"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey("events.id"), nullable=False, index=True)
    client_id = db.Column(db.Integer, db.ForeignKey("clients.id"), nullable=True, index=True)

    ticket_type = db.Column(db.String(32), nullable=False)
    price_gbp = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    purchase_date = db.Column(db.DateTime(timezone=True), nullable=False)
    status = db.Column(db.String(16), nullable=False, default=TICKET_STATUS_ACTIVE, index=True)

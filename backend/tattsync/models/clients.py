from __future__ import annotations

from ..extensions import db


class Client(db.Model):
    """
    Attendee personal and medical details.

    id is the applicant's user id, so re-registering the same user updates
    the existing row instead of creating a duplicate.
    """
    __tablename__ = "clients"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(200), nullable=False, default="")
    email = db.Column(db.String(255), nullable=False, default="")

    emergency_contact_name = db.Column(db.String(200), nullable=True)
    emergency_contact_phone = db.Column(db.String(64), nullable=True)
    medical_conditions = db.Column(db.Text, nullable=True)
    allergies = db.Column(db.Text, nullable=True)
    medications = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now(), onupdate=db.func.now())

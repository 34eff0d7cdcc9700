"""Registration core: events, applications, requirements, tokens, clients, submissions, tickets

Revision ID: 20261018_registration_core
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_registration_core"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("starts_on", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("applicant_name", sa.String(200), nullable=False),
        sa.Column("applicant_email", sa.String(255), nullable=False),
        sa.Column("application_type", sa.String(32), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("registration_completed", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    with op.batch_alter_table("applications", schema=None) as batch_op:
        batch_op.create_index("ix_applications_user_id", ["user_id"], unique=False)
        batch_op.create_index("ix_applications_event_id", ["event_id"], unique=False)
        batch_op.create_index("ix_applications_event_type", ["event_id", "application_type"], unique=False)

    op.create_table(
        "registration_requirements",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("application_type", sa.String(32), nullable=False),
        sa.Column("requires_payment", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("payment_amount", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("agreement_text", sa.Text(), nullable=True),
        sa.Column("profile_deadline_days", sa.Integer(), nullable=False, server_default=sa.text("30")),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id", "application_type", name="uq_registration_requirements_event_type"),
        sqlite_autoincrement=True,
    )

    with op.batch_alter_table("registration_requirements", schema=None) as batch_op:
        batch_op.create_index("ix_registration_requirements_event_id", ["event_id"], unique=False)

    op.create_table(
        "payment_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("cash_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("cash_details", sa.Text(), nullable=True),
        sa.Column("bank_transfer_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("bank_details", sa.Text(), nullable=True),
        sa.Column("stripe_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("allow_installments", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id"),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "clients",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(200), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("emergency_contact_name", sa.String(200), nullable=True),
        sa.Column("emergency_contact_phone", sa.String(64), nullable=True),
        sa.Column("medical_conditions", sa.Text(), nullable=True),
        sa.Column("allergies", sa.Text(), nullable=True),
        sa.Column("medications", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "registration_tokens",
        sa.Column("token", sa.String(128), nullable=False),
        sa.Column("application_id", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.ForeignKeyConstraint(["application_id"], ["applications.id"]),
        sa.PrimaryKeyConstraint("token"),
    )

    with op.batch_alter_table("registration_tokens", schema=None) as batch_op:
        batch_op.create_index("ix_registration_tokens_application_id", ["application_id"], unique=False)

    op.create_table(
        "registration_submissions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("application_id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=True),
        sa.Column("confirmed_details", sa.JSON(), nullable=False),
        sa.Column("agreement_accepted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("agreement_accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("payment_method", sa.String(32), nullable=True),
        sa.Column("payment_amount", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("profile_deadline", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["application_id"], ["applications.id"]),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"]),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    with op.batch_alter_table("registration_submissions", schema=None) as batch_op:
        batch_op.create_index("ix_registration_submissions_application_id", ["application_id"], unique=False)
        batch_op.create_index("ix_registration_submissions_client_id", ["client_id"], unique=False)

    op.create_table(
        "tickets",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("event_id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=True),
        sa.Column("ticket_type", sa.String(32), nullable=False),
        sa.Column("price_gbp", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("purchase_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"]),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )

    with op.batch_alter_table("tickets", schema=None) as batch_op:
        batch_op.create_index("ix_tickets_event_id", ["event_id"], unique=False)
        batch_op.create_index("ix_tickets_client_id", ["client_id"], unique=False)
        batch_op.create_index("ix_tickets_status", ["status"], unique=False)
        batch_op.create_index("ix_tickets_event_status", ["event_id", "status"], unique=False)


def downgrade():
    op.drop_table("tickets")
    op.drop_table("registration_submissions")
    op.drop_table("registration_tokens")
    op.drop_table("clients")
    op.drop_table("payment_settings")
    op.drop_table("registration_requirements")
    op.drop_table("applications")
    op.drop_table("events")

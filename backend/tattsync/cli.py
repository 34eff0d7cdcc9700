# Overview: Flask CLI command groups for database bootstrap and registration tokens.

# backend/tattsync/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to tattsync (PowerShell: $env:FLASK_APP="tattsync").
# - Use: python -m flask <group> <command> [options]
#
# Database:
# - python -m flask system init-db
#   Create any missing tables (use `flask db upgrade` for migrated deployments).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Registration tokens:
# - python -m flask tokens issue --application-id 12 [--days 14]
#   Mint a registration token for an approved application and print it.
# - python -m flask tokens show <token>
#   Show whether a token is redeemable, expired, used, or unknown.

import click
from flask.cli import with_appcontext

from .extensions import db
from .services.errors import RegistrationError, TokenError
from .services.token_service import issue_registration_token, validate_token
from .time_utils import to_utc_z
from .validation import ValidationError


@click.group('system')
def system_group():
    """Database bootstrap commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("Tables created.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Confirm destructive reset.')
@with_appcontext
def reset_db(yes: bool):
    """Drop and recreate all tables."""
    if not yes:
        raise click.ClickException("Refusing to reset without --yes")
    db.drop_all()
    db.create_all()
    click.echo("Database reset.")


@click.group('tokens')
def tokens_group():
    """Registration token commands."""


@tokens_group.command('issue')
@click.option('--application-id', type=int, required=True, help='Approved application to invite.')
@click.option('--days', type=int, default=None, help='Token lifetime in days (default: REGISTRATION_TOKEN_TTL_DAYS).')
@with_appcontext
def issue_token(application_id: int, days: int | None):
    """Mint a registration token."""
    try:
        row = issue_registration_token(application_id, ttl_days=days)
    except (RegistrationError, ValidationError) as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Token: {row['token']}")
    click.echo(f"Expires: {to_utc_z(row['expires_at'])}")


@tokens_group.command('show')
@click.argument('token')
@with_appcontext
def show_token(token: str):
    """Show the state of a registration token."""
    try:
        record = validate_token(token)
    except TokenError as exc:
        click.echo(f"{exc.code}: {exc}")
        return
    click.echo(f"redeemable: application {record.application_id} ({record.application_type}) "
               f"for {record.event_name}, expires {to_utc_z(record.expires_at)}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(tokens_group)

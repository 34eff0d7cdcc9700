"""Alembic revision tests (schema declared by the migration, no database)."""

import importlib.util
from contextlib import nullcontext
from pathlib import Path
from types import SimpleNamespace

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


VERSIONS_DIR = Path(__file__).resolve().parents[1] / "migrations" / "versions"


class _RecordingOp:
    """Stands in for alembic.op and records create_table calls."""

    def __init__(self):
        self.tables = {}

    def create_table(self, name, *items, **kwargs):
        self.tables[name] = [item for item in items if isinstance(item, sa.Column)]

    def batch_alter_table(self, name, schema=None):
        return nullcontext(SimpleNamespace(create_index=lambda *args, **kwargs: None))


def _load_revision(monkeypatch, filename):
    spec = importlib.util.spec_from_file_location(filename.removesuffix(".py"), VERSIONS_DIR / filename)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    recorder = _RecordingOp()
    monkeypatch.setattr(module, "op", recorder)
    return module, recorder


class TestRegistrationCoreRevision:

    def test_creates_every_table(self, monkeypatch, app):
        from tattsync.extensions import db

        module, recorder = _load_revision(monkeypatch, "20261018_registration_core.py")
        module.upgrade()

        assert set(recorder.tables) == set(db.metadata.tables)

    def test_boolean_defaults_are_portable(self, monkeypatch):
        module, recorder = _load_revision(monkeypatch, "20261018_registration_core.py")
        module.upgrade()

        booleans = [
            column
            for columns in recorder.tables.values()
            for column in columns
            if isinstance(column.type, sa.Boolean) and column.server_default is not None
        ]
        assert booleans
        for column in booleans:
            default = column.server_default.arg
            assert str(default.compile(dialect=postgresql.dialect())) == "false", column.name

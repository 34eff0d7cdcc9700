# Overview: Persistent registration store backed by the Flask-SQLAlchemy session.

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..extensions import db
from .base import RegistrationStore, StoreError, StoreRollbackError


@contextmanager
def _store_errors(table: str):
    try:
        yield
    except IntegrityError as exc:
        raise StoreError("conflict", f"{table}: {exc.orig}") from exc
    except SQLAlchemyError as exc:
        raise StoreError("database_error", f"{table}: {exc}") from exc


class SqlRegistrationStore(RegistrationStore):
    """
    Store over the request-scoped db.session.

    Writes are flushed immediately (so generated ids are available) and only
    made durable when the surrounding transaction() commits.
    """
    name = "sql"

    def __init__(self):
        self._models: dict[str, type] | None = None

    def _model(self, table: str):
        if self._models is None:
            self._models = {
                mapper.class_.__tablename__: mapper.class_
                for mapper in db.Model.registry.mappers
            }
        try:
            return self._models[table]
        except KeyError:
            raise StoreError("unknown_table", f"No model mapped to table '{table}'")

    @staticmethod
    def _row(obj) -> dict:
        return {attr.key: getattr(obj, attr.key) for attr in obj.__mapper__.column_attrs}

    def get(self, table: str, key: Any) -> dict | None:
        model = self._model(table)
        with _store_errors(table):
            obj = db.session.get(model, key)
            return self._row(obj) if obj is not None else None

    def find(self, table: str, **filters: Any) -> list[dict]:
        model = self._model(table)
        with _store_errors(table):
            return [self._row(obj) for obj in db.session.query(model).filter_by(**filters).all()]

    def insert(self, table: str, values: dict) -> dict:
        model = self._model(table)
        with _store_errors(table):
            obj = model(**values)
            db.session.add(obj)
            db.session.flush()
            return self._row(obj)

    def upsert(self, table: str, values: dict, update_fields: Iterable[str] | None = None) -> dict:
        model = self._model(table)
        pk_name = model.__mapper__.primary_key[0].key
        if values.get(pk_name) is None:
            raise StoreError("invalid_key", f"{table}: upsert requires '{pk_name}'")

        with _store_errors(table):
            obj = db.session.get(model, values[pk_name])
            if obj is None:
                obj = model(**values)
                db.session.add(obj)
            else:
                fields = list(update_fields) if update_fields is not None else list(values)
                for field in fields:
                    if field != pk_name and field in values:
                        setattr(obj, field, values[field])
            db.session.flush()
            return self._row(obj)

    def update(self, table: str, values: dict, **filters: Any) -> int:
        """Single UPDATE ... WHERE; filters are part of the statement, not pre-read."""
        model = self._model(table)
        with _store_errors(table):
            return db.session.query(model).filter_by(**filters).update(
                values, synchronize_session="fetch"
            )

    @contextmanager
    def transaction(self):
        try:
            yield self
            with _store_errors("transaction"):
                db.session.commit()
        except BaseException:
            try:
                db.session.rollback()
            except SQLAlchemyError as exc:
                raise StoreRollbackError(f"rollback failed: {exc}") from exc
            raise

    def ping(self) -> None:
        with _store_errors("ping"):
            db.session.execute(text("SELECT 1"))

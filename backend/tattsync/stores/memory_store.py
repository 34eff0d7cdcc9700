# Overview: In-process registration store for development and tests.

"""
In-Memory Registration Store

Tables are dicts of rows keyed by primary key, one per table name. The
table layout (primary key, generated ids, unique constraints) is read
from the SQLAlchemy model metadata so both stores enforce the same
schema rules.

CONCURRENCY: A single re-entrant lock guards every operation. A
transaction holds the lock until it commits or rolls back, so
compare-and-set updates inside it are atomic with respect to other
threads. Rollback restores a snapshot taken when the transaction began.
"""

from __future__ import annotations

import copy
import itertools
import threading
from contextlib import contextmanager
from typing import Any, Iterable

from sqlalchemy import Integer, UniqueConstraint

from ..extensions import db
from ..time_utils import utcnow
from .base import RegistrationStore, StoreError


class _TableSchema:
    def __init__(self, table):
        self.name = table.name
        self.columns = {column.key: column for column in table.columns}
        pk_columns = list(table.primary_key.columns)
        self.primary_key = pk_columns[0].key
        pk = pk_columns[0]
        self.generated_key = isinstance(pk.type, Integer) and pk.autoincrement is not False

        unique_sets = set()
        for constraint in table.constraints:
            if isinstance(constraint, UniqueConstraint):
                unique_sets.add(tuple(column.key for column in constraint.columns))
        for column in table.columns:
            if column.unique:
                unique_sets.add((column.key,))
        self.unique_sets = sorted(unique_sets)

    def with_defaults(self, values: dict) -> dict:
        unknown = set(values) - set(self.columns)
        if unknown:
            raise StoreError("unknown_column", f"{self.name}: unknown columns {sorted(unknown)}")

        row = {}
        for key, column in self.columns.items():
            if key in values:
                row[key] = values[key]
            elif column.default is not None and column.default.is_scalar:
                row[key] = column.default.arg
            elif column.server_default is not None:
                # Only timestamp columns carry a server default
                row[key] = utcnow()
            else:
                row[key] = None
        return row


class MemoryRegistrationStore(RegistrationStore):
    name = "memory"

    def __init__(self, metadata=None):
        metadata = metadata if metadata is not None else db.metadata
        self._schemas = {name: _TableSchema(table) for name, table in metadata.tables.items()}
        self._tables: dict[str, dict[Any, dict]] = {name: {} for name in self._schemas}
        self._sequences = {name: itertools.count(1) for name in self._schemas}
        self._lock = threading.RLock()
        self._depth = 0
        self._snapshot = None

    def _schema(self, table: str) -> _TableSchema:
        try:
            return self._schemas[table]
        except KeyError:
            raise StoreError("unknown_table", f"No table named '{table}'")

    @staticmethod
    def _matches(row: dict, filters: dict) -> bool:
        return all(row.get(key) == value for key, value in filters.items())

    def _check_unique(self, schema: _TableSchema, row: dict) -> None:
        rows = self._tables[schema.name]
        pk = row[schema.primary_key]
        for columns in schema.unique_sets:
            candidate = tuple(row.get(column) for column in columns)
            if any(value is None for value in candidate):
                continue
            for other_pk, other in rows.items():
                if other_pk != pk and tuple(other.get(column) for column in columns) == candidate:
                    raise StoreError(
                        "conflict",
                        f"{schema.name}: duplicate value for {', '.join(columns)}",
                    )

    def get(self, table: str, key: Any) -> dict | None:
        self._schema(table)
        with self._lock:
            row = self._tables[table].get(key)
            return copy.deepcopy(row) if row is not None else None

    def find(self, table: str, **filters: Any) -> list[dict]:
        self._schema(table)
        with self._lock:
            return [
                copy.deepcopy(row)
                for row in self._tables[table].values()
                if self._matches(row, filters)
            ]

    def insert(self, table: str, values: dict) -> dict:
        schema = self._schema(table)
        with self._lock:
            row = schema.with_defaults(copy.deepcopy(values))
            if row[schema.primary_key] is None:
                if not schema.generated_key:
                    raise StoreError("invalid_key", f"{table}: '{schema.primary_key}' is required")
                row[schema.primary_key] = self._next_id(schema)
            if row[schema.primary_key] in self._tables[table]:
                raise StoreError("conflict", f"{table}: duplicate primary key {row[schema.primary_key]!r}")
            self._check_unique(schema, row)
            self._tables[table][row[schema.primary_key]] = row
            return copy.deepcopy(row)

    def _next_id(self, schema: _TableSchema) -> int:
        existing = self._tables[schema.name]
        while True:
            candidate = next(self._sequences[schema.name])
            if candidate not in existing:
                return candidate

    def upsert(self, table: str, values: dict, update_fields: Iterable[str] | None = None) -> dict:
        schema = self._schema(table)
        key = values.get(schema.primary_key)
        if key is None:
            raise StoreError("invalid_key", f"{table}: upsert requires '{schema.primary_key}'")

        with self._lock:
            existing = self._tables[table].get(key)
            if existing is None:
                return self.insert(table, values)

            fields = list(update_fields) if update_fields is not None else list(values)
            updated = dict(existing)
            for field in fields:
                if field != schema.primary_key and field in values:
                    updated[field] = copy.deepcopy(values[field])
            if "updated_at" in schema.columns:
                updated["updated_at"] = utcnow()
            self._check_unique(schema, updated)
            self._tables[table][key] = updated
            return copy.deepcopy(updated)

    def update(self, table: str, values: dict, **filters: Any) -> int:
        schema = self._schema(table)
        unknown = set(values) - set(schema.columns)
        if unknown:
            raise StoreError("unknown_column", f"{table}: unknown columns {sorted(unknown)}")

        with self._lock:
            matched = [key for key, row in self._tables[table].items() if self._matches(row, filters)]
            for key in matched:
                updated = dict(self._tables[table][key], **copy.deepcopy(values))
                self._check_unique(schema, updated)
                self._tables[table][key] = updated
            return len(matched)

    @contextmanager
    def transaction(self):
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                self._snapshot = copy.deepcopy(self._tables)
            self._depth += 1
            try:
                yield self
            except BaseException:
                if outermost:
                    self._tables = self._snapshot
                raise
            finally:
                self._depth -= 1
                if outermost:
                    self._snapshot = None

    def ping(self) -> None:
        return None

# Overview: Table-scoped storage contract shared by the SQL and in-memory stores.

"""
Registration Storage Contract

Stores expose rows as plain dicts keyed by column name, addressed by
table name. Both implementations must honour:

- insert() returns the stored row including its generated id
- upsert() is keyed by the table's primary key
- update() is a single conditional write and returns the number of rows
  it changed; a None filter value matches NULL
- transaction() commits on clean exit and rolls back every write on error

Failures are reported as StoreError(code, message), never as driver
exceptions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Iterable


class StoreError(Exception):
    """Structured storage failure (code + message)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class StoreRollbackError(StoreError):
    """Rollback itself failed; writes of the aborted transaction may persist."""

    def __init__(self, message: str):
        super().__init__("rollback_failed", message)


class RegistrationStore(ABC):
    name = "abstract"

    @abstractmethod
    def get(self, table: str, key: Any) -> dict | None:
        """Fetch one row by primary key."""

    @abstractmethod
    def find(self, table: str, **filters: Any) -> list[dict]:
        """All rows whose columns equal the given filters."""

    def find_one(self, table: str, **filters: Any) -> dict | None:
        rows = self.find(table, **filters)
        return rows[0] if rows else None

    @abstractmethod
    def insert(self, table: str, values: dict) -> dict:
        ...

    @abstractmethod
    def upsert(self, table: str, values: dict, update_fields: Iterable[str] | None = None) -> dict:
        """
        Insert the row, or update the existing row with the same primary key.

        On conflict only update_fields are overwritten (all given values when None).
        """

    @abstractmethod
    def update(self, table: str, values: dict, **filters: Any) -> int:
        ...

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        ...

    @abstractmethod
    def ping(self) -> None:
        """Raise StoreError if the backing storage is unreachable."""

# Overview: Registration store selection; one store per app, chosen at startup.

from flask import Flask, current_app

from .base import RegistrationStore, StoreError, StoreRollbackError
from .memory_store import MemoryRegistrationStore
from .sql_store import SqlRegistrationStore

STORE_EXTENSION_KEY = "registration_store"

STORE_BACKENDS = {
    "sql": SqlRegistrationStore,
    "memory": MemoryRegistrationStore,
}


def init_store(app: Flask) -> RegistrationStore:
    """Build the store named by REGISTRATION_STORE and attach it to the app."""
    backend = str(app.config.get("REGISTRATION_STORE", "sql")).strip().lower()
    try:
        store_cls = STORE_BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f"Unknown REGISTRATION_STORE '{backend}'. Must be one of {sorted(STORE_BACKENDS)}"
        )
    store = store_cls()
    app.extensions[STORE_EXTENSION_KEY] = store
    app.logger.info("Registration store: %s", store.name)
    return store


def get_store() -> RegistrationStore:
    return current_app.extensions[STORE_EXTENSION_KEY]


__all__ = [
    "RegistrationStore", "StoreError", "StoreRollbackError",
    "SqlRegistrationStore", "MemoryRegistrationStore",
    "init_store", "get_store",
]

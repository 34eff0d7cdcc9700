# backend/tattsync/routes/system.py
"""
System health endpoint.

Reports whether the configured registration store is reachable.
"""

import time
from flask import Blueprint, current_app, jsonify

from ..stores import StoreError, get_store
from ..time_utils import to_utc_z, utcnow

system_bp = Blueprint("system", __name__)

API_VERSION = "1.0.0"


def check_store_health() -> dict:
    """Probe the registration store and time the round trip."""
    start_time = time.time()
    store = get_store()
    try:
        store.ping()
        elapsed_ms = (time.time() - start_time) * 1000
        return {"status": "healthy", "backend": store.name, "latency_ms": round(elapsed_ms, 2)}
    except StoreError:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Registration store health check failed")
        return {
            "status": "unhealthy",
            "backend": store.name,
            "latency_ms": round(elapsed_ms, 2),
            "error": "Store error",
        }


@system_bp.get("/api/health")
def health():
    store_health = check_store_health()
    healthy = store_health["status"] == "healthy"
    return jsonify({
        "status": "ok" if healthy else "unhealthy",
        "timestamp": to_utc_z(utcnow()),
        "version": API_VERSION,
        "store": store_health,
    }), 200 if healthy else 503

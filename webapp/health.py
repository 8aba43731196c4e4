from flask import Blueprint, jsonify
from sqlalchemy import text

from .extensions import db
from core.time import utc_now_isoformat

# 認証なしのhealth用Blueprint
health_bp = Blueprint("health", __name__, url_prefix="/health")


@health_bp.get("/live")
def health_live():
    """Simple liveness probe."""
    return jsonify({"status": "ok", "server_time": utc_now_isoformat()}), 200


@health_bp.get("/ready")
def health_ready():
    """Readiness probe checking the database connection."""
    details = {}

    try:
        db.session.execute(text("SELECT 1"))
        details["db"] = "ok"
        ok = True
    except Exception:
        ok = False
        details["db"] = "error"

    status = 200 if ok else 503
    details["status"] = "ok" if ok else "error"
    return jsonify(details), status

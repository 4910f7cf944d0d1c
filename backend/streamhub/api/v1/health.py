"""Liveness plus a database round trip."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from streamhub.api.deps import json_response, timing
from streamhub.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """``200`` when the database answers ``SELECT 1``, ``503`` otherwise."""

    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        database = "fail"
    payload = {
        "status": "ok" if database == "ok" else "degraded",
        "db": database,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=200 if database == "ok" else 503)

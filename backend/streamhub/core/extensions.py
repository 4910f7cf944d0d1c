"""Extension singletons, created unbound and attached in :func:`init_app`."""

from __future__ import annotations

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Deterministic constraint names for Alembic. The relationships unique
# constraint is named on the model itself because the ledger matches it.
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Units of work flush explicitly; nothing reaches the database by accident.
db: SQLAlchemy = SQLAlchemy(
    session_options={"autoflush": False},
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def init_app(app: Flask) -> None:
    """Bind database, migrations, JWT signing and rate limiting to ``app``.

    The models package is imported here so its tables are registered on
    ``db.metadata`` before Flask-Migrate inspects it.
    """
    db.init_app(app)
    from streamhub import models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
    _sync_jwt_cookie_settings(app)
    limiter.init_app(app)


def _sync_jwt_cookie_settings(app: Flask) -> None:
    """Drive Flask-JWT-Extended's cookie helpers from the ``AUTH_COOKIE_*`` settings.

    Tokens are only ever decoded by ``TokenService``, so the library's CSRF
    double-submit cookies stay off.
    """
    cfg = app.config
    cfg["JWT_TOKEN_LOCATION"] = ["headers", "cookies"]
    cfg["JWT_ACCESS_COOKIE_NAME"] = cfg["AUTH_ACCESS_COOKIE"]
    cfg["JWT_REFRESH_COOKIE_NAME"] = cfg["AUTH_REFRESH_COOKIE"]
    cfg["JWT_ACCESS_COOKIE_PATH"] = "/"
    cfg["JWT_REFRESH_COOKIE_PATH"] = "/"
    cfg["JWT_COOKIE_SECURE"] = bool(cfg["AUTH_COOKIE_SECURE"])
    cfg["JWT_COOKIE_SAMESITE"] = cfg["AUTH_COOKIE_SAMESITE"]
    cfg["JWT_COOKIE_CSRF_PROTECT"] = False

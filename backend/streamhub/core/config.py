"""Environment-driven settings, one class per deployment flavour.

``APP_ENV`` picks the class (see :func:`get_config`); individual values are
read from environment variables, with a ``.env`` file loaded first when one
exists.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"  # development | testing | production

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Returned when the variable is unset.

    Returns
    -------
    bool
        ``True`` for ``1/true/yes/y/on`` in any case, ``False`` for anything
        else that is set.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer, treating unset or blank as ``default``."""
    raw = os.getenv(name, "")
    return int(raw) if raw.strip() else default


class BaseConfig:
    """Settings shared by every environment.

    Session tokens
    --------------
    ``JWT_ACCESS_TOKEN_EXPIRES`` and ``JWT_REFRESH_TOKEN_EXPIRES`` are the
    token lifetimes (``ACCESS_TOKEN_MINUTES`` = 15 and ``REFRESH_TOKEN_DAYS``
    = 10 by default). They also set the ``max_age`` of the matching cookies
    named by ``AUTH_ACCESS_COOKIE`` and ``AUTH_REFRESH_COOKIE``, which are
    always ``HttpOnly`` and ``Secure`` unless ``AUTH_COOKIE_SECURE`` is off.

    Rate limiting
    -------------
    ``AUTH_LOGIN_RATE_LIMIT`` is a Flask-Limiter expression for the login
    endpoint; counters live in ``RATELIMIT_STORAGE_URI``.

    Infrastructure
    --------------
    ``SQLALCHEMY_DATABASE_URI`` comes from ``DATABASE_URL``. ``CORS_ORIGINS``
    is a comma-separated allow-list and ``LOG_LEVEL`` the root log level.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ALGORITHM = "HS256"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=env_int("ACCESS_TOKEN_MINUTES", 15))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=env_int("REFRESH_TOKEN_DAYS", 10))

    AUTH_ACCESS_COOKIE = os.getenv("AUTH_ACCESS_COOKIE", "accessToken")
    AUTH_REFRESH_COOKIE = os.getenv("AUTH_REFRESH_COOKIE", "refreshToken")
    AUTH_COOKIE_SECURE = env_bool("AUTH_COOKIE_SECURE", True)
    AUTH_COOKIE_SAMESITE = os.getenv("AUTH_COOKIE_SAMESITE", "Lax")

    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local development: debug on, cookies usable over plain ``http://localhost``."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    AUTH_COOKIE_SECURE = env_bool("AUTH_COOKIE_SECURE", False)
    CORS_MAX_AGE = 600


class TestingConfig(BaseConfig):
    """Automated tests: in-memory SQLite unless ``TEST_DATABASE_URL`` is set,
    a fixed signing key, and no rate limiting so suites can log in repeatedly.
    """

    TESTING = True
    JWT_SECRET_KEY = "testing-secret-key-with-enough-entropy-for-hs256"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    RATELIMIT_ENABLED = False
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    AUTH_COOKIE_SECURE = True
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Config class named by ``APP_ENV``; unknown or unset means development."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)

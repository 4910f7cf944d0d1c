"""CORS and reverse-proxy wiring for the API surface."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from streamhub.core.logger import REQUEST_ID_HEADER


def _origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


def init_app(app: Flask) -> None:
    """Configure CORS and proxy headers for ``/api/*`` resources.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` and ``CORS_MAX_AGE`` settings are
        consulted.

    Notes
    -----
    Session cookies only travel cross-origin with credentials enabled, and
    browsers refuse credentials for a ``*`` origin. An explicit origin list
    therefore turns credential support on; a blank or ``"*"`` value allows any
    origin for bearer-token clients only.

    ``USE_PROXYFIX`` (default ``True``) trusts a single hop of
    ``X-Forwarded-*`` headers so the ``Secure`` cookie flag and client IPs used
    by the rate limiter are correct behind a TLS terminator.
    """
    origins = _origins(app.config.get("CORS_ORIGINS", ""))
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )

    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

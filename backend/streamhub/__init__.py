"""Expose the application factory at package level.

``from streamhub import create_app`` is also the gunicorn entry point
(``streamhub:create_app()``).
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]

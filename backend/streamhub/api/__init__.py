"""HTTP surface: versioned blueprint groups mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask, g


def _join(*segments: str) -> str:
    """``_join("/api/", "v1", "")`` -> ``"/api/v1"``."""
    return "/" + "/".join(s.strip("/") for s in segments if s.strip("/"))


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Mount each ``(blueprint, relative_prefix)`` below ``base_prefix``.

    An empty relative prefix mounts the blueprint at ``base_prefix`` itself.
    """
    for bp, rel_prefix in entries:
        app.register_blueprint(bp, url_prefix=_join(base_prefix, rel_prefix))


def init_app(app: Flask) -> None:
    from streamhub.api import v1

    base = _join(app.config.get("API_BASE_PREFIX", "/api"), v1.API_VERSION)
    register_blueprint_group(app, base_prefix=base, entries=v1.REGISTRY)

    @app.before_request
    def _reset_viewer() -> None:
        # Set again by require_auth / optional_auth; never carried over
        g.pop("viewer_id", None)


__all__ = ["init_app", "register_blueprint_group"]

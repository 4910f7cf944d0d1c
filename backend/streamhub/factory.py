"""``create_app``: the single place where the app is assembled."""

from __future__ import annotations

from flask import Flask

from streamhub.core.config import BaseConfig, get_config
from streamhub.core.logger import configure_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """
    Build a configured application.

    Settings come from ``config`` (a class, an object or a dotted import
    path), or from the class named by ``APP_ENV`` when it is omitted. An
    optional ``instance/<instance_config_filename>`` is layered on top.

    Registration order matters: logging before everything, the error
    handlers after the blueprints they cover.

    :rtype: flask.Flask
    """
    app = Flask(__name__, instance_relative_config=instance_relative_config)
    app.config.from_object(config if config is not None else get_config())
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from streamhub import cli
    from streamhub.api import init_app as init_api
    from streamhub.core import cors, errors, extensions, logger

    for component in (extensions, logger, cors):
        component.init_app(app)
    init_api(app)
    errors.init_app(app)
    cli.init_app(app)

    return app

import logging
import os
from typing import Optional

from flask import Flask

from .storage import EntityStore


def _env_flag(name: str, default: bool) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return str(val).strip().lower() not in ("0", "false", "no", "off", "")


def _log_level(default: int = logging.INFO) -> int:
    name = os.environ.get("LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    # getLevelName hands back a "Level X" string for names it doesn't know
    if not isinstance(level, int):
        logging.getLogger(__name__).warning("Unknown LOG_LEVEL %r; using %s", name, logging.getLevelName(default))
        return default
    return level


def create_app(store: Optional[EntityStore] = None, seed: Optional[bool] = None):
    """Build the Flask app around an entity store.

    ``store`` defaults to a fresh in-memory :class:`EntityStore`. Demo data is
    loaded when ``seed`` is true, or when it is left as ``None`` and
    ``SEED_DEMO_DATA`` is not disabled.
    """
    app = Flask(__name__)
    # app.logger is the "scouting" logger, so storage and seed inherit this level
    app.logger.setLevel(_log_level())

    if store is None:
        store = EntityStore()
    app.extensions["entity_store"] = store

    if seed is None:
        seed = _env_flag("SEED_DEMO_DATA", True)
    if seed:
        app.logger.info("Loading demo data")
        try:
            counts = store.seed()
        except Exception:  # pylint: disable=broad-except
            app.logger.exception("Error loading demo data; continuing with current store contents")
        else:
            app.logger.info("Demo data ready: %s", counts)

    from . import routes
    app.register_blueprint(routes.bp)

    return app

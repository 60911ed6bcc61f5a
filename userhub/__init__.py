import atexit
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

socketio = SocketIO()


def create_app(config_overrides: Optional[Mapping[str, Any]] = None, store=None) -> Flask:
    """
    Application factory — creates and configures the Flask app.

    *store* replaces the MongoDB-backed user store (tests inject one here).
    Without it a store is built from config and opened in a background task,
    so an unreachable database never delays or aborts startup.
    """
    from userhub.core.config import Config

    overrides = dict(config_overrides or {})
    static_dir = overrides.get("STATIC_DIR", Config.STATIC_DIR)

    app = Flask(
        __name__,
        static_folder=static_dir,
        static_url_path="",
    )
    app.config.from_object(Config)
    app.config.update(overrides)

    # One CORS origin setting covers the HTTP routes (API and bundle) and Socket.IO
    CORS(app, origins=app.config["CORS_ALLOWED_ORIGINS"])
    socketio.init_app(app, cors_allowed_origins=app.config["CORS_ALLOWED_ORIGINS"])

    # ---- Telemetry + user store ------------------------------------
    from userhub.core.telemetry import init_telemetry, instrument_app
    from userhub.database.store import UserStore

    init_telemetry()
    instrument_app(app)

    if store is None:
        store = UserStore(
            app.config["MONGODB_URI"],
            app.config["MONGODB_DB_NAME"],
            app.config["MONGODB_TIMEOUT_MS"],
        )
        atexit.register(store.close)
        socketio.start_background_task(store.open)

    app.extensions["user_store"] = store
    # -----------------------------------------------------------------

    # Register blueprints
    from userhub.web.routes import register_blueprints

    register_blueprints(app)

    # Register SocketIO handlers
    from userhub.web import sockets  # noqa: F401

    return app

"""Front-end bundle routes."""

from flask import Blueprint, current_app, send_from_directory

views_bp = Blueprint("views", __name__)


@views_bp.route("/")
def index():
    # The rest of the bundle is served by Flask's own static route at "/<path>".
    return send_from_directory(current_app.static_folder, current_app.config["INDEX_FILE"])

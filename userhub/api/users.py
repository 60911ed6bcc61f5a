from flask import Blueprint, current_app, jsonify, request

from userhub.core.audit import log_event
from userhub.core.errors import PersistenceError, ValidationError
from userhub.core.telemetry import get_meter
from userhub.validation import validate_user_input

users_bp = Blueprint("users", __name__)

meter = get_meter()
user_create_counter = meter.create_counter(
    "userhub.users.created",
    description="User creation attempts by outcome",
)


@users_bp.route("/users", methods=["POST"])
def api_create_user():
    data = request.get_json(silent=True) or {}

    result = validate_user_input(data)
    if not result.ok:
        err = ValidationError(result.violations)
        user_create_counter.add(1, {"outcome": err.kind.value})
        log_event(
            action="create_user",
            resource_type="user",
            status="failure",
            details=err.to_dict(),
        )
        return jsonify(err.to_dict()), err.status_code

    store = current_app.extensions["user_store"]
    try:
        user = store.create_user(result.value.username, result.value.email)
    except PersistenceError as exc:
        user_create_counter.add(1, {"outcome": exc.kind.value})
        log_event(
            action="create_user",
            resource_type="user",
            status="failure",
            details=exc.to_dict(),
        )
        return jsonify(exc.to_dict()), exc.status_code

    user_create_counter.add(1, {"outcome": "created"})
    log_event(action="create_user", resource_type="user", resource_id=user.id)
    return jsonify(user.to_dict()), 201

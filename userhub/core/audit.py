"""
Lifecycle events for userhub: user creation attempts and realtime
connect/disconnect.  Each event is one JSON line on stdout, separate from the
plain-text application log.
"""

import logging
import sys
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

event_logger = logging.getLogger("userhub.audit")
event_logger.setLevel(logging.INFO)
event_logger.propagate = False

log_handler = logging.StreamHandler(sys.stdout)
log_handler.setFormatter(
    jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S%z"
    )
)
event_logger.addHandler(log_handler)


def log_event(
    action: str,
    resource_type: str,
    resource_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    status: str = "success",
) -> None:
    """
    Emit one lifecycle event.

    :param action: "create_user", "socket_connect" or "socket_disconnect"
    :param resource_type: "user" or "socket"
    :param resource_id: The user's ``_id`` or the Socket.IO sid, when known
    :param details: Violations, the store error payload, or the connection state
    :param status: "success" or "failure"
    """
    event_logger.info(
        f"{action} on {resource_type} {resource_id or ''}".rstrip(),
        extra={
            "event_type": "lifecycle",
            "action": action,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "status": status,
            "details": details or {},
        },
    )

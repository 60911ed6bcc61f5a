"""
SocketIO event handlers.

The channel carries no application messages yet; it only records each
client entering ``CONNECTED`` and ``DISCONNECTED``.
"""

import logging
from enum import Enum

from flask import request

from userhub import socketio
from userhub.core.audit import log_event
from userhub.core.telemetry import get_meter

logger = logging.getLogger(__name__)

meter = get_meter()
connections_gauge = meter.create_up_down_counter(
    "userhub.realtime.connections",
    description="Currently connected realtime clients",
)


class ConnectionState(str, Enum):
    # The handshake (connecting) phase belongs to Socket.IO; handlers only see these two.
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


# Sids of connected clients.  Removed on disconnect.
CONNECTIONS: set[str] = set()


def connection_count() -> int:
    return len(CONNECTIONS)


@socketio.on("connect")
def handle_connect(auth=None):
    sid = request.sid
    CONNECTIONS.add(sid)
    connections_gauge.add(1)
    logger.info("New client connected")
    log_event(
        action="socket_connect",
        resource_type="socket",
        resource_id=sid,
        details={"state": ConnectionState.CONNECTED.value},
    )


@socketio.on("disconnect")
def handle_disconnect(reason=None):
    sid = request.sid
    if sid in CONNECTIONS:
        CONNECTIONS.discard(sid)
        connections_gauge.add(-1)

    logger.info("Client disconnected")
    log_event(
        action="socket_disconnect",
        resource_type="socket",
        resource_id=sid,
        details={
            "state": ConnectionState.DISCONNECTED.value,
            "reason": str(reason) if reason is not None else None,
        },
    )

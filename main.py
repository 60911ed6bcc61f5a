"""
userhub — entry point.

All application logic lives inside the ``userhub`` package.
Run with:  python main.py
"""

import logging

from userhub import create_app, socketio

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = create_app()

if __name__ == "__main__":
    host, port = app.config["HOST"], app.config["PORT"]
    logger.info(f"Server is running on port {port}")
    socketio.run(app, host=host, port=port)

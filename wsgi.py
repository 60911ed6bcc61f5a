import eventlet

eventlet.monkey_patch()

import logging  # noqa: E402

from userhub import create_app, socketio  # noqa: E402

logging.basicConfig(level=logging.INFO)

app = create_app()

if __name__ == "__main__":
    # This file is intended to be run by Gunicorn:
    # gunicorn --worker-class eventlet -w 1 wsgi:app
    socketio.run(app, host=app.config["HOST"], port=app.config["PORT"])

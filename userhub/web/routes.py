from flask import Flask


def register_blueprints(app: Flask) -> None:
    from userhub.api import api_bp
    from userhub.web.views import views_bp

    app.register_blueprint(views_bp)
    app.register_blueprint(api_bp, url_prefix="/api")

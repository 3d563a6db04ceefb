from datetime import timedelta

from flask import Flask, jsonify

from creatorhub.config import Config
from creatorhub.db import db
from creatorhub.errors import ServiceError
from creatorhub.extensions.extensions import cors, jwt, ma
from creatorhub.logging_config import setup_logging


def _register_blueprints(app):
    from creatorhub.routes.auth_routes import auth_bp
    from creatorhub.routes.comment_routes import comment_bp
    from creatorhub.routes.follow_routes import follow_bp
    from creatorhub.routes.media_routes import media_bp
    from creatorhub.routes.post_routes import post_bp
    from creatorhub.routes.profile_routes import profile_bp
    from creatorhub.routes.subscription_routes import subscription_bp
    from creatorhub.routes.user_routes import user_bp
    from creatorhub.routes.vote_routes import vote_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(post_bp, url_prefix="/api")
    app.register_blueprint(media_bp, url_prefix="/api")
    app.register_blueprint(comment_bp, url_prefix="/api")
    app.register_blueprint(vote_bp, url_prefix="/api")
    app.register_blueprint(subscription_bp, url_prefix="/api/subscriptions")
    app.register_blueprint(follow_bp, url_prefix="/api")
    app.register_blueprint(profile_bp, url_prefix="/api")
    app.register_blueprint(user_bp, url_prefix="/api/users")


def create_app(config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(
        minutes=app.config["JWT_ACCESS_TOKEN_MINUTES"]
    )
    app.config["JWT_REFRESH_TOKEN_EXPIRES"] = timedelta(
        days=app.config["JWT_REFRESH_TOKEN_DAYS"]
    )

    setup_logging(app.config["LOG_LEVEL"], app.config["LOG_JSON"])

    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ALLOWED_ORIGINS"]}},
        supports_credentials=True,
    )

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        return jsonify({"error": error.message}), error.status_code

    _register_blueprints(app)

    with app.app_context():
        from creatorhub import models  # noqa: F401

        db.create_all()

    return app

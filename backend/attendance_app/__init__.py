from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from .config import Config
from attendance_app.curriculum import CurriculumTable
from attendance_app.extensions import db, jwt, limiter, migrate


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    jwt.init_app(app)
    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)
    limiter.init_app(app)
    migrate.init_app(app, db)
    CurriculumTable(app=app)

    from attendance_app.routes import register_routes
    register_routes(app)
    register_jwt_handlers()
    register_error_handlers(app)

    with app.app_context():
        from attendance_app import models  # noqa: F401
        db.create_all()

    return app


def register_jwt_handlers():
    from attendance_app.models import TokenBlocklist

    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        jti = jwt_payload["jti"]
        token = db.session.query(TokenBlocklist).filter_by(jti=jti).first()
        return token is not None

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"error": "Unauthorized", "details": reason}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"error": "Invalid token"}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Token has expired"}), 401

    @jwt.revoked_token_loader
    def revoked_token(jwt_header, jwt_payload):
        return jsonify({"error": "Token has been revoked"}), 401


def register_error_handlers(app):
    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        if isinstance(error, HTTPException):
            if error.response is not None:
                return error.response
            return jsonify({"error": error.description}), error.code

        db.session.rollback()
        app.logger.exception("Unhandled error: %s", error)
        return jsonify({"error": "Server error"}), 500

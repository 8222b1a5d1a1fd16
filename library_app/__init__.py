from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from library_app.config import Config
from library_app.extensions import db, jwt, migrate


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    app.url_map.strict_slashes = False

    # models must be imported before migrate/create_all can see the tables
    from library_app.models import book, borrowing, user  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    from library_app.controllers.auth_controller import auth_bp
    from library_app.controllers.book_controller import book_bp
    from library_app.controllers.borrowing_controller import borrowing_bp
    from library_app.controllers.user_controller import user_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(book_bp, url_prefix="/books")
    app.register_blueprint(borrowing_bp, url_prefix="/borrowings")
    app.register_blueprint(user_bp, url_prefix="/users")

    from library_app.cli import register_commands
    register_commands(app)

    _register_error_handlers(app)

    @app.get("/health")
    def health():
        return jsonify({"ok": True, "status": "healthy"})

    return app


def _register_error_handlers(app):
    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(e):
        db.session.rollback()
        app.logger.exception(f"[storage] unhandled database error: {e}")
        return jsonify({"success": False, "message": "Internal storage error", "error": "storage"}), 500

    @jwt.unauthorized_loader
    @jwt.invalid_token_loader
    def handle_missing_or_bad_token(reason):
        return jsonify({"success": False, "message": reason, "error": "unauthorized"}), 401

    @jwt.expired_token_loader
    def handle_expired_token(_jwt_header, _jwt_payload):
        return jsonify({"success": False, "message": "Token has expired", "error": "unauthorized"}), 401

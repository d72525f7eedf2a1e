from flask import jsonify
from sqlalchemy.exc import IntegrityError

from turftrack.extensions import db


class AppError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None, field=None):
        super().__init__(message)
        self.message = message
        self.field = field
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        body = {"error": self.message}
        if self.field:
            body["field"] = self.field
        return body


def _error(message, status_code):
    return jsonify({"error": message}), status_code


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(_err):
        app.logger.warning("Database integrity error")
        db.session.rollback()
        return _error("Conflict. Resource already exists.", 409)

    @app.errorhandler(400)
    def bad_request(_err):
        return _error("Bad request", 400)

    @app.errorhandler(401)
    def unauthorized(_err):
        return _error("Unauthorized", 401)

    @app.errorhandler(403)
    def forbidden(_err):
        return _error("Forbidden", 403)

    @app.errorhandler(404)
    def not_found(_err):
        return _error("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_err):
        return _error("Method not allowed", 405)

    @app.errorhandler(413)
    def payload_too_large(_err):
        return _error("Upload too large", 413)

    @app.errorhandler(429)
    def rate_limited(_err):
        return _error("Too many requests", 429)

    @app.errorhandler(500)
    def server_error(_err):
        app.logger.exception("Internal server error")
        return _error("Internal server error", 500)

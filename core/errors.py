import traceback

from werkzeug.exceptions import HTTPException

from core.imports import jsonify, current_app, SQLAlchemyError, ValidationError, logging
from core.extensions import db, jwt

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error raised from handlers and services that maps to a JSON response."""

    status = 400

    def __init__(self, message, status=None, **extra):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        self.extra = extra

    def to_dict(self):
        return {"error": self.message, **self.extra}


class NotFound(ApiError):
    status = 404


class Conflict(ApiError):
    status = 409


def _is_development():
    return current_app.config.get("ENV_NAME") == "development"


def _is_production():
    return current_app.config.get("ENV_NAME") == "production"


def register_error_handlers(app):

    @app.errorhandler(ValidationError)
    def handle_validation_error(err):
        details = [
            {"field": ".".join(str(part) for part in e["loc"]), "message": e["msg"]}
            for e in err.errors()
        ]
        return jsonify({"error": "Validation error", "details": details}), 400

    @app.errorhandler(ApiError)
    def handle_api_error(err):
        return jsonify(err.to_dict()), err.status

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(err):
        db.session.rollback()
        logger.error("Database error: %s", err)
        body = {"error": "Database error"}
        if _is_development():
            body["message"] = str(err)
        return jsonify(body), 500

    @app.errorhandler(404)
    def handle_not_found(err):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"error": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        logger.exception("Unhandled error")
        body = {"error": str(err) or "Internal server error"}
        if not _is_production():
            body["stack"] = traceback.format_exc()
        return jsonify(body), 500


@jwt.unauthorized_loader
def missing_token(reason):
    return jsonify({
        "error": "No token provided",
        "message": "Please include Authorization header with Bearer token"
    }), 401


@jwt.invalid_token_loader
def invalid_token(reason):
    logger.warning("Rejected token: %s", reason)
    return jsonify({"error": "Invalid token", "message": reason}), 401


@jwt.expired_token_loader
def expired_token(jwt_header, jwt_payload):
    return jsonify({"error": "Invalid token", "message": "Token has expired"}), 401

import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status = 500

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class ValidationError(ApiError):
    status = 400


class InvalidDate(ValidationError):
    def __init__(self, message="Invalid date format. Use YYYY-MM-DD"):
        super().__init__(message)


class Unauthorized(ApiError):
    status = 401


class Forbidden(ApiError):
    status = 403


class NotFound(ApiError):
    status = 404


def respond(message, data=None, status=200):
    body = {"success": 200 <= status < 400, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        logger.debug(f"{request.method} {request.path} -> {error.status}: {error.message}")
        return respond(error.message, status=error.status)

    @app.errorhandler(404)
    def handle_not_found(error):
        return respond(f"Route {request.path} not found", status=404)

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return respond(f"Method {request.method} not allowed on {request.path}", status=405)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        if isinstance(error, HTTPException):
            return respond(error.description, status=error.code)
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return respond("Internal Server Error", status=500)

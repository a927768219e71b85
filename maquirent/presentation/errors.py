"""
JSON error responses for the /api surface. Other paths keep Flask's defaults.
"""

from flask import jsonify, request
from werkzeug.exceptions import HTTPException, InternalServerError

from maquirent.utils.logger import get_logger
from maquirent.utils.logging_sanitizer import sanitize_exception_message

logger = get_logger("maquirent.presentation.errors")

ERROR_MESSAGES = {
    404: 'Recurso no encontrado',
    405: 'Método no permitido',
    429: 'Demasiadas solicitudes',
    500: 'Error interno del servidor',
}


def _is_api_request() -> bool:
    return request.path == '/api' or request.path.startswith('/api/')


def _json_error(status: int, description=None):
    payload = {'error': ERROR_MESSAGES.get(status, 'Error'), 'status': status}
    if description:
        payload['message'] = description
    return jsonify(payload), status


def register_error_handlers(app):

    @app.errorhandler(404)
    @app.errorhandler(405)
    @app.errorhandler(429)
    def handle_http_error(error: HTTPException):
        if not _is_api_request():
            return error
        return _json_error(error.code)

    @app.errorhandler(500)
    def handle_server_error(error):
        original = getattr(error, 'original_exception', None) or error
        logger.error(
            f"Unhandled error on {request.method} {request.path}: {sanitize_exception_message(original)}",
            exc_info=original if isinstance(original, BaseException) else None,
        )
        if not _is_api_request():
            return error if isinstance(error, HTTPException) else InternalServerError()
        return _json_error(500)

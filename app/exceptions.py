"""
Ops Board - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify
from flask_limiter.errors import RateLimitExceeded
from werkzeug.exceptions import HTTPException

logger = structlog.get_logger('exceptions')


class OpsBoardException(Exception):
    """Base exception for the ops board"""
    status_code = 400

    def __init__(self, message: str, code: str = "OPSBOARD_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'success': False,
            'code': self.code,
            'message': self.message
        }


class ConfigurationException(OpsBoardException):
    """Invalid startup configuration"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR")
        logger.error(f"Configuration error: {message}")


class DatabaseException(OpsBoardException):
    """Database-related exceptions"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="DATABASE_ERROR")
        logger.error(f"Database error: {message}")

    def to_dict(self):
        # Storage detail stays in the server log
        return {
            'success': False,
            'code': self.code,
            'message': 'A storage error occurred'
        }


class ValidationException(OpsBoardException):
    """Validation-related exceptions"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")
        logger.warning(f"Validation error: {message}")


class AuthenticationException(OpsBoardException):
    """Authentication-related exceptions"""
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="UNAUTHORIZED")
        logger.warning(f"Authentication error: {message}")


class AuthorizationException(OpsBoardException):
    """Authorization-related exceptions"""
    status_code = 403

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code="FORBIDDEN")
        logger.warning(f"Authorization error: {message}")


class ConflictException(OpsBoardException):
    """Uniqueness conflicts"""
    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")
        logger.warning(f"Conflict: {message}")


def _envelope(code, message, status):
    return jsonify({'success': False, 'code': code, 'message': message}), status


def register_exception_handlers(app):
    """Every failure leaves the app as the same JSON envelope"""

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(e):
        logger.warning("Rate limit hit", limit=str(e.description))
        return _envelope('RATE_LIMIT_EXCEEDED', 'Too many requests, please try again later.', 429)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return _envelope(e.name.upper().replace(' ', '_'), e.description, e.code)

    @app.errorhandler(OpsBoardException)
    def handle_opsboard_exception(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(e):
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return _envelope('INTERNAL_ERROR', 'Something went wrong!', 500)

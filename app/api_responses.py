"""
API Response Utilities - the JSON envelope shared by every endpoint
"""

from flask import jsonify, request
from functools import wraps
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from exceptions import OpsBoardException
from utils import sanitize_sensitive_data
import logging

logger = logging.getLogger(__name__)


class ErrorCode:
    SUCCESS = "SUCCESS"
    INTERNAL_ERROR = "INTERNAL_ERROR"


DEFAULT_ERROR_MESSAGES = {
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred",
}


def success_response(data=None, message=None, status_code=200):
    response = {"code": ErrorCode.SUCCESS, "success": True}
    if data is not None:
        response["data"] = data
    if message:
        response["message"] = message
    return jsonify(response), status_code


def created_response(entity_id, message=None):
    """201 with the new row's id, the answer to every create endpoint"""
    return success_response(data={"id": entity_id}, message=message, status_code=201)


def error_response(error_code=ErrorCode.INTERNAL_ERROR, message=None, status_code=400):
    response = {
        "code": error_code,
        "success": False,
        "message": message or DEFAULT_ERROR_MESSAGES.get(error_code, "Request failed"),
    }
    return jsonify(response), status_code


def handle_api_errors(failure_message):
    """
    Decorator to standardize error handling for API endpoints.

    Domain exceptions pass through to the registered handlers; storage and
    unexpected failures are logged with detail and answered with the
    endpoint's generic failure message.
    """

    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except (OpsBoardException, HTTPException):
                raise
            except SQLAlchemyError as e:
                logger.error(f"Storage error in {f.__name__}: {e}", exc_info=True)
                return error_response(ErrorCode.INTERNAL_ERROR, message=failure_message, status_code=500)
            except Exception as e:
                logger.error(
                    f"Unhandled exception in {f.__name__}: {e} | Payload: "
                    f"{sanitize_sensitive_data(request.get_json(silent=True))}",
                    exc_info=True,
                )
                return error_response(ErrorCode.INTERNAL_ERROR, message=failure_message, status_code=500)

        return wrapper

    return decorator

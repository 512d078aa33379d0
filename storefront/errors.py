"""
Store-level error taxonomy and the Flask handlers that translate it to HTTP

Stores raise the typed errors below; the handlers registered by
register_error_handlers() are the only place they become status codes.
"""
import logging
from typing import Any, Dict, List, Optional

import pydantic
from flask import jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from storefront import db
from storefront.monitoring import report_error

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base class for failures the API layer knows how to answer"""

    http_status = 500
    error_category = "unknown"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        data = {'message': self.message}
        if self.errors:
            data['errors'] = self.errors
        return data


class ValidationError(StorefrontError):
    """Malformed or missing fields, non-positive quantity, non-numeric id"""

    http_status = 400
    error_category = "validation"


class InvalidReference(ValidationError):
    """A payload refers to a row that does not exist"""

    error_category = "invalid_reference"


class EmptyOrder(ValidationError):
    """Checkout attempted with zero line items"""

    error_category = "empty_order"

    def __init__(self, message: str = "Order must contain at least one item"):
        super().__init__(message)


class NotFound(StorefrontError):
    http_status = 404
    error_category = "not_found"


class InvalidTransition(StorefrontError):
    """Order status change that the workflow does not allow"""

    http_status = 409
    error_category = "invalid_transition"


def pydantic_errors(error: pydantic.ValidationError) -> List[Dict[str, Any]]:
    """Field-level error details from a pydantic ValidationError, JSON-safe"""
    return [
        {
            'field': '.'.join(str(part) for part in detail['loc']),
            'message': detail['msg'],
            'type': detail['type'],
        }
        for detail in error.errors()
    ]


def _context() -> Dict[str, Any]:
    return {'endpoint': request.endpoint, 'method': request.method, 'path': request.path}


def register_error_handlers(app):
    """
    Register JSON error handlers on the Flask application

    Args:
        app: Flask application instance
    """

    @app.errorhandler(StorefrontError)
    def handle_storefront_error(error):
        log = logger.info if error.http_status == 404 else logger.warning
        log(f"{error.error_category.upper()}: {error.message}", extra={
            'event_type': 'request_rejected',
            'error_category': error.error_category,
            'http_status': error.http_status,
            **_context()
        })
        return jsonify(error.to_dict()), error.http_status

    @app.errorhandler(pydantic.ValidationError)
    def handle_payload_error(error):
        details = pydantic_errors(error)
        logger.warning(f"Invalid payload: {len(details)} field error(s)", extra={
            'event_type': 'request_rejected',
            'error_category': 'validation',
            'http_status': 400,
            **_context()
        })
        return jsonify({'message': 'Invalid request data', 'errors': details}), 400

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        logger.error(f"Database error: {error}", exc_info=error, extra={
            'event_type': 'database_error',
            **_context()
        })
        report_error(error, 'database', _context())
        return jsonify({'message': 'Internal server error'}), 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        logger.error(f"Unhandled error: {error}", exc_info=error, extra={
            'event_type': 'unhandled_error',
            **_context()
        })
        report_error(error, 'unhandled', _context())
        return jsonify({'message': 'Internal server error'}), 500

    logger.debug("Error handlers registered")

from flask import jsonify
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError as SchemaValidationError
import logging

from warehouse_service.exceptions import InventoryError

logger = logging.getLogger(__name__)


def error_response(error):
    """JSON body and status for an inventory error"""
    body = error.to_dict()
    body['status_code'] = error.status_code
    return body, error.status_code


def schema_error_response(error):
    """JSON body and status for a marshmallow validation failure"""
    return {
        'error': 'Validation Error',
        'code': 'VALIDATION_ERROR',
        'message': 'Request data validation failed',
        'details': error.messages,
        'status_code': 400
    }, 400


def register_error_handlers(app):
    """Register application error handlers"""

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({
            'error': 'Bad Request',
            'message': 'The request could not be understood by the server',
            'status_code': 400
        }), 400

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'Not Found',
            'message': 'The requested resource was not found',
            'status_code': 404
        }), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {error}")
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'An unexpected error occurred',
            'status_code': 500
        }), 500

    @app.errorhandler(SchemaValidationError)
    def validation_error(error):
        body, status = schema_error_response(error)
        return jsonify(body), status

    @app.errorhandler(InventoryError)
    def inventory_error(error):
        if error.status_code >= 500:
            logger.error(f"{error.code}: {error.message}")
        body, status = error_response(error)
        return jsonify(body), status

    @app.errorhandler(HTTPException)
    def http_exception(error):
        return jsonify({
            'error': error.name,
            'message': error.description,
            'status_code': error.code
        }), error.code

"""
Movements Controller - Posting and reading stock movements
"""

from flask import request
from flask_restx import Namespace, Resource
from marshmallow import ValidationError as SchemaValidationError
import logging

from warehouse_service.api.middlewares.auth import (
    require_roles, get_current_user_id, ROLE_ADMIN, ROLE_SUPERVISOR, ROLE_OPERATOR
)
from warehouse_service.exceptions import InventoryError
from warehouse_service.services import MovementService
from warehouse_service.utils.error_handlers import error_response, schema_error_response
from warehouse_service.utils.schemas import (
    MovementRequestSchema, MovementResponseSchema, MovementDetailResponseSchema
)

logger = logging.getLogger(__name__)

movements_ns = Namespace('movements', path='/movements', description='Stock movement ledger')

# Initialize schemas
movement_request_schema = MovementRequestSchema()
movement_response_schema = MovementResponseSchema()
movement_detail_response_schema = MovementDetailResponseSchema()


@movements_ns.route('')
class MovementList(Resource):
    @movements_ns.doc('list_movements', params={'type': 'Movement type filter'})
    def get(self):
        """List movements newest first"""
        try:
            movements = MovementService().get_movements(request.args.get('type'))
            return movement_response_schema.dump([m.to_dict() for m in movements], many=True), 200
        except InventoryError as e:
            return error_response(e)

    @movements_ns.doc('post_movement')
    @require_roles(ROLE_ADMIN, ROLE_SUPERVISOR, ROLE_OPERATOR)
    def post(self):
        """Post a movement (entrada, salida, transferencia, ajuste)"""
        try:
            movement_request = movement_request_schema.load(request.get_json(silent=True) or {})
            movement_request.user_id = get_current_user_id()

            movement = MovementService().post_movement_with_retry(movement_request)

            return movement_response_schema.dump(movement.to_dict(include_details=True)), 201

        except SchemaValidationError as e:
            return schema_error_response(e)
        except InventoryError as e:
            return error_response(e)


@movements_ns.route('/next-folio')
class NextFolio(Resource):
    @movements_ns.doc('next_folio', params={'type': 'Movement type'})
    def get(self):
        """Preview the folio the next movement of a type will get"""
        try:
            movement_type = request.args.get('type')
            folio = MovementService().peek_next_folio(movement_type)
            return {'type': movement_type, 'folio': folio}, 200
        except InventoryError as e:
            return error_response(e)


@movements_ns.route('/folio/<string:folio>')
class MovementByFolio(Resource):
    @movements_ns.doc('get_movement_by_folio')
    def get(self, folio):
        """Get a movement with its lines by folio"""
        movement = MovementService().get_movement_by_folio(folio)
        if not movement:
            return {'error': 'Movement not found'}, 404
        return movement_response_schema.dump(movement.to_dict(include_details=True)), 200


@movements_ns.route('/<string:movement_id>')
class MovementItem(Resource):
    @movements_ns.doc('get_movement')
    def get(self, movement_id):
        """Get a movement with its lines"""
        movement = MovementService().get_movement(movement_id)
        if not movement:
            return {'error': 'Movement not found'}, 404
        return movement_response_schema.dump(movement.to_dict(include_details=True)), 200


@movements_ns.route('/<string:movement_id>/details')
class MovementDetails(Resource):
    @movements_ns.doc('get_movement_details')
    def get(self, movement_id):
        """Get the lines of a movement"""
        details = MovementService().get_movement_details(movement_id)
        return movement_detail_response_schema.dump([d.to_dict() for d in details], many=True), 200

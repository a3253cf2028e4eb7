"""
Stock Controller - Current quantities per product and warehouse
"""

from flask import request
from flask_restx import Namespace, Resource

from warehouse_service.services import ReportingService
from warehouse_service.utils.schemas import StockEntryResponseSchema

stock_ns = Namespace('stock', path='/stock', description='Stock levels')

stock_response_schema = StockEntryResponseSchema()


@stock_ns.route('')
class StockList(Resource):
    @stock_ns.doc('get_stock', params={'warehouseId': 'Only rows of this warehouse'})
    def get(self):
        """Stock rows of active products"""
        warehouse_id = request.args.get('warehouseId') or request.args.get('warehouse_id')
        entries = ReportingService().get_stock(warehouse_id)
        return stock_response_schema.dump(entries, many=True), 200

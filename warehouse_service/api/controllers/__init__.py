"""
Controllers package initialization
"""

from flask import Blueprint
from flask_restx import Api

from warehouse_service.exceptions import InventoryError
from warehouse_service.api.controllers.catalog import products_ns, warehouses_ns, categories_ns
from warehouse_service.api.controllers.movements import movements_ns
from warehouse_service.api.controllers.stock import stock_ns
from warehouse_service.api.controllers.stats import stats_bp
from warehouse_service.api.controllers.health import health_bp
from warehouse_service.utils.error_handlers import error_response

# REST API blueprint, mounted under /api
api_bp = Blueprint('api', __name__)
api = Api(api_bp, version='1.0', title='Warehouse Inventory API',
          description='Catalog, stock and movement endpoints', doc='/docs/')

for namespace in (products_ns, categories_ns, warehouses_ns, stock_ns, movements_ns):
    api.add_namespace(namespace)


@api.errorhandler(InventoryError)
def handle_inventory_error(error):
    body, _ = error_response(error)
    return body, error.status_code


__all__ = ['api_bp', 'api', 'stats_bp', 'health_bp']

"""
Catalog Controller - Products, categories and warehouses
"""

from flask import request
from flask_restx import Namespace, Resource
from marshmallow import ValidationError as SchemaValidationError
import logging

from warehouse_service.api.middlewares.auth import require_roles, ROLE_ADMIN, ROLE_SUPERVISOR
from warehouse_service.exceptions import InventoryError
from warehouse_service.services import CatalogService
from warehouse_service.utils.error_handlers import error_response, schema_error_response
from warehouse_service.utils.schemas import (
    ProductRequestSchema, ProductResponseSchema,
    WarehouseRequestSchema, WarehouseResponseSchema,
    CategoryRequestSchema, CategoryResponseSchema
)

logger = logging.getLogger(__name__)

products_ns = Namespace('products', path='/products', description='Product catalog')
warehouses_ns = Namespace('warehouses', path='/warehouses', description='Warehouse catalog')
categories_ns = Namespace('categories', path='/categories', description='Product categories')

# Initialize schemas
product_request_schema = ProductRequestSchema()
product_response_schema = ProductResponseSchema()
warehouse_request_schema = WarehouseRequestSchema()
warehouse_response_schema = WarehouseResponseSchema()
category_request_schema = CategoryRequestSchema()
category_response_schema = CategoryResponseSchema()


def _include_inactive():
    return request.args.get('include_inactive', 'true').lower() != 'false'


@products_ns.route('')
class ProductList(Resource):
    @products_ns.doc('list_products')
    def get(self):
        """List products ordered by code"""
        products = CatalogService().list_products(include_inactive=_include_inactive())
        return product_response_schema.dump(products, many=True), 200

    @products_ns.doc('create_product')
    @require_roles(ROLE_ADMIN, ROLE_SUPERVISOR)
    def post(self):
        """Create a product"""
        try:
            data = product_request_schema.load(request.get_json(silent=True) or {})
            product = CatalogService().create_product(**data)
            return product_response_schema.dump(product), 201
        except SchemaValidationError as e:
            return schema_error_response(e)
        except InventoryError as e:
            return error_response(e)


@products_ns.route('/<string:product_id>')
class ProductItem(Resource):
    @products_ns.doc('get_product')
    def get(self, product_id):
        """Get a product"""
        product = CatalogService().get_product(product_id)
        if not product:
            return {'error': 'Product not found'}, 404
        return product_response_schema.dump(product), 200

    @products_ns.doc('update_product')
    @require_roles(ROLE_ADMIN, ROLE_SUPERVISOR)
    def patch(self, product_id):
        """Update some fields of a product"""
        try:
            data = product_request_schema.load(request.get_json(silent=True) or {}, partial=True)
            product = CatalogService().update_product(product_id, **data)
            return product_response_schema.dump(product), 200
        except SchemaValidationError as e:
            return schema_error_response(e)
        except InventoryError as e:
            return error_response(e)

    @products_ns.doc('delete_product')
    @require_roles(ROLE_ADMIN, ROLE_SUPERVISOR)
    def delete(self, product_id):
        """Deactivate a product; it is never removed"""
        if not CatalogService().deactivate_product(product_id):
            return {'error': 'Product not found'}, 404
        return '', 204


@categories_ns.route('')
class CategoryList(Resource):
    @categories_ns.doc('list_categories')
    def get(self):
        """List categories ordered by name"""
        return category_response_schema.dump(CatalogService().list_categories(), many=True), 200

    @categories_ns.doc('create_category')
    @require_roles(ROLE_ADMIN, ROLE_SUPERVISOR)
    def post(self):
        """Create a category"""
        try:
            data = category_request_schema.load(request.get_json(silent=True) or {})
            category = CatalogService().create_category(**data)
            return category_response_schema.dump(category), 201
        except SchemaValidationError as e:
            return schema_error_response(e)
        except InventoryError as e:
            return error_response(e)


@warehouses_ns.route('')
class WarehouseList(Resource):
    @warehouses_ns.doc('list_warehouses')
    def get(self):
        """List warehouses ordered by code"""
        warehouses = CatalogService().list_warehouses(include_inactive=_include_inactive())
        return warehouse_response_schema.dump(warehouses, many=True), 200

    @warehouses_ns.doc('create_warehouse')
    @require_roles(ROLE_ADMIN, ROLE_SUPERVISOR)
    def post(self):
        """Create a warehouse"""
        try:
            data = warehouse_request_schema.load(request.get_json(silent=True) or {})
            warehouse = CatalogService().create_warehouse(**data)
            return warehouse_response_schema.dump(warehouse), 201
        except SchemaValidationError as e:
            return schema_error_response(e)
        except InventoryError as e:
            return error_response(e)


@warehouses_ns.route('/<string:warehouse_id>')
class WarehouseItem(Resource):
    @warehouses_ns.doc('get_warehouse')
    def get(self, warehouse_id):
        """Get a warehouse"""
        warehouse = CatalogService().get_warehouse(warehouse_id)
        if not warehouse:
            return {'error': 'Warehouse not found'}, 404
        return warehouse_response_schema.dump(warehouse), 200

    @warehouses_ns.doc('update_warehouse')
    @require_roles(ROLE_ADMIN, ROLE_SUPERVISOR)
    def patch(self, warehouse_id):
        """Update some fields of a warehouse"""
        try:
            data = warehouse_request_schema.load(request.get_json(silent=True) or {}, partial=True)
            warehouse = CatalogService().update_warehouse(warehouse_id, **data)
            return warehouse_response_schema.dump(warehouse), 200
        except SchemaValidationError as e:
            return schema_error_response(e)
        except InventoryError as e:
            return error_response(e)

    @warehouses_ns.doc('delete_warehouse')
    @require_roles(ROLE_ADMIN, ROLE_SUPERVISOR)
    def delete(self, warehouse_id):
        """Deactivate a warehouse; it is never removed"""
        if not CatalogService().deactivate_warehouse(warehouse_id):
            return {'error': 'Warehouse not found'}, 404
        return '', 204

"""
Catalog Service - Products, categories and warehouses
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional
import logging

from warehouse_service.exceptions import ReferenceNotFound, ValidationError
from warehouse_service.models import Category, Product, Warehouse
from warehouse_service.repositories import CatalogRepository

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = (
    'code', 'name', 'description', 'category_id', 'unit', 'min_stock', 'standard_cost', 'is_active'
)
WAREHOUSE_FIELDS = ('code', 'name', 'location', 'manager', 'is_active')


class CatalogService:
    """Business logic for catalog records

    Nothing here is ever hard-deleted: deleting a product or warehouse
    clears its active flag, because stock rows and posted movements keep
    referencing it.
    """

    def __init__(self, catalog_repo=None):
        self.catalog_repo = catalog_repo or CatalogRepository()

    # Products

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        product = self.catalog_repo.get_product(product_id)
        return product.to_dict() if product else None

    def list_products(self, include_inactive: bool = True) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self.catalog_repo.list_products(include_inactive)]

    def create_product(self, **kwargs) -> Dict[str, Any]:
        """Create a new product"""
        self._check_category(kwargs.get('category_id'))
        self._check_non_negative(kwargs, 'min_stock')
        self._check_non_negative(kwargs, 'standard_cost')

        product = Product(**{k: v for k, v in kwargs.items() if k in PRODUCT_FIELDS})
        if product.standard_cost is None:
            product.standard_cost = Decimal('0')
        created = self.catalog_repo.create(product)
        logger.info(f"Created product {created.code} ({created.id})")
        return created.to_dict()

    def update_product(self, product_id: str, **kwargs) -> Dict[str, Any]:
        """Update a product"""
        product = self.catalog_repo.get_product(product_id)
        if not product:
            raise ReferenceNotFound('Product', product_id)

        if 'category_id' in kwargs:
            self._check_category(kwargs['category_id'])
        self._check_non_negative(kwargs, 'min_stock')
        self._check_non_negative(kwargs, 'standard_cost')

        for key, value in kwargs.items():
            if key in PRODUCT_FIELDS:
                setattr(product, key, value)

        updated = self.catalog_repo.update(product)
        return updated.to_dict()

    def deactivate_product(self, product_id: str) -> bool:
        """Soft-delete a product"""
        product = self.catalog_repo.get_product(product_id)
        if not product:
            return False
        product.is_active = False
        self.catalog_repo.update(product)
        logger.info(f"Deactivated product {product.code}")
        return True

    # Warehouses

    def get_warehouse(self, warehouse_id: str) -> Optional[Dict[str, Any]]:
        warehouse = self.catalog_repo.get_warehouse(warehouse_id)
        return warehouse.to_dict() if warehouse else None

    def list_warehouses(self, include_inactive: bool = True) -> List[Dict[str, Any]]:
        return [w.to_dict() for w in self.catalog_repo.list_warehouses(include_inactive)]

    def create_warehouse(self, **kwargs) -> Dict[str, Any]:
        """Create a new warehouse"""
        warehouse = Warehouse(**{k: v for k, v in kwargs.items() if k in WAREHOUSE_FIELDS})
        created = self.catalog_repo.create(warehouse)
        logger.info(f"Created warehouse {created.code} ({created.id})")
        return created.to_dict()

    def update_warehouse(self, warehouse_id: str, **kwargs) -> Dict[str, Any]:
        """Update a warehouse"""
        warehouse = self.catalog_repo.get_warehouse(warehouse_id)
        if not warehouse:
            raise ReferenceNotFound('Warehouse', warehouse_id)

        for key, value in kwargs.items():
            if key in WAREHOUSE_FIELDS:
                setattr(warehouse, key, value)

        updated = self.catalog_repo.update(warehouse)
        return updated.to_dict()

    def deactivate_warehouse(self, warehouse_id: str) -> bool:
        """Soft-delete a warehouse"""
        warehouse = self.catalog_repo.get_warehouse(warehouse_id)
        if not warehouse:
            return False
        warehouse.is_active = False
        self.catalog_repo.update(warehouse)
        logger.info(f"Deactivated warehouse {warehouse.code}")
        return True

    # Categories

    def list_categories(self) -> List[Dict[str, Any]]:
        return [c.to_dict() for c in self.catalog_repo.list_categories()]

    def create_category(self, name: str, description: str = None) -> Dict[str, Any]:
        """Create a new category"""
        category = Category(name=name, description=description)
        return self.catalog_repo.create(category).to_dict()

    def _check_category(self, category_id):
        if category_id and not self.catalog_repo.get_category(category_id):
            raise ReferenceNotFound('Category', category_id)

    @staticmethod
    def _check_non_negative(data, field):
        value = data.get(field)
        if value is not None and value < 0:
            raise ValidationError(f"{field} cannot be negative", field=field)

"""
Catalog Repository Implementation
"""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from warehouse_service.database import db
from warehouse_service.exceptions import ValidationError
from warehouse_service.models import Category, Product, Warehouse
from .base import CatalogRepositoryInterface


class CatalogRepository(CatalogRepositoryInterface):
    """Concrete implementation of the catalog repository"""

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get product by ID"""
        return db.session.get(Product, product_id)

    def get_products_by_ids(self, product_ids: List[str]) -> List[Product]:
        """Get multiple products by ID"""
        if not product_ids:
            return []
        return Product.query.filter(Product.id.in_(product_ids)).all()

    def list_products(self, include_inactive: bool = True) -> List[Product]:
        """List products ordered by code"""
        query = Product.query
        if not include_inactive:
            query = query.filter_by(is_active=True)
        return query.order_by(Product.code.asc()).all()

    def get_warehouse(self, warehouse_id: str) -> Optional[Warehouse]:
        """Get warehouse by ID"""
        return db.session.get(Warehouse, warehouse_id)

    def list_warehouses(self, include_inactive: bool = True) -> List[Warehouse]:
        """List warehouses ordered by code"""
        query = Warehouse.query
        if not include_inactive:
            query = query.filter_by(is_active=True)
        return query.order_by(Warehouse.code.asc()).all()

    def get_category(self, category_id: str) -> Optional[Category]:
        """Get category by ID"""
        return db.session.get(Category, category_id)

    def list_categories(self) -> List[Category]:
        """List categories ordered by name"""
        return Category.query.order_by(Category.name.asc()).all()

    def create(self, record):
        """Create a catalog record (product, warehouse or category)"""
        try:
            db.session.add(record)
            db.session.commit()
            return record
        except IntegrityError:
            db.session.rollback()
            raise ValidationError(f"{type(record).__name__} {self._natural_key(record)} already exists")

    def update(self, record):
        """Persist changes to a catalog record"""
        try:
            db.session.commit()
            return record
        except IntegrityError:
            db.session.rollback()
            raise ValidationError(f"{type(record).__name__} {self._natural_key(record)} already exists")

    def count_active_products(self) -> int:
        """Count active products"""
        return Product.query.filter_by(is_active=True).count()

    def count_active_warehouses(self) -> int:
        """Count active warehouses"""
        return Warehouse.query.filter_by(is_active=True).count()

    @staticmethod
    def _natural_key(record):
        return getattr(record, 'code', None) or getattr(record, 'name', None) or record.id

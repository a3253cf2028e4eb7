"""
Base Repository Interface - Abstract base classes
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from warehouse_service.models import (
    Category, Product, Warehouse, StockEntry, Movement, MovementDetail, MovementType
)


class CatalogRepositoryInterface(ABC):
    """Abstract base class for the catalog repository"""

    @abstractmethod
    def get_product(self, product_id: str) -> Optional[Product]:
        pass

    @abstractmethod
    def get_products_by_ids(self, product_ids: List[str]) -> List[Product]:
        pass

    @abstractmethod
    def list_products(self, include_inactive: bool = True) -> List[Product]:
        pass

    @abstractmethod
    def get_warehouse(self, warehouse_id: str) -> Optional[Warehouse]:
        pass

    @abstractmethod
    def list_warehouses(self, include_inactive: bool = True) -> List[Warehouse]:
        pass

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        pass

    @abstractmethod
    def list_categories(self) -> List[Category]:
        pass

    @abstractmethod
    def create(self, record):
        pass

    @abstractmethod
    def update(self, record):
        pass


class StockRepositoryInterface(ABC):
    """Abstract base class for the stock ledger repository"""

    @abstractmethod
    def get(self, product_id: str, warehouse_id: str, for_update: bool = False) -> Optional[StockEntry]:
        pass

    @abstractmethod
    def apply_delta(self, product_id: str, warehouse_id: str, delta: int,
                    allow_negative: bool) -> StockEntry:
        pass

    @abstractmethod
    def list_with_joins(self, warehouse_id: Optional[str] = None) -> List[StockEntry]:
        pass

    @abstractmethod
    def get_low_stock(self) -> List[StockEntry]:
        pass

    @abstractmethod
    def count_low_stock(self) -> int:
        pass


class MovementRepositoryInterface(ABC):
    """Abstract base class for the movement ledger repository"""

    @abstractmethod
    def add(self, movement: Movement) -> Movement:
        pass

    @abstractmethod
    def add_detail(self, detail: MovementDetail) -> MovementDetail:
        pass

    @abstractmethod
    def get_by_id(self, movement_id: str) -> Optional[Movement]:
        pass

    @abstractmethod
    def get_by_folio(self, folio: str) -> Optional[Movement]:
        pass

    @abstractmethod
    def list(self, movement_type: Optional[MovementType] = None) -> List[Movement]:
        pass

    @abstractmethod
    def get_details(self, movement_id: str) -> List[MovementDetail]:
        pass

    @abstractmethod
    def count_by_type(self, movement_type: MovementType) -> int:
        pass

    @abstractmethod
    def count_created_since(self, since: datetime) -> int:
        pass

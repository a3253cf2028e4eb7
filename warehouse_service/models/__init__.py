"""
Models package - Database models for the warehouse inventory service
"""

# Import database instance
from warehouse_service.database import db

# Import enums first
from .enums import MovementType, MovementStatus

# Import models
from .category import Category
from .product import Product
from .warehouse import Warehouse
from .stock_entry import StockEntry, MAX_QUANTITY
from .movement import Movement, MovementDetail
from .folio_counter import FolioCounter

# Export all models and enums
__all__ = [
    'db',
    'MovementType',
    'MovementStatus',
    'Category',
    'Product',
    'Warehouse',
    'StockEntry',
    'MAX_QUANTITY',
    'Movement',
    'MovementDetail',
    'FolioCounter'
]

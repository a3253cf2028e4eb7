"""
Repositories package - Data access layer for the warehouse inventory service
"""

# Import interfaces
from .base import CatalogRepositoryInterface, StockRepositoryInterface, MovementRepositoryInterface

# Import concrete implementations
from .catalog_repository import CatalogRepository
from .stock_repository import StockRepository
from .movement_repository import MovementRepository

# Export all interfaces and implementations
__all__ = [
    'CatalogRepositoryInterface',
    'StockRepositoryInterface',
    'MovementRepositoryInterface',
    'CatalogRepository',
    'StockRepository',
    'MovementRepository'
]

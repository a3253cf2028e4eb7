"""
Reporting Service - Read-only stock views, low-stock alerts and dashboard stats
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from warehouse_service.repositories import CatalogRepository, MovementRepository, StockRepository

logger = logging.getLogger(__name__)


def start_of_local_day(now: Optional[datetime] = None) -> datetime:
    """Local midnight expressed as naive UTC, the way timestamps are stored"""
    local_now = (now or datetime.now()).astimezone()
    midnight = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc).replace(tzinfo=None)


class ReportingService:
    """Derived views over the stock ledger and catalog; never writes"""

    def __init__(self, catalog_repo=None, stock_repo=None, movement_repo=None):
        self.catalog_repo = catalog_repo or CatalogRepository()
        self.stock_repo = stock_repo or StockRepository()
        self.movement_repo = movement_repo or MovementRepository()

    def get_stock(self, warehouse_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Stock rows of active products with product, warehouse and category"""
        entries = self.stock_repo.list_with_joins(warehouse_id)
        return [entry.to_dict(include_joins=True) for entry in entries]

    def get_low_stock_alerts(self) -> List[Dict[str, Any]]:
        """Rows below their product's minimum stock, worst first"""
        alerts = []
        for entry in self.stock_repo.get_low_stock():
            alert = entry.to_dict(include_joins=True)
            alert['min_stock'] = entry.product.min_stock
            alert['shortage'] = entry.product.min_stock - entry.quantity
            alerts.append(alert)
        return alerts

    def get_dashboard_stats(self, now: Optional[datetime] = None) -> Dict[str, int]:
        """Counts shown on the dashboard"""
        stats = {
            'total_products': self.catalog_repo.count_active_products(),
            'total_warehouses': self.catalog_repo.count_active_warehouses(),
            'movements_today': self.movement_repo.count_created_since(start_of_local_day(now)),
            'low_stock_count': self.stock_repo.count_low_stock(),
        }
        logger.debug(f"Dashboard stats: {stats}")
        return stats

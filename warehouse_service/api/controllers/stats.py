"""
Stats Controller - Low-stock alerts and dashboard statistics
"""

from flask import Blueprint, jsonify
import logging

from warehouse_service.services import ReportingService
from warehouse_service.utils.schemas import LowStockAlertResponseSchema

logger = logging.getLogger(__name__)

# Create blueprint
stats_bp = Blueprint('stats', __name__)

low_stock_alert_schema = LowStockAlertResponseSchema()


@stats_bp.route('/api/alerts/low-stock', methods=['GET'])
def get_low_stock_alerts():
    """
    Stock rows below their product's minimum stock, lowest quantity first
    """
    alerts = ReportingService().get_low_stock_alerts()
    return jsonify(low_stock_alert_schema.dump(alerts, many=True)), 200


@stats_bp.route('/api/dashboard/stats', methods=['GET'])
def get_dashboard_stats():
    """
    Get inventory statistics for the dashboard

    Returns:
        JSON with:
        - totalProducts: active products
        - totalWarehouses: active warehouses
        - movementsToday: movements created since local midnight
        - lowStockCount: stock rows below minimum stock
    """
    stats = ReportingService().get_dashboard_stats()
    result = {
        "totalProducts": stats['total_products'],
        "totalWarehouses": stats['total_warehouses'],
        "movementsToday": stats['movements_today'],
        "lowStockCount": stats['low_stock_count'],
        "service": "warehouse-inventory-service"
    }
    logger.info(f"Stats retrieved: {result}")
    return jsonify(result), 200

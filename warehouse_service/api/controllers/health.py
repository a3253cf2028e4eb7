"""
Health check endpoints for the warehouse inventory service
These endpoints are used by monitoring systems, load balancers, and Kubernetes
"""

from flask import Blueprint, jsonify
from datetime import datetime
import os
import time
import logging

from sqlalchemy.exc import SQLAlchemyError

from warehouse_service.database import ping_database

logger = logging.getLogger(__name__)

SERVICE_NAME = os.environ.get('NAME', 'warehouse-inventory-service')

# Create blueprint for health endpoints
health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health():
    """Main health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'service': SERVICE_NAME,
        'timestamp': datetime.utcnow().isoformat() + 'Z',
        'version': os.environ.get('VERSION', '1.0.0'),
        'environment': os.environ.get('FLASK_ENV', 'development'),
    }), 200


@health_bp.route('/health/ready', methods=['GET'])
def readiness():
    """Readiness check - the database answers"""
    started = time.time()
    try:
        ping_database()
        database = {'status': 'healthy'}
        status, status_code = 'ready', 200
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        database = {'status': 'unhealthy', 'error': str(e)}
        status, status_code = 'not ready', 503

    return jsonify({
        'status': status,
        'service': SERVICE_NAME,
        'timestamp': datetime.utcnow().isoformat() + 'Z',
        'total_check_time': round(time.time() - started, 4),
        'checks': {'database': database},
    }), status_code

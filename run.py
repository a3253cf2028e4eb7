#!/usr/bin/env python3
"""
Warehouse Inventory Service
Flask-based service for catalog, stock levels and the movement ledger.
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from warehouse_service import create_app, init_database
from warehouse_service.validators.config_validator import validate_config

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main():
    """Main application entry point."""
    env = os.environ.get('FLASK_ENV', 'production')

    if not validate_config():
        raise SystemExit(1)

    logger.info(f"Starting Warehouse Inventory Service in {env} mode")

    # Create Flask application
    app = create_app(env)

    # Initialize database tables
    init_database(app)

    # Get host and port from environment
    host = os.environ.get('HOST', '0.0.0.0')
    port = int(os.environ.get('PORT', 5000))
    debug = env == 'development'

    logger.info(f"Starting Warehouse Inventory Service on {host}:{port}")

    # Run the application
    app.run(
        host=host,
        port=port,
        debug=debug,
        threaded=True
    )


if __name__ == '__main__':
    main()

"""
Unit tests for the reporting reader
"""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from warehouse_service.models import Movement, MovementType
from warehouse_service.services import MovementLine, MovementRequest, MovementService, ReportingService
from warehouse_service.services.reporting_service import start_of_local_day
from tests.conftest import (
    create_test_category, create_test_product, create_test_warehouse, create_test_stock
)


@pytest.fixture
def service():
    return ReportingService()


class TestGetStock:

    def test_rows_carry_joins(self, db_session, service):
        category = create_test_category(db_session, name='Limpieza')
        product = create_test_product(db_session, category_id=category.id)
        warehouse = create_test_warehouse(db_session)
        create_test_stock(db_session, product, warehouse, 12)

        rows = service.get_stock()

        assert len(rows) == 1
        assert rows[0]['quantity'] == 12
        assert rows[0]['product']['code'] == product.code
        assert rows[0]['warehouse']['code'] == warehouse.code
        assert rows[0]['category']['name'] == 'Limpieza'

    def test_filter_by_warehouse(self, db_session, service):
        product = create_test_product(db_session)
        first = create_test_warehouse(db_session)
        second = create_test_warehouse(db_session)
        create_test_stock(db_session, product, first, 1)
        create_test_stock(db_session, product, second, 2)

        rows = service.get_stock(second.id)

        assert [r['quantity'] for r in rows] == [2]

    def test_repeated_reads_are_identical(self, db_session, service):
        warehouse = create_test_warehouse(db_session)
        for quantity in (3, 9, 0):
            create_test_stock(db_session, create_test_product(db_session), warehouse, quantity)

        first = [(r['product_id'], r['quantity']) for r in service.get_stock()]
        second = [(r['product_id'], r['quantity']) for r in service.get_stock()]

        assert first == second


class TestLowStockAlerts:

    def test_alerts_ordered_by_quantity_with_shortage(self, db_session, service):
        warehouse = create_test_warehouse(db_session)
        near = create_test_product(db_session, min_stock=10)
        empty = create_test_product(db_session, min_stock=4)
        healthy = create_test_product(db_session, min_stock=1)
        retired = create_test_product(db_session, min_stock=100, is_active=False)
        create_test_stock(db_session, near, warehouse, 7)
        create_test_stock(db_session, empty, warehouse, 0)
        create_test_stock(db_session, healthy, warehouse, 50)
        create_test_stock(db_session, retired, warehouse, 1)

        alerts = service.get_low_stock_alerts()

        assert [a['product_id'] for a in alerts] == [empty.id, near.id]
        assert alerts[0]['shortage'] == 4
        assert alerts[1]['min_stock'] == 10
        assert alerts[1]['shortage'] == 3


class TestDashboardStats:

    def test_counts(self, db_session, service):
        warehouse = create_test_warehouse(db_session)
        create_test_warehouse(db_session, is_active=False)
        low = create_test_product(db_session, min_stock=5)
        create_test_product(db_session, is_active=False)
        create_test_stock(db_session, low, warehouse, 1)

        MovementService().post_movement(MovementRequest(
            type='entrada', warehouse_id=warehouse.id, details=[MovementLine(low.id, 1)]
        ))

        stats = service.get_dashboard_stats()

        assert stats == {
            'total_products': 1,
            'total_warehouses': 1,
            'movements_today': 1,
            'low_stock_count': 1,
        }

    def test_movements_before_midnight_not_counted(self, db_session, service):
        warehouse = create_test_warehouse(db_session)
        db_session.add(Movement(
            folio='ENT-0001',
            type=MovementType.ENTRADA,
            warehouse_id=warehouse.id,
            total_value=Decimal('0'),
            created_at=start_of_local_day() - timedelta(seconds=1)
        ))
        db_session.commit()

        assert service.get_dashboard_stats()['movements_today'] == 0


class TestStartOfLocalDay:

    def test_is_naive_and_not_after_now(self):
        midnight = start_of_local_day()

        assert midnight.tzinfo is None
        assert midnight <= datetime.utcnow()
        assert datetime.utcnow() - midnight < timedelta(days=1, hours=1)

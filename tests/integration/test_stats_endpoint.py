"""
Integration tests for the low-stock alert and dashboard stats endpoints
Tests the endpoints with real database queries
"""

import pytest

from tests.conftest import create_test_product, create_test_warehouse, create_test_stock


@pytest.fixture
def sample_stock(db_session):
    """Stock rows: two healthy, one low, one out of stock"""
    central = create_test_warehouse(db_session, code='CEN')
    norte = create_test_warehouse(db_session, code='NTE')
    create_test_warehouse(db_session, code='OLD', is_active=False)

    items = [
        (create_test_product(db_session, code='SKU-001', min_stock=20), central, 100),
        (create_test_product(db_session, code='SKU-002', min_stock=15), central, 50),
        # Low stock item
        (create_test_product(db_session, code='SKU-003', min_stock=20), norte, 5),
        # Out of stock item
        (create_test_product(db_session, code='SKU-004', min_stock=10), norte, 0),
    ]
    for product, warehouse, quantity in items:
        create_test_stock(db_session, product, warehouse, quantity)
    return items


class TestDashboardStatsEndpoint:
    """Test suite for /api/dashboard/stats"""

    def test_stats_endpoint_returns_200(self, client, sample_stock):
        response = client.get('/api/dashboard/stats')
        assert response.status_code == 200
        assert response.json is not None

    def test_stats_endpoint_structure(self, client, sample_stock):
        data = client.get('/api/dashboard/stats').json

        assert data['totalProducts'] == 4
        assert data['totalWarehouses'] == 2
        assert data['movementsToday'] == 0
        assert data['lowStockCount'] == 2
        assert data['service'] == 'warehouse-inventory-service'

    def test_stats_count_todays_movements(self, client, sample_stock):
        product, warehouse, _ = sample_stock[0]
        response = client.post('/api/movements', json={
            'type': 'salida',
            'warehouse_id': warehouse.id,
            'details': [{'product_id': product.id, 'quantity': 1}]
        })
        assert response.status_code == 201

        assert client.get('/api/dashboard/stats').json['movementsToday'] == 1

    def test_stats_empty_inventory(self, client, db_session):
        data = client.get('/api/dashboard/stats').json

        assert data['totalProducts'] == 0
        assert data['totalWarehouses'] == 0
        assert data['movementsToday'] == 0
        assert data['lowStockCount'] == 0


class TestLowStockAlertsEndpoint:
    """Test suite for /api/alerts/low-stock"""

    def test_alerts_ordered_by_quantity(self, client, sample_stock):
        response = client.get('/api/alerts/low-stock')

        assert response.status_code == 200
        assert [a['product']['code'] for a in response.json] == ['SKU-004', 'SKU-003']
        assert response.json[0]['warehouse']['code'] == 'NTE'
        assert response.json[0]['shortage'] == 10
        assert response.json[1]['min_stock'] == 20

    def test_alerts_empty(self, client, db_session):
        response = client.get('/api/alerts/low-stock')

        assert response.status_code == 200
        assert response.json == []

"""
Unit tests for the stock ledger repository
"""

import pytest

from warehouse_service.exceptions import InsufficientStock, NoStockRecord, ValidationError
from warehouse_service.models import MAX_QUANTITY
from warehouse_service.repositories import StockRepository
from tests.conftest import (
    create_test_product, create_test_warehouse, create_test_stock, stock_of
)


@pytest.fixture
def repo():
    return StockRepository()


class TestApplyDelta:
    """Test StockRepository.apply_delta."""

    def test_first_increment_creates_row(self, db_session, repo):
        product = create_test_product(db_session)
        warehouse = create_test_warehouse(db_session)

        entry = repo.apply_delta(product.id, warehouse.id, 10, allow_negative=False)
        db_session.commit()

        assert entry.quantity == 10
        assert entry.last_updated is not None
        assert stock_of(product, warehouse) == 10

    def test_increment_existing_row(self, db_session, repo):
        product = create_test_product(db_session)
        warehouse = create_test_warehouse(db_session)
        entry = create_test_stock(db_session, product, warehouse, 10)
        previous_update = entry.last_updated

        repo.apply_delta(product.id, warehouse.id, 5, allow_negative=False)
        db_session.commit()

        assert stock_of(product, warehouse) == 15
        assert repo.get(product.id, warehouse.id).last_updated >= previous_update

    def test_decrement_to_zero_allowed(self, db_session, repo):
        product = create_test_product(db_session)
        warehouse = create_test_warehouse(db_session)
        create_test_stock(db_session, product, warehouse, 10)

        repo.apply_delta(product.id, warehouse.id, -10, allow_negative=False)
        db_session.commit()

        assert stock_of(product, warehouse) == 0

    def test_decrement_below_zero_rejected(self, db_session, repo):
        product = create_test_product(db_session)
        warehouse = create_test_warehouse(db_session)
        create_test_stock(db_session, product, warehouse, 10)

        with pytest.raises(InsufficientStock) as exc_info:
            repo.apply_delta(product.id, warehouse.id, -15, allow_negative=False)
        db_session.rollback()

        assert exc_info.value.available == 10
        assert exc_info.value.requested == 15
        assert stock_of(product, warehouse) == 10

    def test_decrement_without_row_rejected(self, db_session, repo):
        product = create_test_product(db_session)
        warehouse = create_test_warehouse(db_session)

        with pytest.raises(NoStockRecord) as exc_info:
            repo.apply_delta(product.id, warehouse.id, -1, allow_negative=False)
        db_session.rollback()

        assert isinstance(exc_info.value, InsufficientStock)
        assert exc_info.value.available == 0
        assert repo.get(product.id, warehouse.id) is None

    def test_negative_allowed_creates_negative_row(self, db_session, repo):
        product = create_test_product(db_session)
        warehouse = create_test_warehouse(db_session)

        repo.apply_delta(product.id, warehouse.id, -5, allow_negative=True)
        db_session.commit()

        assert stock_of(product, warehouse) == -5

    def test_apply_delta_does_not_commit(self, db_session, repo):
        product = create_test_product(db_session)
        warehouse = create_test_warehouse(db_session)

        repo.apply_delta(product.id, warehouse.id, 7, allow_negative=False)
        db_session.rollback()

        assert repo.get_quantity(product.id, warehouse.id) == 0

    def test_increment_past_column_range_rejected(self, db_session, repo):
        product = create_test_product(db_session)
        warehouse = create_test_warehouse(db_session)
        create_test_stock(db_session, product, warehouse, MAX_QUANTITY)

        with pytest.raises(ValidationError) as exc_info:
            repo.apply_delta(product.id, warehouse.id, 1, allow_negative=False)
        db_session.rollback()

        assert exc_info.value.field == 'quantity'
        assert stock_of(product, warehouse) == MAX_QUANTITY


class TestStockQueries:
    """Test the joined stock reads."""

    def test_list_with_joins_filters_inactive_products(self, db_session, repo):
        warehouse = create_test_warehouse(db_session)
        active = create_test_product(db_session, code='A-1')
        inactive = create_test_product(db_session, code='B-1', is_active=False)
        create_test_stock(db_session, active, warehouse, 1)
        create_test_stock(db_session, inactive, warehouse, 1)

        entries = repo.list_with_joins()

        assert [e.product_id for e in entries] == [active.id]

    def test_list_with_joins_by_warehouse(self, db_session, repo):
        product = create_test_product(db_session)
        first = create_test_warehouse(db_session, code='W-A')
        second = create_test_warehouse(db_session, code='W-B')
        create_test_stock(db_session, product, first, 3)
        create_test_stock(db_session, product, second, 4)

        assert [e.warehouse_id for e in repo.list_with_joins()] == [first.id, second.id]
        assert [e.quantity for e in repo.list_with_joins(second.id)] == [4]

    def test_low_stock_ordered_by_quantity(self, db_session, repo):
        warehouse = create_test_warehouse(db_session)
        low = create_test_product(db_session, min_stock=10)
        lower = create_test_product(db_session, min_stock=10)
        fine = create_test_product(db_session, min_stock=10)
        create_test_stock(db_session, low, warehouse, 8)
        create_test_stock(db_session, lower, warehouse, 2)
        create_test_stock(db_session, fine, warehouse, 10)

        entries = repo.get_low_stock()

        assert [e.product_id for e in entries] == [lower.id, low.id]
        assert repo.count_low_stock() == 2

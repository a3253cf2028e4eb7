"""
Unit tests for the catalog service
"""

import pytest
from decimal import Decimal

from warehouse_service.exceptions import ReferenceNotFound, ValidationError
from warehouse_service.services import CatalogService
from tests.conftest import create_test_category, create_test_product, create_test_warehouse


@pytest.fixture
def service():
    return CatalogService()


class TestProducts:

    def test_create_product(self, db_session, service):
        category = create_test_category(db_session)

        product = service.create_product(
            code='CAB-10', name='Cable 10m', unit='pza', category_id=category.id,
            min_stock=5, standard_cost=Decimal('12.50')
        )

        assert product['code'] == 'CAB-10'
        assert product['standard_cost'] == '12.50'
        assert product['is_active'] is True
        assert service.get_product(product['id'])['name'] == 'Cable 10m'

    def test_create_product_ignores_unknown_fields(self, db_session, service):
        product = service.create_product(code='X-1', name='X', unit='kg', color='red')

        assert product['standard_cost'] == '0.00'
        assert 'color' not in product

    def test_duplicate_code_rejected(self, db_session, service):
        service.create_product(code='DUP', name='First', unit='pza')

        with pytest.raises(ValidationError):
            service.create_product(code='DUP', name='Second', unit='pza')

    def test_unknown_category_rejected(self, db_session, service):
        with pytest.raises(ReferenceNotFound):
            service.create_product(code='C-1', name='C', unit='pza', category_id='missing')

    @pytest.mark.parametrize('field, value', [('min_stock', -1), ('standard_cost', Decimal('-1'))])
    def test_negative_values_rejected(self, db_session, service, field, value):
        with pytest.raises(ValidationError) as exc_info:
            service.create_product(code='N-1', name='N', unit='pza', **{field: value})
        assert exc_info.value.field == field

    def test_update_product(self, db_session, service):
        product = create_test_product(db_session, name='Old')

        updated = service.update_product(product.id, name='New', min_stock=8)

        assert updated['name'] == 'New'
        assert updated['min_stock'] == 8

    def test_update_missing_product(self, db_session, service):
        with pytest.raises(ReferenceNotFound):
            service.update_product('missing', name='New')

    def test_deactivate_product_keeps_row(self, db_session, service):
        product = create_test_product(db_session)

        assert service.deactivate_product(product.id) is True
        assert service.get_product(product.id)['is_active'] is False
        assert [p['id'] for p in service.list_products(include_inactive=False)] == []
        assert [p['id'] for p in service.list_products()] == [product.id]

    def test_deactivate_missing_product(self, db_session, service):
        assert service.deactivate_product('missing') is False

    def test_list_products_ordered_by_code(self, db_session, service):
        create_test_product(db_session, code='B')
        create_test_product(db_session, code='A')

        assert [p['code'] for p in service.list_products()] == ['A', 'B']


class TestWarehouses:

    def test_create_and_update_warehouse(self, db_session, service):
        warehouse = service.create_warehouse(code='ALM-N', name='Norte', location='Monterrey')

        updated = service.update_warehouse(warehouse['id'], manager='Luis')

        assert updated['manager'] == 'Luis'
        assert updated['location'] == 'Monterrey'

    def test_deactivate_warehouse(self, db_session, service):
        warehouse = create_test_warehouse(db_session)

        assert service.deactivate_warehouse(warehouse.id) is True
        assert service.get_warehouse(warehouse.id)['is_active'] is False
        assert service.list_warehouses(include_inactive=False) == []

    def test_missing_warehouse(self, db_session, service):
        assert service.get_warehouse('missing') is None
        with pytest.raises(ReferenceNotFound):
            service.update_warehouse('missing', name='X')


class TestCategories:

    def test_create_and_list_categories(self, db_session, service):
        service.create_category('Pinturas')
        service.create_category('Herramientas', description='Manuales')

        assert [c['name'] for c in service.list_categories()] == ['Herramientas', 'Pinturas']

    def test_duplicate_category_rejected(self, db_session, service):
        service.create_category('Pinturas')
        with pytest.raises(ValidationError):
            service.create_category('Pinturas')

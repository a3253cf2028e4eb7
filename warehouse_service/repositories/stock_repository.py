"""
Stock Repository Implementation - the stock ledger
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import contains_eager

from warehouse_service.database import db
from warehouse_service.exceptions import InsufficientStock, NoStockRecord, ValidationError
from warehouse_service.models import MAX_QUANTITY, Product, StockEntry, Warehouse
from .base import StockRepositoryInterface


class StockRepository(StockRepositoryInterface):
    """Concrete implementation of the stock ledger repository

    ``apply_delta`` only flushes; the caller owns the transaction so that the
    deltas of every line item in a movement commit or roll back together.
    """

    def get(self, product_id: str, warehouse_id: str, for_update: bool = False) -> Optional[StockEntry]:
        """Get the stock row for a (product, warehouse) pair, None if never touched"""
        query = StockEntry.query.filter_by(product_id=product_id, warehouse_id=warehouse_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_quantity(self, product_id: str, warehouse_id: str) -> int:
        """Current quantity, 0 when there is no row"""
        entry = self.get(product_id, warehouse_id)
        return entry.quantity if entry else 0

    def apply_delta(self, product_id: str, warehouse_id: str, delta: int,
                    allow_negative: bool) -> StockEntry:
        """Add ``delta`` to the pair's quantity, creating the row on first touch"""
        entry = self.get(product_id, warehouse_id, for_update=True)
        now = datetime.utcnow()

        if entry is None:
            if delta < 0 and not allow_negative:
                raise NoStockRecord(product_id, warehouse_id, requested=abs(delta))
            entry = StockEntry(
                product_id=product_id,
                warehouse_id=warehouse_id,
                quantity=delta,
                last_updated=now
            )
            db.session.add(entry)
        else:
            current = entry.quantity
            new_quantity = current + delta
            if not allow_negative and new_quantity < 0:
                raise InsufficientStock(
                    product_id, warehouse_id, available=current, requested=abs(delta)
                )
            if abs(new_quantity) > MAX_QUANTITY:
                raise ValidationError(
                    f"Stock of product {product_id} in warehouse {warehouse_id} would exceed {MAX_QUANTITY}",
                    field='quantity'
                )
            entry.quantity = new_quantity
            entry.last_updated = now

        db.session.flush()
        return entry

    def _joined_query(self):
        return (
            StockEntry.query
            .join(Product, StockEntry.product_id == Product.id)
            .join(Warehouse, StockEntry.warehouse_id == Warehouse.id)
            .options(contains_eager(StockEntry.product), contains_eager(StockEntry.warehouse))
            .filter(Product.is_active.is_(True))
        )

    def list_with_joins(self, warehouse_id: Optional[str] = None) -> List[StockEntry]:
        """Stock rows of active products with product and warehouse loaded"""
        query = self._joined_query()
        if warehouse_id:
            query = query.filter(StockEntry.warehouse_id == warehouse_id)
        return query.order_by(Warehouse.code.asc(), Product.code.asc()).all()

    def get_low_stock(self) -> List[StockEntry]:
        """Rows below their product's minimum stock, worst first"""
        return (
            self._joined_query()
            .filter(StockEntry.quantity < Product.min_stock)
            .order_by(StockEntry.quantity.asc(), Product.code.asc())
            .all()
        )

    def count_low_stock(self) -> int:
        """Count rows below their product's minimum stock"""
        return (
            db.session.query(StockEntry)
            .join(Product, StockEntry.product_id == Product.id)
            .filter(Product.is_active.is_(True), StockEntry.quantity < Product.min_stock)
            .count()
        )

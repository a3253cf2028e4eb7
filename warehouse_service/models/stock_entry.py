"""
Stock Entry Model
"""

import uuid
from datetime import datetime

from warehouse_service.database import db

# Largest value an Integer quantity column holds
MAX_QUANTITY = 2 ** 31 - 1


class StockEntry(db.Model):
    """Current quantity of one product in one warehouse

    Exactly one row per (product, warehouse) pair that has ever been touched;
    a missing row means quantity 0. Only the movement posting engine writes
    these rows. ``version`` is bumped on every write so a lost update raises
    instead of silently overwriting.
    """
    __tablename__ = 'stock'
    __table_args__ = (
        db.UniqueConstraint('product_id', 'warehouse_id', name='uq_stock_product_warehouse'),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = db.Column(db.String(36), db.ForeignKey('products.id'), nullable=False, index=True)
    warehouse_id = db.Column(db.String(36), db.ForeignKey('warehouses.id'), nullable=False, index=True)
    quantity = db.Column(db.Integer, default=0, nullable=False)
    last_updated = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    version = db.Column(db.Integer, nullable=False)

    product = db.relationship('Product', lazy='joined')
    warehouse = db.relationship('Warehouse', lazy='joined')

    __mapper_args__ = {'version_id_col': version}

    def __repr__(self):
        return f'<StockEntry {self.product_id}@{self.warehouse_id}={self.quantity}>'

    @property
    def is_low_stock(self):
        """Check if quantity is below the product's minimum stock"""
        if self.product is None:
            return False
        return self.quantity < (self.product.min_stock or 0)

    def to_dict(self, include_joins=False):
        """Convert to dictionary"""
        result = {
            'id': self.id,
            'product_id': self.product_id,
            'warehouse_id': self.warehouse_id,
            'quantity': self.quantity,
            'last_updated': self.last_updated.isoformat() if self.last_updated else None
        }
        if include_joins:
            result['product'] = self.product.to_dict() if self.product else None
            result['warehouse'] = self.warehouse.to_dict() if self.warehouse else None
            category = self.product.category if self.product else None
            result['category'] = category.to_dict() if category else None
        return result

"""
Product Model
"""

import uuid
from datetime import datetime

from sqlalchemy import Numeric

from warehouse_service.database import db


class Product(db.Model):
    """Catalog product model

    Products are soft-deleted through ``is_active``; stock rows and posted
    movements keep referencing them by id.
    """
    __tablename__ = 'products'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = db.Column(db.String(50), unique=True, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    category_id = db.Column(db.String(36), db.ForeignKey('categories.id'), nullable=True)
    unit = db.Column(db.String(20), nullable=False)
    min_stock = db.Column(db.Integer, default=0, nullable=False)
    standard_cost = db.Column(Numeric(12, 2), default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    category = db.relationship('Category', back_populates='products', lazy='joined')

    def __repr__(self):
        return f'<Product {self.code}>'

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'id': self.id,
            'code': self.code,
            'name': self.name,
            'description': self.description,
            'category_id': self.category_id,
            'unit': self.unit,
            'min_stock': self.min_stock,
            'standard_cost': str(self.standard_cost) if self.standard_cost is not None else '0.00',
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

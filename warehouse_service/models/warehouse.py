"""
Warehouse Model
"""

import uuid
from datetime import datetime

from warehouse_service.database import db


class Warehouse(db.Model):
    """Warehouse model, soft-deleted through ``is_active`` like products"""
    __tablename__ = 'warehouses'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = db.Column(db.String(50), unique=True, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    location = db.Column(db.String(255), nullable=True)
    manager = db.Column(db.String(100), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<Warehouse {self.code}>'

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'id': self.id,
            'code': self.code,
            'name': self.name,
            'location': self.location,
            'manager': self.manager,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

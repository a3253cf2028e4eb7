"""
Movement Models - append-only ledger of stock-changing documents
"""

import uuid
from datetime import datetime

from sqlalchemy import Numeric, event
from sqlalchemy.orm import object_session

from warehouse_service.database import db
from warehouse_service.exceptions import MovementImmutable
from .enums import MovementType, MovementStatus


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Movement(db.Model):
    """Movement header (entrada, salida, transferencia, ajuste)"""
    __tablename__ = 'movements'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    folio = db.Column(db.String(20), unique=True, nullable=False, index=True)
    type = db.Column(
        db.Enum(MovementType, name='movement_type', values_callable=_enum_values),
        nullable=False,
        index=True
    )
    warehouse_id = db.Column(db.String(36), db.ForeignKey('warehouses.id'), nullable=False)
    warehouse_destination_id = db.Column(db.String(36), db.ForeignKey('warehouses.id'), nullable=True)
    user_id = db.Column(db.String(100), default='system', nullable=False)  # opaque actor reference
    reason = db.Column(db.Text, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    status = db.Column(
        db.Enum(MovementStatus, name='movement_status', values_callable=_enum_values),
        default=MovementStatus.COMPLETED,
        nullable=False
    )
    total_value = db.Column(Numeric(12, 2), default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    details = db.relationship(
        'MovementDetail',
        backref='movement',
        lazy=True,
        order_by='MovementDetail.line_number'
    )

    def __repr__(self):
        return f'<Movement {self.folio} {self.type.value}>'

    def to_dict(self, include_details=False):
        """Convert to dictionary"""
        result = {
            'id': self.id,
            'folio': self.folio,
            'type': self.type.value,
            'warehouse_id': self.warehouse_id,
            'warehouse_destination_id': self.warehouse_destination_id,
            'user_id': self.user_id,
            'reason': self.reason,
            'notes': self.notes,
            'status': self.status.value,
            'total_value': str(self.total_value) if self.total_value is not None else '0.00',
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
        if include_details:
            result['details'] = [detail.to_dict() for detail in self.details]
        return result


class MovementDetail(db.Model):
    """Movement line item, created together with its header"""
    __tablename__ = 'movement_details'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    movement_id = db.Column(db.String(36), db.ForeignKey('movements.id'), nullable=False, index=True)
    line_number = db.Column(db.Integer, nullable=False)
    product_id = db.Column(db.String(36), db.ForeignKey('products.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)  # as submitted; sign applied per movement type
    unit_cost = db.Column(Numeric(12, 2), default=0, nullable=False)

    def __repr__(self):
        return f'<MovementDetail {self.movement_id}#{self.line_number} {self.product_id} {self.quantity}>'

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'id': self.id,
            'movement_id': self.movement_id,
            'line_number': self.line_number,
            'product_id': self.product_id,
            'quantity': self.quantity,
            'unit_cost': str(self.unit_cost) if self.unit_cost is not None else '0.00'
        }


def _reject_update(mapper, connection, target):
    session = object_session(target)
    # Collection appends mark the header dirty without touching its columns
    if session is not None and not session.is_modified(target, include_collections=False):
        return
    raise MovementImmutable(type(target).__name__, target.id)


def _reject_delete(mapper, connection, target):
    raise MovementImmutable(type(target).__name__, target.id)


for _model in (Movement, MovementDetail):
    event.listen(_model, 'before_update', _reject_update)
    event.listen(_model, 'before_delete', _reject_delete)

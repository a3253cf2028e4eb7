"""
Folio Counter Model
"""

from warehouse_service.database import db
from .enums import MovementType


class FolioCounter(db.Model):
    """Per-movement-type folio counter

    One row per movement type holding the last issued sequence number. The
    row is locked while a folio is allocated so two writers never get the
    same number.
    """
    __tablename__ = 'folio_counters'

    movement_type = db.Column(
        db.Enum(MovementType, name='folio_movement_type', values_callable=lambda e: [m.value for m in e]),
        primary_key=True
    )
    current_value = db.Column(db.Integer, default=0, nullable=False)

    def __repr__(self):
        return f'<FolioCounter {self.movement_type.value}={self.current_value}>'

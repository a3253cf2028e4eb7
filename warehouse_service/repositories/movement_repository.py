"""
Movement Repository Implementation
"""

from datetime import datetime
from typing import List, Optional

from warehouse_service.database import db
from warehouse_service.models import Movement, MovementDetail, MovementType
from .base import MovementRepositoryInterface


class MovementRepository(MovementRepositoryInterface):
    """Concrete implementation of the movement ledger repository

    Inserts are flushed, never committed: headers and lines belong to the
    posting transaction.
    """

    def add(self, movement: Movement) -> Movement:
        """Insert a movement header"""
        db.session.add(movement)
        db.session.flush()
        return movement

    def add_detail(self, detail: MovementDetail) -> MovementDetail:
        """Insert a movement line"""
        db.session.add(detail)
        db.session.flush()
        return detail

    def get_by_id(self, movement_id: str) -> Optional[Movement]:
        """Get movement by ID"""
        return db.session.get(Movement, movement_id)

    def get_by_folio(self, folio: str) -> Optional[Movement]:
        """Get movement by folio"""
        return Movement.query.filter_by(folio=folio).first()

    def list(self, movement_type: Optional[MovementType] = None) -> List[Movement]:
        """List movements newest first, optionally for one type"""
        query = Movement.query
        if movement_type is not None:
            query = query.filter(Movement.type == movement_type)
        return query.order_by(Movement.created_at.desc(), Movement.folio.desc()).all()

    def get_details(self, movement_id: str) -> List[MovementDetail]:
        """Lines of a movement in submission order"""
        return (
            MovementDetail.query
            .filter_by(movement_id=movement_id)
            .order_by(MovementDetail.line_number.asc())
            .all()
        )

    def count_by_type(self, movement_type: MovementType) -> int:
        """Count movements of one type"""
        return Movement.query.filter(Movement.type == movement_type).count()

    def count_created_since(self, since: datetime) -> int:
        """Count movements created at or after ``since``"""
        return Movement.query.filter(Movement.created_at >= since).count()

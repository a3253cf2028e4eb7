"""
Folio Sequencer - Issues the human-readable document number of each movement
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from warehouse_service.database import db
from warehouse_service.exceptions import translate_store_error
from warehouse_service.models import FolioCounter, MovementType
from warehouse_service.repositories import MovementRepository

logger = logging.getLogger(__name__)


class FolioSequencer:
    """Per-type folio allocation backed by a locked counter row

    Folios look like ``ENT-0007``: the first three letters of the movement
    type followed by the sequence number zero-padded to four digits. The
    counter row is read ``FOR UPDATE`` so concurrent postings of the same
    type serialize on allocation instead of counting rows.
    """

    def __init__(self, movement_repo=None):
        self.movement_repo = movement_repo or MovementRepository()

    @staticmethod
    def format_folio(movement_type: MovementType, value: int) -> str:
        return f"{movement_type.folio_prefix}-{value:04d}"

    def _get_counter(self, movement_type: MovementType, for_update: bool = False):
        query = FolioCounter.query.filter_by(movement_type=movement_type)
        if for_update:
            query = query.with_for_update().populate_existing()
        return query.first()

    def next_value(self, movement_type) -> int:
        """Increment and return the counter for a type, inside the current transaction"""
        movement_type = MovementType.parse(movement_type)
        counter = self._get_counter(movement_type, for_update=True)

        if counter is None:
            # First folio of this type: continue from whatever is already posted
            seed = self.movement_repo.count_by_type(movement_type)
            counter = FolioCounter(movement_type=movement_type, current_value=seed)
            db.session.add(counter)

        counter.current_value += 1
        db.session.flush()
        return counter.current_value

    def next_folio(self, movement_type) -> str:
        """Next folio for a type, inside the current transaction"""
        movement_type = MovementType.parse(movement_type)
        return self.format_folio(movement_type, self.next_value(movement_type))

    def allocate(self, movement_type, isolated: bool = True) -> str:
        """Allocate a folio for a posting

        With ``isolated`` the increment is committed on its own before the
        posting unit starts, so a posting that later fails leaves a gap and
        its number is never handed out again.
        """
        try:
            folio = self.next_folio(movement_type)
            if isolated:
                db.session.commit()
            logger.debug(f"Allocated folio {folio} (isolated={isolated})")
            return folio
        except SQLAlchemyError as e:
            db.session.rollback()
            raise translate_store_error(e) from e

    def peek_folio(self, movement_type) -> str:
        """The folio the next allocation would return, without consuming it"""
        movement_type = MovementType.parse(movement_type)
        counter = self._get_counter(movement_type)
        if counter is None:
            current = self.movement_repo.count_by_type(movement_type)
        else:
            current = counter.current_value
        return self.format_folio(movement_type, current + 1)

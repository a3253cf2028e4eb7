"""
Movement Service - Posting engine for stock movements

Turns a movement request into a committed ledger entry: validates it,
allocates a folio, then inserts the header, inserts each line and applies
the line's stock deltas as one atomic unit. Any failure rolls back the whole
unit, so a rejected movement leaves no header, no lines and no stock change.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional
import logging

from flask import current_app, has_app_context
from sqlalchemy.exc import SQLAlchemyError
from tenacity import (
    Retrying, before_sleep_log, retry_if_exception, stop_after_attempt, wait_exponential
)

from warehouse_service.database import db
from warehouse_service.exceptions import (
    InventoryError, ReferenceNotFound, ValidationError, translate_store_error
)
from warehouse_service.models import MAX_QUANTITY, Movement, MovementDetail, MovementStatus, MovementType
from warehouse_service.repositories import CatalogRepository, MovementRepository, StockRepository
from .folio_sequencer import FolioSequencer

logger = logging.getLogger(__name__)

CENTS = Decimal('0.01')
SYSTEM_USER_ID = 'system'

# Largest amount a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal('9999999999.99')


@dataclass
class MovementLine:
    """One requested line item; quantity as entered by the caller"""
    product_id: str
    quantity: int
    unit_cost: Optional[Decimal] = None


@dataclass
class MovementRequest:
    """A proposed movement, as handed over by the API layer"""
    type: Any
    warehouse_id: Optional[str]
    details: List[MovementLine] = field(default_factory=list)
    warehouse_destination_id: Optional[str] = None
    user_id: str = SYSTEM_USER_ID
    reason: Optional[str] = None
    notes: Optional[str] = None
    total_value: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MovementRequest':
        lines = [
            line if isinstance(line, MovementLine) else MovementLine(
                product_id=line.get('product_id'),
                quantity=line.get('quantity'),
                unit_cost=line.get('unit_cost')
            )
            for line in (data.get('details') or [])
        ]
        return cls(
            type=data.get('type'),
            warehouse_id=data.get('warehouse_id'),
            details=lines,
            warehouse_destination_id=data.get('warehouse_destination_id'),
            user_id=data.get('user_id') or SYSTEM_USER_ID,
            reason=data.get('reason'),
            notes=data.get('notes'),
            total_value=data.get('total_value')
        )


@dataclass(frozen=True)
class DeltaPolicy:
    """How one line of a movement type moves stock"""
    source_sign: int
    source_allow_negative: bool
    destination_sign: int = 0
    destination_allow_negative: bool = True


DELTA_POLICIES = {
    MovementType.ENTRADA: DeltaPolicy(source_sign=1, source_allow_negative=False),
    MovementType.SALIDA: DeltaPolicy(source_sign=-1, source_allow_negative=False),
    MovementType.TRANSFERENCIA: DeltaPolicy(
        source_sign=-1, source_allow_negative=False,
        destination_sign=1, destination_allow_negative=True
    ),
    # Adjustments carry their own sign and may drive stock negative
    MovementType.AJUSTE: DeltaPolicy(source_sign=1, source_allow_negative=True),
}


def _config(key, default):
    if has_app_context():
        return current_app.config.get(key, default)
    return default


def _to_decimal(value, field_name):
    if value is None:
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field_name} must be a decimal number", field=field_name)
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number", field=field_name)
    if abs(result) > MAX_AMOUNT or abs(result.quantize(CENTS)) > MAX_AMOUNT:
        raise ValidationError(f"{field_name} exceeds {MAX_AMOUNT}", field=field_name)
    return result.quantize(CENTS)


def _is_retryable(error):
    return isinstance(error, InventoryError) and error.retryable


class MovementService:
    """Business logic for posting and reading movements"""

    def __init__(self, catalog_repo=None, stock_repo=None, movement_repo=None, folio_sequencer=None,
                 isolated_folios=None, require_adjustment_reason=None):
        self.catalog_repo = catalog_repo or CatalogRepository()
        self.stock_repo = stock_repo or StockRepository()
        self.movement_repo = movement_repo or MovementRepository()
        self.folio_sequencer = folio_sequencer or FolioSequencer(self.movement_repo)
        self.isolated_folios = (
            isolated_folios if isolated_folios is not None
            else _config('FOLIO_ISOLATED_ALLOCATION', True)
        )
        self.require_adjustment_reason = (
            require_adjustment_reason if require_adjustment_reason is not None
            else _config('REQUIRE_ADJUSTMENT_REASON', False)
        )

    def post_movement(self, request) -> Movement:
        """Validate and atomically apply a movement

        Returns the committed movement. Raises ``ValidationError``,
        ``ReferenceNotFound``, ``InsufficientStock``/``NoStockRecord``,
        ``ConcurrencyConflict`` or ``StoreUnavailable``; in every case
        nothing of the movement persists.
        """
        if isinstance(request, dict):
            request = MovementRequest.from_dict(request)

        movement_type = self._validate_request(request)
        products = self._resolve_references(request)
        lines = self._price_lines(request.details, products)
        total_value = self._compute_total(lines)

        if request.total_value is not None:
            supplied = _to_decimal(request.total_value, 'total_value')
            if supplied != total_value:
                logger.warning(
                    f"Ignoring caller total {supplied} for {movement_type.value} movement; "
                    f"recomputed total is {total_value}"
                )

        try:
            folio = self.folio_sequencer.allocate(movement_type, isolated=self.isolated_folios)

            movement = self.movement_repo.add(Movement(
                folio=folio,
                type=movement_type,
                warehouse_id=request.warehouse_id,
                warehouse_destination_id=request.warehouse_destination_id,
                user_id=request.user_id or SYSTEM_USER_ID,
                reason=request.reason,
                notes=request.notes,
                status=MovementStatus.COMPLETED,
                total_value=total_value
            ))

            policy = DELTA_POLICIES[movement_type]
            for line_number, line in enumerate(lines, start=1):
                self.movement_repo.add_detail(MovementDetail(
                    movement_id=movement.id,
                    line_number=line_number,
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_cost=line.unit_cost
                ))
                self._apply_line(policy, request, line)

            db.session.commit()

        except InventoryError as e:
            db.session.rollback()
            logger.warning(f"Rejected {movement_type.value} movement: {e.message}")
            raise
        except SQLAlchemyError as e:
            db.session.rollback()
            error = translate_store_error(e)
            logger.error(f"Failed to post {movement_type.value} movement: {error.message}")
            raise error from e
        except Exception:
            db.session.rollback()
            logger.exception(f"Unexpected failure posting {movement_type.value} movement")
            raise

        logger.info(
            f"Posted movement {movement.folio} ({movement_type.value}, "
            f"{len(lines)} lines, total {total_value}) by {movement.user_id}"
        )
        return movement

    def post_movement_with_retry(self, request, max_attempts: int = None,
                                 backoff_seconds: float = None) -> Movement:
        """Post a movement, re-running it from scratch on retryable store errors"""
        max_attempts = max_attempts or _config('POSTING_MAX_RETRIES', 3)
        backoff_seconds = (
            backoff_seconds if backoff_seconds is not None
            else _config('POSTING_RETRY_BACKOFF_SECONDS', 0.05)
        )

        retrying = Retrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=backoff_seconds, min=0),
            retry=retry_if_exception(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        return retrying(self.post_movement, request)

    def _apply_line(self, policy: DeltaPolicy, request: MovementRequest, line: MovementLine):
        # Source first: a failed transfer decrement never reaches the destination
        self.stock_repo.apply_delta(
            line.product_id,
            request.warehouse_id,
            policy.source_sign * line.quantity,
            allow_negative=policy.source_allow_negative
        )
        if policy.destination_sign:
            self.stock_repo.apply_delta(
                line.product_id,
                request.warehouse_destination_id,
                policy.destination_sign * line.quantity,
                allow_negative=policy.destination_allow_negative
            )

    def _validate_request(self, request: MovementRequest) -> MovementType:
        try:
            movement_type = MovementType.parse(request.type)
        except ValueError as e:
            raise ValidationError(str(e), field='type')

        if not request.warehouse_id:
            raise ValidationError("Source warehouse is required", field='warehouse_id')

        if movement_type == MovementType.TRANSFERENCIA:
            if not request.warehouse_destination_id:
                raise ValidationError(
                    "Destination warehouse is required for transfers", field='warehouse_destination_id'
                )
            if request.warehouse_destination_id == request.warehouse_id:
                raise ValidationError(
                    "Source and destination warehouse must differ", field='warehouse_destination_id'
                )
        elif request.warehouse_destination_id:
            raise ValidationError(
                f"Destination warehouse only applies to transfers, not {movement_type.value}",
                field='warehouse_destination_id'
            )

        if movement_type == MovementType.AJUSTE and self.require_adjustment_reason:
            if not (request.reason or '').strip():
                raise ValidationError("Adjustments require a reason", field='reason')

        if not request.details:
            raise ValidationError("Movement must have at least one line", field='details')

        for index, line in enumerate(request.details, start=1):
            if not line.product_id:
                raise ValidationError(f"Line {index}: product is required", field='product_id')
            quantity = line.quantity
            if isinstance(quantity, bool) or not isinstance(quantity, int):
                raise ValidationError(f"Line {index}: quantity must be an integer", field='quantity')
            if movement_type == MovementType.AJUSTE:
                if quantity == 0:
                    raise ValidationError(f"Line {index}: adjustment quantity cannot be zero", field='quantity')
            elif quantity <= 0:
                raise ValidationError(f"Line {index}: quantity must be positive", field='quantity')
            if abs(quantity) > MAX_QUANTITY:
                raise ValidationError(f"Line {index}: quantity exceeds {MAX_QUANTITY}", field='quantity')
            unit_cost = _to_decimal(line.unit_cost, 'unit_cost')
            if unit_cost is not None and unit_cost < 0:
                raise ValidationError(f"Line {index}: unit cost cannot be negative", field='unit_cost')

        return movement_type

    def _resolve_references(self, request: MovementRequest):
        warehouse_ids = [request.warehouse_id]
        if request.warehouse_destination_id:
            warehouse_ids.append(request.warehouse_destination_id)

        for warehouse_id in warehouse_ids:
            warehouse = self.catalog_repo.get_warehouse(warehouse_id)
            if warehouse is None:
                raise ReferenceNotFound('Warehouse', warehouse_id)
            if not warehouse.is_active:
                raise ValidationError(f"Warehouse {warehouse.code} is inactive", field='warehouse_id')

        product_ids = list(dict.fromkeys(line.product_id for line in request.details))
        products = {p.id: p for p in self.catalog_repo.get_products_by_ids(product_ids)}
        for product_id in product_ids:
            product = products.get(product_id)
            if product is None:
                raise ReferenceNotFound('Product', product_id)
            if not product.is_active:
                raise ValidationError(f"Product {product.code} is inactive", field='product_id')
        return products

    @staticmethod
    def _price_lines(details: List[MovementLine], products) -> List[MovementLine]:
        priced = []
        for line in details:
            unit_cost = _to_decimal(line.unit_cost, 'unit_cost')
            if unit_cost is None:
                unit_cost = _to_decimal(products[line.product_id].standard_cost or 0, 'unit_cost')
            priced.append(MovementLine(line.product_id, line.quantity, unit_cost))
        return priced

    @staticmethod
    def _compute_total(lines: List[MovementLine]) -> Decimal:
        total = sum((Decimal(line.quantity) * line.unit_cost for line in lines), Decimal('0'))
        return _to_decimal(total, 'total_value')

    # Reads

    def get_movements(self, movement_type=None) -> List[Movement]:
        """Movements newest first, optionally filtered by type"""
        if movement_type:
            try:
                movement_type = MovementType.parse(movement_type)
            except ValueError as e:
                raise ValidationError(str(e), field='type')
        return self.movement_repo.list(movement_type or None)

    def get_movement(self, movement_id: str) -> Optional[Movement]:
        return self.movement_repo.get_by_id(movement_id)

    def get_movement_by_folio(self, folio: str) -> Optional[Movement]:
        return self.movement_repo.get_by_folio(folio.strip().upper())

    def get_movement_details(self, movement_id: str) -> List[MovementDetail]:
        return self.movement_repo.get_details(movement_id)

    def peek_next_folio(self, movement_type) -> str:
        try:
            return self.folio_sequencer.peek_folio(movement_type)
        except ValueError as e:
            raise ValidationError(str(e), field='type')

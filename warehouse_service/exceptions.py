"""
Inventory Errors - Typed exception hierarchy for catalog, stock and movement operations

Every error carries a machine-readable ``code``, the HTTP status the API layer
should answer with, and whether re-running the whole operation is safe.

    InventoryError
    +-- ValidationError
    +-- ReferenceNotFound
    +-- InsufficientStock
    |   +-- NoStockRecord
    +-- MovementImmutable
    +-- ConcurrencyConflict      (retryable)
    +-- StoreUnavailable         (retryable)
"""

import logging

from sqlalchemy.exc import DataError, DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

logger = logging.getLogger(__name__)


class InventoryError(Exception):
    """Base exception for inventory service errors"""

    code = 'INVENTORY_ERROR'
    status_code = 500
    retryable = False

    def __init__(self, message, details=None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self):
        """Convert to dictionary"""
        return {
            'error': type(self).__name__,
            'code': self.code,
            'message': self.message,
            'details': self.details,
            'retryable': self.retryable,
        }


class ValidationError(InventoryError):
    """Malformed or missing input"""

    code = 'VALIDATION_ERROR'
    status_code = 400

    def __init__(self, message, field=None):
        self.field = field
        super().__init__(message, details={'field': field} if field else None)


class ReferenceNotFound(InventoryError):
    """Unknown product, warehouse, category or movement id"""

    code = 'REFERENCE_NOT_FOUND'
    status_code = 404

    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} not found: {entity_id}",
            details={'entity': entity, 'id': entity_id},
        )


class InsufficientStock(InventoryError):
    """A decrement would leave stock below zero where the movement type forbids it"""

    code = 'INSUFFICIENT_STOCK'
    status_code = 409

    def __init__(self, product_id, warehouse_id, available, requested, message=None):
        self.product_id = product_id
        self.warehouse_id = warehouse_id
        self.available = available
        self.requested = requested
        super().__init__(
            message or (
                f"Insufficient stock for product {product_id} in warehouse {warehouse_id}. "
                f"Available: {available}, requested: {requested}"
            ),
            details={
                'product_id': product_id,
                'warehouse_id': warehouse_id,
                'available': available,
                'requested': requested,
            },
        )


class NoStockRecord(InsufficientStock):
    """Attempted decrement on a (product, warehouse) pair that was never stocked"""

    code = 'NO_STOCK_RECORD'

    def __init__(self, product_id, warehouse_id, requested):
        super().__init__(
            product_id, warehouse_id, available=0, requested=requested,
            message=f"No stock record for product {product_id} in warehouse {warehouse_id}",
        )


class MovementImmutable(InventoryError):
    """Attempted update or delete of a posted movement or movement line"""

    code = 'MOVEMENT_IMMUTABLE'
    status_code = 409

    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity} {entity_id} is immutable once posted",
            details={'entity': entity, 'id': entity_id},
        )


class ConcurrencyConflict(InventoryError):
    """Concurrent writers collided on the same ledger row; the whole posting can be retried"""

    code = 'CONCURRENCY_CONFLICT'
    status_code = 409
    retryable = True


class StoreUnavailable(InventoryError):
    """The database could not be reached or the transaction failed in transport"""

    code = 'STORE_UNAVAILABLE'
    status_code = 503
    retryable = True


_LOCK_MARKERS = ('deadlock', 'lock wait timeout', 'could not serialize', 'database is locked')


def translate_store_error(exc):
    """Map a SQLAlchemy failure onto the error taxonomy"""
    if isinstance(exc, InventoryError):
        return exc

    if isinstance(exc, (IntegrityError, StaleDataError)):
        return ConcurrencyConflict(f"Concurrent update detected: {exc}")

    # Out-of-range or malformed values are terminal
    if isinstance(exc, DataError):
        text = str(exc.orig if exc.orig is not None else exc)
        return ValidationError(f"Value rejected by the database: {text}")

    if isinstance(exc, OperationalError):
        text = str(exc.orig if exc.orig is not None else exc).lower()
        if any(marker in text for marker in _LOCK_MARKERS):
            return ConcurrencyConflict(f"Lock conflict: {text}")
        return StoreUnavailable(f"Database unavailable: {text}")

    if isinstance(exc, DBAPIError):
        return StoreUnavailable(f"Database error: {exc}")

    logger.error(f"Unexpected store failure: {exc}")
    return StoreUnavailable(f"Unexpected store failure: {exc}")

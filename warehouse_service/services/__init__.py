"""
Services - Business logic layer
"""

# Import service classes
from .catalog_service import CatalogService
from .folio_sequencer import FolioSequencer
from .movement_service import MovementService, MovementRequest, MovementLine
from .reporting_service import ReportingService

# Export services
__all__ = [
    'CatalogService',
    'FolioSequencer',
    'MovementService',
    'MovementRequest',
    'MovementLine',
    'ReportingService',
]

from typing import List, Optional


class InventoryError(Exception):
    """Base exception for Depot Inventory."""
    pass

class DataValidationError(InventoryError):
    """Raised when a product fails validation outside of an import batch."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

class ImportConfigError(InventoryError):
    """Raised when configuration is invalid."""
    pass

class DatabaseConnectionError(InventoryError):
    """Raised when the document store cannot be configured or reached."""
    pass

class FileProcessingError(InventoryError):
    """Raised when an import payload cannot be read."""
    pass

class StoreAccessError(InventoryError):
    """Raised when the document store rejects a query or mutation."""
    pass

class InvalidIdentifierError(InventoryError):
    """Raised when a product identifier is not a valid store id."""
    pass

class PayloadFormatError(InventoryError):
    """Raised inside an importer when a payload has no usable top-level shape."""
    pass

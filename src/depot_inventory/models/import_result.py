from dataclasses import dataclass, field
from typing import Dict, List, Any

from depot_inventory.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PREVIEW_SIZE = 5


@dataclass
class ImportResult:
    """
    Outcome of one ingestion run.

    ``products`` holds every accepted record so the confirm step can persist
    the whole batch; ``preview`` is only the first few for display.
    """
    success: bool = True
    imported: int = 0
    errors: List[str] = field(default_factory=list)
    duplicates: int = 0
    preview: List[Dict[str, Any]] = field(default_factory=list)
    products: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def failure(cls, message: str) -> "ImportResult":
        """Wholesale failure: one error, nothing accepted."""
        return cls(success=False, imported=0, errors=[message], duplicates=0)

    @classmethod
    def from_batch(
        cls,
        accepted: List[Dict[str, Any]],
        errors: List[str],
        duplicates: int,
        preview_size: int = DEFAULT_PREVIEW_SIZE
    ) -> "ImportResult":
        return cls(
            success=not errors,
            imported=len(accepted),
            errors=list(errors),
            duplicates=duplicates,
            preview=accepted[:preview_size],
            products=list(accepted),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'imported': self.imported,
            'errors': list(self.errors),
            'duplicates': self.duplicates,
            'preview': list(self.preview),
        }

    def log_summary(self):
        """Log a summary block for this import."""
        logger.info("=" * 60)
        logger.info("IMPORT SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Accepted: {self.imported:,}")
        logger.info(f"Duplicates skipped: {self.duplicates:,}")
        logger.info(f"Errors: {len(self.errors):,}")

        for error in self.errors:
            logger.warning(f"  {error}")

        logger.info("=" * 60)

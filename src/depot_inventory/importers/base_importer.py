from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Any, Optional, Iterable
from pathlib import Path

from depot_inventory.core.deduplicator import is_duplicate, existing_names
from depot_inventory.core.exceptions import FileProcessingError, PayloadFormatError
from depot_inventory.core.validator import validate_product
from depot_inventory.models.import_result import ImportResult, DEFAULT_PREVIEW_SIZE
from depot_inventory.models.product import (
    NAME_FIELD, CATEGORY_FIELD, QUANTITY_FIELD, PRICE_FIELD, THRESHOLD_FIELD,
    IMAGE_FIELD, METADATA_FIELD, METADATA_FIELDS,
)
from depot_inventory.utils.field_normalizer import FieldNormalizer
from depot_inventory.utils.logger import get_logger


@dataclass
class Candidate:
    """A record pulled out of a payload, tagged with its position for error messages."""
    position: str
    record: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


class BaseImporter(ABC):
    """
    Abstract base class for product importers.
    
    Subclasses turn a raw payload into candidates; this class runs every
    candidate through validation and duplicate detection and assembles the
    ImportResult.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize the importer.
        
        Args:
            config: Importer configuration (``preview_size``)
        """
        self.config = config or {}
        self.logger = get_logger(self.__class__.__name__)
        self.preview_size = self.config.get('preview_size', DEFAULT_PREVIEW_SIZE)

    @abstractmethod
    def get_format_name(self) -> str:
        """Return a short name for the payload encoding."""
        pass

    @abstractmethod
    def extract_candidates(self, payload: str) -> List[Candidate]:
        """
        Parse a payload into candidate records.

        Raises:
            PayloadFormatError: when the payload as a whole is unusable
        """
        pass

    def normalize_record(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Keep recognised attributes only, with text fields trimmed."""
        normalized = {
            NAME_FIELD: FieldNormalizer.normalize_string(record.get(NAME_FIELD)),
            CATEGORY_FIELD: FieldNormalizer.normalize_string(record.get(CATEGORY_FIELD)),
            QUANTITY_FIELD: FieldNormalizer.coerce_whole_number(record.get(QUANTITY_FIELD)),
            PRICE_FIELD: record.get(PRICE_FIELD),
            THRESHOLD_FIELD: FieldNormalizer.coerce_whole_number(record.get(THRESHOLD_FIELD)),
        }

        image = FieldNormalizer.normalize_optional_text(record.get(IMAGE_FIELD))
        if image:
            normalized[IMAGE_FIELD] = image

        raw_metadata = record.get(METADATA_FIELD)
        if isinstance(raw_metadata, dict):
            metadata = {}
            for key in METADATA_FIELDS:
                value = FieldNormalizer.normalize_optional_text(raw_metadata.get(key))
                if value:
                    metadata[key] = value
            if metadata:
                normalized[METADATA_FIELD] = metadata

        return normalized

    def process_candidates(
        self,
        candidates: List[Candidate],
        existing_products: Iterable[Any] = ()
    ) -> ImportResult:
        """Validate, deduplicate and collect accepted records."""
        reference_names = existing_names(existing_products)
        accepted: List[Dict[str, Any]] = []
        errors: List[str] = []
        duplicates = 0

        for candidate in candidates:
            if candidate.error:
                errors.append(f"{candidate.position}: {candidate.error}")
                continue

            validation = validate_product(candidate.record)
            if not validation.is_valid:
                errors.append(f"{candidate.position}: {', '.join(validation.errors)}")
                continue

            record = self.normalize_record(candidate.record)

            if is_duplicate(record[NAME_FIELD], reference_names):
                self.logger.debug(f"{candidate.position}: duplicate name '{record[NAME_FIELD]}' skipped")
                duplicates += 1
                continue

            accepted.append(record)
            # Later rows of the same batch are checked against this one too
            reference_names.append(record[NAME_FIELD])

        return ImportResult.from_batch(accepted, errors, duplicates, self.preview_size)

    def run_import(self, payload: str, existing_products: Iterable[Any] = ()) -> ImportResult:
        """
        Run a complete ingestion over an in-memory payload.

        Data problems are reported in the returned result, never raised.
        """
        self.logger.info(f"Starting {self.get_format_name()} import")

        try:
            candidates = self.extract_candidates(payload)
        except PayloadFormatError as e:
            self.logger.error(f"Unusable {self.get_format_name()} payload: {e}")
            return ImportResult.failure(str(e))

        self.logger.info(f"Extracted {len(candidates):,} candidate records")
        result = self.process_candidates(candidates, existing_products)
        self.logger.info(
            f"{self.get_format_name()} import finished: {result.imported:,} accepted, "
            f"{result.duplicates:,} duplicates, {len(result.errors):,} errors"
        )
        return result

    def load_file(self, file_path: str) -> str:
        """Read a payload file as text."""
        self.logger.info(f"Loading data from: {file_path}")

        try:
            return Path(file_path).read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Error loading file {file_path}: {e}")
            raise FileProcessingError(f"Failed to load {file_path}: {e}") from e

    def run_file_import(self, file_path: str, existing_products: Iterable[Any] = ()) -> ImportResult:
        """Read ``file_path`` and ingest its content."""
        return self.run_import(self.load_file(file_path), existing_products)

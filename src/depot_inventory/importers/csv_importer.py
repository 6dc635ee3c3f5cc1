import csv
import io
from typing import Any, Dict, Iterator, List, Optional, Tuple

from depot_inventory.importers.base_importer import BaseImporter, Candidate
from depot_inventory.models.product import (
    NAME_FIELD, CATEGORY_FIELD, QUANTITY_FIELD, PRICE_FIELD, THRESHOLD_FIELD,
    METADATA_FIELD,
)
from depot_inventory.utils.field_normalizer import FieldNormalizer

# Column order shared with the CSV export:
# id, name, category, quantity, price, value, threshold, status,
# supplier, reference, description, location (id/value/status are ignored)
NAME_COLUMN = 1
CATEGORY_COLUMN = 2
QUANTITY_COLUMN = 3
PRICE_COLUMN = 4
THRESHOLD_COLUMN = 6
METADATA_COLUMNS = {
    'fournisseur': 8,
    'reference': 9,
    'description': 10,
    'emplacement': 11,
}
MIN_COLUMNS = THRESHOLD_COLUMN + 1

INSUFFICIENT_DATA_MESSAGE = "Données insuffisantes"
PARSE_ERROR_MESSAGE = "Erreur de parsing"


class CsvProductImporter(BaseImporter):
    """
    Importer for delimited product exports.

    The first non-blank record is a header and is skipped; every other
    record maps to one product by column position.
    """

    def get_format_name(self) -> str:
        return "CSV"

    @staticmethod
    def _column(values: List[str], index: int) -> str:
        return values[index] if index < len(values) else ""

    def parse_row(self, values: List[str]) -> Dict[str, Any]:
        """Map positional values to a candidate record. Bad numbers become None."""
        record = {
            NAME_FIELD: values[NAME_COLUMN],
            CATEGORY_FIELD: values[CATEGORY_COLUMN],
            QUANTITY_FIELD: FieldNormalizer.parse_integer(values[QUANTITY_COLUMN], default=None),
            PRICE_FIELD: FieldNormalizer.parse_numeric(values[PRICE_COLUMN], default=None),
            THRESHOLD_FIELD: FieldNormalizer.parse_integer(values[THRESHOLD_COLUMN], default=None),
        }

        metadata = {
            key: self._column(values, index)
            for key, index in METADATA_COLUMNS.items()
            if self._column(values, index)
        }
        if metadata:
            record[METADATA_FIELD] = metadata

        return record

    def read_rows(self, payload: str) -> Iterator[Tuple[Optional[List[str]], Optional[csv.Error]]]:
        """
        Yield ``(values, error)`` per non-blank record.

        Quoted fields may span several lines, so a record is not always one
        physical line. Malformed quoting yields the error and reading resumes
        on the next line.
        """
        reader = csv.reader(io.StringIO(payload, newline=''), skipinitialspace=True, strict=True)
        while True:
            try:
                values = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                yield None, e
                continue

            if any(value.strip() for value in values):
                yield [value.strip() for value in values], None

    def extract_candidates(self, payload: str) -> List[Candidate]:
        rows = self.read_rows(payload)
        next(rows, None)  # header
        candidates = []

        # Records are numbered with the header as line 1
        for line_no, (values, error) in enumerate(rows, start=2):
            position = f"Ligne {line_no}"

            if error is not None:
                self.logger.warning(f"{position}: {error}")
                candidates.append(Candidate(position, error=PARSE_ERROR_MESSAGE))
                continue

            if len(values) < MIN_COLUMNS:
                candidates.append(Candidate(position, error=INSUFFICIENT_DATA_MESSAGE))
                continue

            candidates.append(Candidate(position, record=self.parse_row(values)))

        return candidates

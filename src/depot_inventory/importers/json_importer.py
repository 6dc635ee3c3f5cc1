import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from depot_inventory.core.exceptions import PayloadFormatError
from depot_inventory.importers.base_importer import BaseImporter, Candidate

WRAPPER_FIELD = "products"

UNRECOGNIZED_FORMAT_MESSAGE = (
    "Format JSON non reconnu. Attendu: tableau de produits ou objet avec propriété 'products'"
)
PARSE_ERROR_PREFIX = "Erreur de parsing JSON: "


class PayloadShape(Enum):
    ARRAY = "array"
    WRAPPED = "wrapped"


@dataclass
class JsonPayload:
    """A JSON document resolved to the list of records it carries."""
    shape: PayloadShape
    records: List[Any] = field(default_factory=list)


def resolve_payload(data: Any) -> Optional[JsonPayload]:
    """Classify a parsed document; None when neither shape matches."""
    if isinstance(data, list):
        return JsonPayload(PayloadShape.ARRAY, data)
    if isinstance(data, dict) and isinstance(data.get(WRAPPER_FIELD), list):
        return JsonPayload(PayloadShape.WRAPPED, data[WRAPPER_FIELD])
    return None


class JsonProductImporter(BaseImporter):
    """Importer for JSON documents: a bare array of products or ``{"products": [...]}``."""

    def get_format_name(self) -> str:
        return "JSON"

    def extract_candidates(self, payload: str) -> List[Candidate]:
        try:
            data = json.loads(payload)
        except (ValueError, TypeError, RecursionError) as e:
            # ValueError covers JSONDecodeError and the integer digit limit
            raise PayloadFormatError(f"{PARSE_ERROR_PREFIX}{e}") from e

        resolved = resolve_payload(data)
        if resolved is None:
            raise PayloadFormatError(UNRECOGNIZED_FORMAT_MESSAGE)

        self.logger.debug(f"JSON payload shape: {resolved.shape.value}")
        return [
            Candidate(f"Produit {index}", record=item)
            for index, item in enumerate(resolved.records, start=1)
        ]

"""
Field rules for candidate product records.

Rules run in a fixed order and every violation is collected; a record is
valid only when no rule fails.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from depot_inventory.models.product import (
    NAME_FIELD, CATEGORY_FIELD, QUANTITY_FIELD, PRICE_FIELD, THRESHOLD_FIELD,
)
from depot_inventory.utils.field_normalizer import FieldNormalizer

NAME_MESSAGE = "Le nom est requis et doit être une chaîne de caractères"
CATEGORY_MESSAGE = "La catégorie est requise et doit être une chaîne de caractères"
QUANTITY_MESSAGE = "La quantité doit être un nombre positif"
PRICE_MESSAGE = "Le prix unitaire doit être un nombre positif"
THRESHOLD_MESSAGE = "Le seuil d'alerte doit être un nombre positif"


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def _is_text(val: Any) -> bool:
    return isinstance(val, str) and bool(val.strip())

def _is_non_negative(val: Any) -> bool:
    return FieldNormalizer.is_number(val) and val >= 0

def _is_positive(val: Any) -> bool:
    return FieldNormalizer.is_number(val) and val > 0


FIELD_RULES: List[Tuple[str, Callable[[Any], bool], str]] = [
    (NAME_FIELD, _is_text, NAME_MESSAGE),
    (CATEGORY_FIELD, _is_text, CATEGORY_MESSAGE),
    (QUANTITY_FIELD, _is_non_negative, QUANTITY_MESSAGE),
    (PRICE_FIELD, _is_positive, PRICE_MESSAGE),
    (THRESHOLD_FIELD, _is_non_negative, THRESHOLD_MESSAGE),
]


def validate_product(record: Any) -> ValidationResult:
    """Check a complete candidate record against every rule."""
    if not isinstance(record, dict):
        record = {}

    errors = [message for field_name, check, message in FIELD_RULES
              if not check(record.get(field_name))]
    return ValidationResult(is_valid=not errors, errors=errors)


def validate_partial(update: Dict[str, Any]) -> ValidationResult:
    """Check only the rules whose field is present in a partial update."""
    errors = [message for field_name, check, message in FIELD_RULES
              if field_name in update and not check(update[field_name])]
    return ValidationResult(is_valid=not errors, errors=errors)

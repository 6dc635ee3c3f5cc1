import math
import numbers
from typing import Any, Optional
import pandas as pd

INT64_MAX = 2 ** 63 - 1
INT64_MIN = -(2 ** 63)

class FieldNormalizer:
    """Utility class for normalizing raw import fields."""

    @staticmethod
    def is_missing(val: Any) -> bool:
        """True for None, NaN and other pandas missing markers."""
        if val is None:
            return True
        try:
            return bool(pd.isna(val))
        except (TypeError, ValueError):
            # pd.isna returns arrays for list-likes
            return False

    @staticmethod
    def is_number(val: Any) -> bool:
        """
        True for finite real numbers. Booleans are not numbers here, and
        integers must fit the store's signed 64-bit range.
        """
        if isinstance(val, bool) or not isinstance(val, numbers.Real):
            return False
        if isinstance(val, numbers.Integral):
            return INT64_MIN <= val <= INT64_MAX
        try:
            return math.isfinite(val)
        except OverflowError:
            return False

    @classmethod
    def normalize_string(cls, val: Any) -> str:
        """Trim a text field; missing values become an empty string."""
        if cls.is_missing(val):
            return ""
        return str(val).strip()

    @classmethod
    def normalize_optional_text(cls, val: Any) -> Optional[str]:
        """Trim an optional text field; empty or non-text values become None."""
        if not isinstance(val, str):
            return None
        val = val.strip()
        return val or None

    @classmethod
    def parse_numeric(cls, val: Any, default: Optional[float] = 0.0) -> Optional[float]:
        """Parse numeric value with fallback."""
        try:
            if cls.is_missing(val) or (isinstance(val, str) and not val.strip()):
                return default
            number = float(val)
            return number if math.isfinite(number) else default
        except (ValueError, TypeError):
            return default

    @classmethod
    def parse_integer(cls, val: Any, default: Optional[int] = 0) -> Optional[int]:
        """Parse integer value with fallback. Decimal strings are truncated."""
        number = cls.parse_numeric(val, default=None)
        if number is None:
            return default
        return int(number)

    @classmethod
    def coerce_whole_number(cls, val: Any) -> Any:
        """Turn integral floats (e.g. 12.0 from JSON) into ints; leave anything else alone."""
        if isinstance(val, float) and val.is_integer():
            return int(val)
        return val

# utils/helpers.py
import datetime
import re
from typing import Optional

DEFAULT_CURRENCY = "MAD"

# fr-FR grouping uses a narrow no-break space; the currency code follows a no-break space
THOUSANDS_SEPARATOR = "\u202f"
CURRENCY_SEPARATOR = "\u00a0"


def now():
    """Current UTC time, timezone-aware."""
    return datetime.datetime.now(datetime.timezone.utc)

def today_iso(today: Optional[datetime.date] = None) -> str:
    """ISO date (YYYY-MM-DD) used in export filenames."""
    return (today or datetime.date.today()).isoformat()

def format_currency(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format an amount the fr-FR way with two decimals, e.g. ``1 200,50 MAD``.
    """
    formatted = f"{amount:,.2f}"
    formatted = formatted.replace(",", THOUSANDS_SEPARATOR).replace(".", ",")
    return f"{formatted}{CURRENCY_SEPARATOR}{currency}"

def format_date_fr(value) -> str:
    """dd/mm/YYYY for dates and datetimes, empty string otherwise."""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.strftime("%d/%m/%Y")
    return ""

def sanitize_filename_term(term: str) -> str:
    """Replace every non-alphanumeric ASCII character with a hyphen."""
    return re.sub(r"[^a-zA-Z0-9]", "-", term)

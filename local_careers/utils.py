# local_careers/utils.py
import math
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional


def clean_text(value: Any) -> Optional[str]:
    """Stringify and trim a scalar; blanks and containers become None."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return None
    if isinstance(value, bool):
        return None
    s = str(value).strip()
    return s or None


def parse_finite(value: Any) -> Optional[float]:
    """
    Parse a number coming from a feed, a config file or a query string.
    Returns None instead of NaN/inf so a bad value never reaches storage.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def clean_list(items: Iterable[Any]) -> List[str]:
    out = []
    for x in items or []:
        s = clean_text(x)
        if s:
            out.append(s)
    return out


def split_categories(value: Any) -> List[str]:
    """Lists are kept, comma-delimited strings are split, anything else is []."""
    if isinstance(value, (list, tuple)):
        return clean_list(value)
    if isinstance(value, str):
        return clean_list(value.split(","))
    return []


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return uuid.uuid4().hex

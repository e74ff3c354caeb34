import re
from datetime import date, datetime
from typing import Any, Optional


_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_deadline(raw: Any) -> Optional[date]:
    """Coerce a deadline given as a date, datetime or ISO string into a date.

    Empty strings and None clear the deadline. Datetime strings (as sent by
    browsers serializing a Date, e.g. "2026-11-01T00:00:00.000Z") keep their
    own calendar day. Raises ValueError for anything else.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise ValueError("Deadline must be an ISO date string")
    text = raw.strip()
    if not text:
        return None
    if _ISO_DATE_RE.match(text):
        return date.fromisoformat(text)
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f"Invalid deadline: {raw!r}") from None


def coerce_deadline(raw: Any) -> Optional[date]:
    """Lenient variant of parse_deadline: unparseable values become None."""
    try:
        return parse_deadline(raw)
    except ValueError:
        return None


def normalize_documents(raw: Any) -> list:
    if not raw:
        return []
    if isinstance(raw, str):
        return [raw]
    return [str(d) if d is not None else "" for d in raw]

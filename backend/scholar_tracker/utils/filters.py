from typing import Any, Iterable, List, Optional

ALL_STATUSES = "All"


_JSON_KEYS = {"university_name": "universityName"}


def _text(record: Any, attr: str) -> str:
    if isinstance(record, dict):
        value = record.get(attr, record.get(_JSON_KEYS.get(attr, attr)))
    else:
        value = getattr(record, attr, None)
    return value if isinstance(value, str) else ""


def matches_search(record: Any, search: Optional[str]) -> bool:
    """Case-insensitive substring match over university name and country."""
    needle = (search or "").lower()
    if not needle:
        return True
    return needle in _text(record, "university_name").lower() or needle in _text(record, "country").lower()


def matches_status(record: Any, status: Optional[str]) -> bool:
    if not status or status == ALL_STATUSES:
        return True
    return _text(record, "status") == status


def filter_scholarships(records: Iterable[Any], search: Optional[str] = None, status: Optional[str] = None) -> List[Any]:
    return [r for r in records if matches_search(r, search) and matches_status(r, status)]

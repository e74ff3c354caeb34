"""Dashboard statistics derived from the current set of scholarship records.

Everything here is a pure function of ``(records, now)``. Records may be ORM
rows, ``ScholarshipRead`` models or plain mappings decoded from JSON; missing
or malformed values fall back to their zero/empty defaults so a summary can
always be produced.
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from scholar_tracker.utils.validators import coerce_deadline


ACCEPTED = "Accepted"
APPLIED = "Applied"
TOP_COUNTRIES = 5
UPCOMING_LIMIT = 3
URGENT_DAYS = 7

Instant = Union[datetime, date]


def _get(record: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a record by snake_case attribute or camelCase key."""
    if isinstance(record, Mapping):
        if name in record:
            value = record[name]
        else:
            head, *rest = name.split("_")
            value = record.get(head + "".join(p.title() for p in rest), default)
    else:
        value = getattr(record, name, default)
    return default if value is None else value


def _today(now: Optional[Instant]) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def _seq(value: Any) -> list:
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return []


def _deadline(record: Any) -> Optional[date]:
    return coerce_deadline(_get(record, "deadline"))


def completion_ratio(record: Any) -> float:
    """Progress fraction: portal signup, application started and documents done.

    The document component is ``len(documents_done) / len(required_documents)``
    taken literally, without matching names, so it can push the ratio above 1.
    """
    signup = 1 if _get(record, "portal_signup", False) else 0
    started = 1 if _get(record, "apply_started", False) else 0
    required = _seq(_get(record, "required_documents"))
    done = _seq(_get(record, "documents_done"))
    if len(required) > 0:
        return (signup + started + len(done) / len(required)) / 3
    return (signup + started) / 2


def completion_percent(record: Any) -> int:
    # half-up, matching how the progress label has always been rounded
    return int(completion_ratio(record) * 100 + 0.5)


def days_left(record: Any, now: Optional[Instant] = None) -> Optional[int]:
    deadline = _deadline(record)
    if deadline is None:
        return None
    return (deadline - _today(now)).days


def is_urgent(days: Optional[int]) -> bool:
    return days is not None and days <= URGENT_DAYS


@dataclass
class UpcomingDeadline:
    record: Any
    deadline: date
    days_left: int
    urgent: bool


@dataclass
class DashboardStats:
    total: int = 0
    accepted_count: int = 0
    applied_count: int = 0
    pending_count: int = 0
    status_breakdown: List[Tuple[str, int]] = field(default_factory=list)
    country_breakdown: List[Tuple[str, int]] = field(default_factory=list)
    upcoming_deadlines: List[UpcomingDeadline] = field(default_factory=list)


def status_breakdown(records: Iterable[Any]) -> List[Tuple[str, int]]:
    counts = Counter(_get(r, "status", "") for r in records)
    return list(counts.items())


def country_breakdown(records: Iterable[Any], limit: int = TOP_COUNTRIES) -> List[Tuple[str, int]]:
    counts = Counter(_get(r, "country", "") for r in records)
    # sorted() is stable, so equal counts keep first-seen order
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]


def upcoming_deadlines(
    records: Iterable[Any], now: Optional[Instant] = None, limit: int = UPCOMING_LIMIT
) -> List[UpcomingDeadline]:
    today = _today(now)
    dated = []
    for record in records:
        deadline = _deadline(record)
        if deadline is not None and deadline > today:
            dated.append((deadline, record))
    dated.sort(key=lambda pair: pair[0])

    upcoming: List[UpcomingDeadline] = []
    for deadline, record in dated[:limit]:
        left = (deadline - today).days
        upcoming.append(UpcomingDeadline(record=record, deadline=deadline, days_left=left, urgent=is_urgent(left)))
    return upcoming


def summarize(records: Iterable[Any], now: Optional[Instant] = None) -> DashboardStats:
    records = list(records or [])
    statuses = [_get(r, "status", "") for r in records]
    total = len(records)
    accepted = statuses.count(ACCEPTED)
    applied = statuses.count(APPLIED)
    return DashboardStats(
        total=total,
        accepted_count=accepted,
        applied_count=applied,
        pending_count=total - (applied + accepted),
        status_breakdown=status_breakdown(records),
        country_breakdown=country_breakdown(records),
        upcoming_deadlines=upcoming_deadlines(records, now),
    )

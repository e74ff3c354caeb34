import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

from scholar_tracker.api.contract import SCHOLARSHIPS
from scholar_tracker.errors import TrackerError
from scholar_tracker.schemas.scholarship import ScholarshipRead
from scholar_tracker.services.aggregation import DashboardStats, summarize
from scholar_tracker.services.client import QueryCache, ScholarshipClient
from scholar_tracker.utils.filters import filter_scholarships

logger = logging.getLogger(__name__)

LIST_KEY = (SCHOLARSHIPS["list"].path,)
MAX_NOTIFICATIONS = 20


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "default"


class ScholarshipTracker:
    """Client-side state for the list and dashboard views.

    The cached list is never edited in place: writes go to the server and the
    list key is invalidated once the server confirms, so the next read
    re-fetches. Write failures become destructive notifications.
    """

    def __init__(self, client: ScholarshipClient, cache: Optional[QueryCache] = None):
        self.client = client
        self.cache = cache if cache is not None else QueryCache()
        self.notifications: Deque[Notification] = deque(maxlen=MAX_NOTIFICATIONS)

    def scholarships(self) -> List[ScholarshipRead]:
        return self.cache.get_or_fetch(LIST_KEY, self.client.list)

    def get(self, scholarship_id: int) -> Optional[ScholarshipRead]:
        key = (SCHOLARSHIPS["get"].path, scholarship_id)
        scholarship = self.cache.get_or_fetch(key, lambda: self.client.get(scholarship_id))
        if scholarship is None:
            # a miss is not cached; the id may be created later
            self.cache.invalidate(key)
        return scholarship

    def visible(self, search: Optional[str] = None, status: Optional[str] = None) -> List[ScholarshipRead]:
        return filter_scholarships(self.scholarships(), search=search, status=status)

    def dashboard(self, now: Optional[datetime] = None) -> DashboardStats:
        return summarize(self.scholarships(), now or datetime.now())

    def add(self, payload: Dict[str, Any]) -> Optional[ScholarshipRead]:
        try:
            created = self.client.create(payload)
        except TrackerError as exc:
            self._failed(exc)
            return None
        self._confirmed(created.id)
        self._notify("Success", "Scholarship added successfully")
        return created

    def edit(self, scholarship_id: int, changes: Dict[str, Any]) -> Optional[ScholarshipRead]:
        try:
            updated = self.client.update(scholarship_id, changes)
        except TrackerError as exc:
            self._failed(exc)
            return None
        self._confirmed(scholarship_id)
        self._notify("Updated", "Scholarship details updated")
        return updated

    def remove(self, scholarship_id: int) -> bool:
        try:
            self.client.delete(scholarship_id)
        except TrackerError as exc:
            self._failed(exc)
            return False
        self._confirmed(scholarship_id)
        self._notify("Deleted", "Scholarship removed from database")
        return True

    def dismiss(self) -> None:
        self.notifications.clear()

    def _confirmed(self, scholarship_id: Optional[int] = None) -> None:
        self.cache.invalidate(LIST_KEY)
        if scholarship_id is not None:
            self.cache.invalidate((SCHOLARSHIPS["get"].path, scholarship_id))

    def _failed(self, exc: TrackerError) -> None:
        logger.warning("Scholarship write failed: %s", exc.message)
        self._notify("Error", exc.message, variant="destructive")

    def _notify(self, title: str, description: str, variant: str = "default") -> None:
        self.notifications.append(Notification(title=title, description=description, variant=variant))

"""HTTP client for the scholarship API contract.

Any session object exposing ``request(method, url, json=..., params=...)``
and returning a response with ``status_code``/``json()`` can be used, so a
``requests.Session`` in production and FastAPI's ``TestClient`` in tests.
The request timeout is only applied to the session the client creates itself.
Failures are surfaced immediately; nothing is retried.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Hashable, List, Optional

import requests

from scholar_tracker.api.contract import DASHBOARD, SCHOLARSHIPS, Route, build_url
from scholar_tracker.config import API_BASE_URL, CLIENT_TIMEOUT_SECONDS
from scholar_tracker.errors import NotFoundError, TransportError, ValidationError
from scholar_tracker.schemas.scholarship import (
    DashboardRead,
    ScholarshipCreate,
    ScholarshipRead,
    ScholarshipUpdate,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class QueryCache:
    """Read-through cache keyed by query key, invalidated explicitly after writes."""

    _entries: Dict[Hashable, Any] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get_or_fetch(self, key: Hashable, fetcher: Callable[[], Any]) -> Any:
        with self._lock:
            if key in self._entries:
                return self._entries[key]
        value = fetcher()
        with self._lock:
            self._entries[key] = value
        return value

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries


class ScholarshipClient:
    def __init__(
        self,
        base_url: str = API_BASE_URL,
        session: Any = None,
        timeout_seconds: float = CLIENT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def list(self) -> List[ScholarshipRead]:
        data = self._call(SCHOLARSHIPS["list"], action="fetch scholarships")
        return [ScholarshipRead.model_validate(item) for item in data]

    def get(self, scholarship_id: int) -> Optional[ScholarshipRead]:
        try:
            data = self._call(SCHOLARSHIPS["get"], {"id": scholarship_id}, action="fetch scholarship")
        except NotFoundError:
            return None
        return ScholarshipRead.model_validate(data)

    def create(self, payload: ScholarshipCreate | Dict[str, Any]) -> ScholarshipRead:
        body = self._serialize(ScholarshipCreate, payload, exclude_unset=False)
        data = self._call(SCHOLARSHIPS["create"], body=body, action="create scholarship")
        return ScholarshipRead.model_validate(data)

    def update(self, scholarship_id: int, changes: ScholarshipUpdate | Dict[str, Any]) -> ScholarshipRead:
        body = self._serialize(ScholarshipUpdate, changes, exclude_unset=True)
        data = self._call(SCHOLARSHIPS["update"], {"id": scholarship_id}, body=body, action="update scholarship")
        return ScholarshipRead.model_validate(data)

    def delete(self, scholarship_id: int) -> None:
        self._call(SCHOLARSHIPS["delete"], {"id": scholarship_id}, action="delete scholarship")

    def dashboard(self, as_of: Optional[date] = None) -> DashboardRead:
        params = None
        if as_of is not None:
            if not isinstance(as_of, datetime):
                as_of = datetime.combine(as_of, time.min)
            params = {"as_of": as_of.isoformat()}
        data = self._call(DASHBOARD, query=params, action="fetch dashboard")
        return DashboardRead.model_validate(data)

    @staticmethod
    def _serialize(model, payload, *, exclude_unset: bool) -> Dict[str, Any]:
        # Validate locally first so malformed input never reaches the wire
        if not isinstance(payload, model):
            try:
                payload = model.model_validate(payload)
            except ValueError as exc:
                field_name = None
                errors = getattr(exc, "errors", None)
                if callable(errors) and errors():
                    field_name = ".".join(str(p) for p in errors()[0].get("loc", ())) or None
                raise ValidationError(str(exc), field=field_name) from exc
        return payload.model_dump(mode="json", by_alias=True, exclude_unset=exclude_unset)

    def _call(
        self,
        route: Route,
        params: Optional[Dict[str, Any]] = None,
        *,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
        action: str,
    ) -> Any:
        url = self.base_url + build_url(route.path, params)
        kwargs: Dict[str, Any] = {}
        if self._owns_session:
            kwargs["timeout"] = self.timeout_seconds
        if body is not None:
            kwargs["json"] = body
        if query:
            kwargs["params"] = query
        try:
            response = self._session.request(route.method, url, **kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", route.method, url, exc)
            raise TransportError(f"Failed to {action}") from exc

        status = response.status_code
        if status == route.success:
            if status == 204:
                return None
            return response.json()

        payload = self._error_payload(response)
        message = payload.get("message") or f"Failed to {action}"
        if status == 400 and 400 in route.failures:
            raise ValidationError(message, field=payload.get("field"))
        if status == 404 and 404 in route.failures:
            raise NotFoundError(message)
        logger.warning("%s %s returned %s", route.method, url, status)
        raise TransportError(f"Failed to {action}")

    @staticmethod
    def _error_payload(response: Any) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}

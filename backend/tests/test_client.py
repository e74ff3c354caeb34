from __future__ import annotations

from datetime import date, timedelta

import pytest
import requests

from scholar_tracker.api.contract import SCHOLARSHIPS, build_url
from scholar_tracker.errors import NotFoundError, TransportError, ValidationError
from scholar_tracker.services.client import QueryCache, ScholarshipClient


@pytest.fixture
def api(client) -> ScholarshipClient:
    return ScholarshipClient(base_url="http://testserver", session=client)


def test_build_url_substitutes_tokens() -> None:
    assert build_url("/api/scholarships/:id", {"id": 42}) == "/api/scholarships/42"
    assert build_url("/api/scholarships", {"id": 42}) == "/api/scholarships"
    assert build_url(SCHOLARSHIPS["delete"].path) == "/api/scholarships/:id"


def test_client_crud_round_trip(api, make_payload) -> None:
    created = api.create(make_payload(requiredDocuments=["CV"], deadline=date(2026, 12, 1)))
    assert created.status == "Not Started"
    assert created.deadline == date(2026, 12, 1)

    assert api.get(created.id) == created
    assert [s.id for s in api.list()] == [created.id]

    updated = api.update(created.id, {"documentsDone": ["CV"], "portalSignup": True})
    assert updated.documents_done == ["CV"]
    assert updated.portal_signup is True
    assert updated.required_documents == ["CV"]

    api.delete(created.id)
    assert api.get(created.id) is None


def test_client_validates_before_sending(api, make_payload) -> None:
    with pytest.raises(ValidationError) as excinfo:
        api.create(make_payload(scholarshipName=""))
    assert excinfo.value.field == "scholarshipName"
    assert api.list() == []


def test_client_maps_not_found(api) -> None:
    with pytest.raises(NotFoundError):
        api.update(999, {"status": "Applied"})
    with pytest.raises(NotFoundError):
        api.delete(999)


def test_client_dashboard(api, make_payload) -> None:
    today = date(2026, 10, 19)
    api.create(make_payload(deadline=today + timedelta(days=5)))

    summary = api.dashboard(as_of=today)

    assert summary.total == 1
    assert summary.upcoming_deadlines[0].days_left == 5
    assert summary.upcoming_deadlines[0].urgent is True


def test_client_wraps_network_errors() -> None:
    class _DownSession:
        def request(self, method, url, **kwargs):  # noqa: ANN001
            raise requests.ConnectionError("connection refused")

    api = ScholarshipClient(base_url="http://nowhere", session=_DownSession())

    with pytest.raises(TransportError) as excinfo:
        api.list()
    assert excinfo.value.message == "Failed to fetch scholarships"


def test_client_unexpected_status_is_transport_error() -> None:
    class _Response:
        status_code = 500

        def json(self):
            return {"message": "boom"}

    class _BrokenSession:
        def request(self, method, url, **kwargs):  # noqa: ANN001
            return _Response()

    api = ScholarshipClient(base_url="http://nowhere", session=_BrokenSession())

    with pytest.raises(TransportError):
        api.delete(1)


def test_query_cache_reads_through_until_invalidated() -> None:
    cache = QueryCache()
    calls = []

    def fetch():
        calls.append(1)
        return len(calls)

    assert cache.get_or_fetch(("k",), fetch) == 1
    assert cache.get_or_fetch(("k",), fetch) == 1
    cache.invalidate(("k",))
    assert ("k",) not in cache
    assert cache.get_or_fetch(("k",), fetch) == 2
    cache.clear()
    assert cache.get_or_fetch(("k",), fetch) == 3


def test_timeout_only_sent_to_owned_session() -> None:
    seen = []

    class _Response:
        status_code = 200

        def json(self):
            return []

    class _RecordingSession:
        def request(self, method, url, **kwargs):  # noqa: ANN001
            seen.append(kwargs)
            return _Response()

        def close(self) -> None:
            pass

    ScholarshipClient(base_url="http://x", session=_RecordingSession()).list()
    assert "timeout" not in seen[-1]

    owned = ScholarshipClient(base_url="http://x", timeout_seconds=3.0)
    owned._session = _RecordingSession()
    owned.list()
    assert seen[-1]["timeout"] == 3.0

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from scholar_tracker.services.client import ScholarshipClient
from scholar_tracker.services.tracker import LIST_KEY, ScholarshipTracker
from scholar_tracker.utils.filters import filter_scholarships


@pytest.fixture
def tracker(client) -> ScholarshipTracker:
    return ScholarshipTracker(ScholarshipClient(base_url="http://testserver", session=client))


def test_successful_write_invalidates_list(tracker, make_payload) -> None:
    assert tracker.scholarships() == []
    assert LIST_KEY in tracker.cache

    created = tracker.add(make_payload())

    assert created is not None
    assert LIST_KEY not in tracker.cache
    assert [s.id for s in tracker.scholarships()] == [created.id]
    assert tracker.notifications[-1].title == "Success"


def test_failed_write_notifies_and_keeps_cache(tracker, make_payload) -> None:
    tracker.scholarships()

    assert tracker.add(make_payload(universityName="")) is None
    assert tracker.edit(404, {"status": "Applied"}) is None
    assert tracker.remove(404) is False

    assert LIST_KEY in tracker.cache
    assert [n.variant for n in tracker.notifications] == ["destructive"] * 3
    assert tracker.notifications[1].description == "Scholarship not found"


def test_edit_and_remove_refetch(tracker, make_payload) -> None:
    created = tracker.add(make_payload())
    assert tracker.get(created.id).status == "Not Started"

    tracker.edit(created.id, {"status": "Interview"})
    assert tracker.get(created.id).status == "Interview"
    assert tracker.scholarships()[0].status == "Interview"

    assert tracker.remove(created.id) is True
    assert tracker.scholarships() == []
    assert tracker.get(created.id) is None
    assert [n.title for n in tracker.notifications] == ["Success", "Updated", "Deleted"]


def test_dashboard_from_cached_list(tracker, make_payload) -> None:
    now = datetime(2026, 10, 19, 12, 0)
    tracker.add(make_payload(status="Applied", deadline=(now.date() + timedelta(days=5)).isoformat()))
    tracker.add(make_payload(status="Accepted", country="Canada"))

    stats = tracker.dashboard(now)

    assert (stats.total, stats.applied_count, stats.accepted_count, stats.pending_count) == (2, 1, 1, 0)
    assert stats.upcoming_deadlines[0].days_left == 5
    assert stats.upcoming_deadlines[0].urgent is True
    assert stats.upcoming_deadlines[0].deadline == date(2026, 10, 24)


def test_visible_filters_case_insensitively(tracker, make_payload) -> None:
    tracker.add(make_payload(universityName="ETH Zurich", country="Switzerland", status="Applied"))
    tracker.add(make_payload(universityName="University of Tokyo", country="Japan"))

    assert [s.country for s in tracker.visible(search="zur")] == ["Switzerland"]
    assert [s.country for s in tracker.visible(search="JAPAN")] == ["Japan"]
    assert [s.country for s in tracker.visible(status="Applied")] == ["Switzerland"]
    assert len(tracker.visible(status="All")) == 2
    assert tracker.visible(search="tokyo", status="Applied") == []


def test_filter_scholarships_on_json_rows() -> None:
    rows = [
        {"universityName": "MIT", "country": "USA", "status": "Applied"},
        {"universityName": "McGill", "country": "Canada", "status": "Rejected"},
    ]
    assert filter_scholarships(rows, search="mc") == [rows[1]]
    assert filter_scholarships(rows, status="Applied") == [rows[0]]
    assert filter_scholarships(rows) == rows


def test_missing_record_is_not_cached(tracker, make_payload) -> None:
    assert tracker.get(1) is None

    created = tracker.add(make_payload())

    assert created.id == 1
    assert tracker.get(1) == created

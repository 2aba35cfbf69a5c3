import json
import os
import stat

import pytest

from hrms.errors import NotFound
from hrms.extensions import store
from hrms.models import Interview, InterviewStatus
from hrms.store import EntityStore


def test_ids_are_allocated_per_collection(app):
    assert store.insert("interviews", Interview(candidate_id=1, date="2024-01-15", time="10:00")) == 1
    assert store.insert("jobPostings", {"title": "Designer"}) == 2
    assert store.insert("interviews", Interview(candidate_id=1, date="2024-01-16", time="10:00")) == 2


def test_snapshot_uses_original_layout(app):
    store.insert("interviews", Interview(candidate_id=1, date="2024-01-15", time="10:00", panel=[2]))
    store.persist()
    with open(app.config["DATA_FILE"], encoding="utf-8") as f:
        raw = json.load(f)
    assert raw["_id"]["interviews"] == 1
    assert raw["_id"]["candidates"] == 3
    row = raw["interviews"][0]
    assert row["candidateId"] == 1
    assert row["status"] == "scheduled"
    assert row["panelFeedback"] == []
    assert raw["candidates"][2]["status"] == "rejected"


def test_reload_keeps_counters(app):
    store.insert("interviews", Interview(candidate_id=1, date="2024-01-15", time="10:00"))
    store.persist()
    reloaded = EntityStore(app.config["DATA_FILE"])
    assert reloaded.get("interviews", 1).status == InterviewStatus.SCHEDULED
    assert reloaded.get("candidates", 1).name == "Priya Nair"
    assert reloaded.next_id("interviews") == 2


def test_unknown_collections_survive_rewrite(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"users": [], "leaveRequests": [{"id": 7, "days": 2}], "_id": {"leaveRequests": 7}}))
    s = EntityStore(str(path))
    s.persist()
    raw = json.loads(path.read_text())
    assert raw["leaveRequests"] == [{"id": 7, "days": 2}]
    assert raw["_id"]["leaveRequests"] == 7
    assert raw["interviews"] == []


def test_counter_resumes_after_highest_id(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"users": [{"id": 4, "name": "x"}], "_id": {}}))
    s = EntityStore(str(path))
    assert s.insert("users", {"name": "y"}) == 5


@pytest.mark.parametrize("content", ["{not json", json.dumps({"people": []}), json.dumps([1, 2])])
def test_unreadable_or_foreign_file_starts_empty(tmp_path, content):
    path = tmp_path / "db.json"
    path.write_text(content)
    s = EntityStore(str(path))
    assert s.find_all("candidates") == []
    assert s.insert("candidates", {"name": "a"}) == 1


def test_get_by_id_raises_not_found(app):
    with pytest.raises(NotFound, match="Interview with ID 42 not found"):
        store.get_by_id("interviews", 42)
    assert store.get("interviews", 42) is None


def test_replace_unknown_id_raises(app):
    with pytest.raises(NotFound):
        store.replace("interviews", 9, Interview(id=9))


def test_find_all_with_predicate(app):
    names = [c.name for c in store.find_all("candidates", lambda c: c.job_posting_id == 1)]
    assert names == ["Priya Nair", "Tom Becker"]


def test_refresh_picks_up_external_writes(app):
    assert store.refresh() is False
    other = EntityStore(app.config["DATA_FILE"])
    other.insert("interviews", Interview(candidate_id=1, date="2024-03-01", time="09:00"))
    other.persist()
    assert store.refresh() is True
    assert store.get("interviews", 1).date == "2024-03-01"


def test_persist_keeps_file_mode(app):
    path = app.config["DATA_FILE"]
    os.chmod(path, 0o644)
    store.insert("interviews", Interview(candidate_id=1, date="2024-01-15", time="10:00"))
    store.persist()
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o644

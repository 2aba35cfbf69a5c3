import pytest

from hrms.extensions import store

SLOT = {"candidateId": 1, "date": "2024-01-15", "time": "10:00", "panel": [2, 3]}


def _schedule(client, **overrides):
    return client.post("/api/interviews", json=dict(SLOT, **overrides))


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.get_json()["collections"]["candidates"] == 3


def test_schedule_interview(client, sent):
    res = _schedule(client)
    assert res.status_code == 201
    body = res.get_json()
    assert body["interview"]["status"] == "scheduled"
    assert body["interview"]["candidateId"] == 1
    assert client.get("/api/candidates/1").get_json()["status"] == "interview_scheduled"
    # notification ran inline because REDIS_URL is unset
    assert sent == [("scheduled", 1, {"id": 1, "title": "Backend Engineer"}, body["interview"]["id"])]


@pytest.mark.parametrize("overrides,code", [
    ({"date": ""}, 400),
    ({"time": None}, 400),
    ({"panel": [2, 99]}, 404),
    ({"candidateId": 404}, 404),
    ({"candidateId": 3}, 409),
    ({"panel": "2,3"}, 400),
])
def test_schedule_errors(client, sent, overrides, code):
    res = _schedule(client, **overrides)
    assert res.status_code == code
    assert "error" in res.get_json()
    assert client.get("/api/interviews").get_json() == []
    assert sent == []


def test_malformed_json_is_400(client):
    res = client.post("/api/interviews", data="{oops", content_type="application/json")
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_notification_failure_does_not_fail_request(client, monkeypatch):
    def boom(*args):
        raise RuntimeError("provider down")
    monkeypatch.setattr("hrms.jobs.notify.send_interview_scheduled", boom)
    res = _schedule(client)
    assert res.status_code == 201
    assert len(client.get("/api/interviews").get_json()) == 1


def test_list_and_detail_are_enriched(client, sent):
    _schedule(client)
    _schedule(client, date="2024-01-16", panel=[3])
    listed = client.get("/api/interviews?interviewerId=2").get_json()
    assert [i["date"] for i in listed] == ["2024-01-15"]
    assert listed[0]["candidate"] == {"id": 1, "name": "Priya Nair", "email": "priya@example.com"}
    assert [p["name"] for p in listed[0]["panel"]] == ["Daniel Kim", "Maria Lopez"]
    assert len(client.get("/api/interviews?date=2024-01-16&status=scheduled").get_json()) == 1

    detail = client.get("/api/interviews/2").get_json()
    assert detail["candidate"]["jobPostingId"] == 1
    assert client.get("/api/interviews/99").status_code == 404
    assert len(client.get("/api/interviews/candidate/1").get_json()) == 2


def test_update_interview(client, sent):
    _schedule(client)
    res = client.put("/api/interviews/1", json={"time": "14:30", "type": "hr"})
    assert res.status_code == 200
    assert res.get_json()["interview"]["time"] == "14:30"
    assert client.put("/api/interviews/1", json={"status": "completed"}).status_code == 400


def test_feedback_flow(client, sent):
    _schedule(client)
    res = client.post("/api/interviews/1/feedback", json={"rating": 4, "outcome": "selected", "remarks": "strong"})
    assert res.status_code == 200
    feedback = res.get_json()["feedback"]
    assert feedback["status"] == "completed"
    assert feedback["completedAt"]
    assert client.get("/api/candidates/1").get_json()["status"] == "selected"
    assert sent[-1][0] == "completed"

    again = client.post("/api/interviews/1/feedback", json={"rating": 2, "outcome": "rejected"})
    assert again.status_code == 409
    summary = client.get("/api/interviews/1/feedback").get_json()
    assert (summary["rating"], summary["outcome"], summary["remarks"]) == (4, "selected", "strong")


@pytest.mark.parametrize("payload", [{"rating": 0}, {"rating": 6}, {"outcome": "maybe"}])
def test_feedback_validation(client, sent, payload):
    _schedule(client)
    assert client.post("/api/interviews/1/feedback", json=payload).status_code == 400
    assert client.get("/api/interviews/1").get_json()["status"] == "scheduled"


def test_verification_flow(client):
    res = client.post("/api/verifications", json={"candidateId": 2, "agency": "CheckCorp"})
    assert res.status_code == 201
    vid = res.get_json()["verification"]["id"]
    assert client.get("/api/candidates/2").get_json()["status"] == "background_verification"

    res = client.put(f"/api/verifications/{vid}", json={"status": "completed_passed", "verifiedBy": 1})
    assert res.status_code == 200
    v = res.get_json()["verification"]
    assert v["completedAt"] and v["verifiedBy"] == 1
    assert client.get("/api/candidates/2").get_json()["status"] == "verified"

    assert client.put(f"/api/verifications/{vid}", json={"status": "bogus"}).status_code == 400
    assert client.put(f"/api/verifications/{vid}", json={"status": "in_progress"}).status_code == 409
    assert client.put("/api/verifications/99", json={}).status_code == 404

    listed = client.get("/api/verifications").get_json()
    assert listed[0]["candidate"]["name"] == "Tom Becker"
    assert len(client.get("/api/verifications/candidate/2").get_json()) == 1


def test_verification_before_selection_is_409(client):
    assert client.post("/api/verifications", json={"candidateId": 1}).status_code == 409
    assert client.get("/api/candidates/1").get_json()["status"] == "applied"
    assert client.get("/api/verifications").get_json() == []


def test_dashboards(client, sent):
    _schedule(client, date="2999-01-01")
    client.post("/api/interviews/1/feedback", json={"rating": 5, "outcome": "hold"})
    _schedule(client, date="2999-01-02")
    stats = client.get("/api/dashboard/interviews").get_json()
    assert stats["averageRating"] == 5
    assert stats["outcomeStats"] == {"hold": 1}
    assert [u["id"] for u in stats["upcomingInterviews"]] == [2]

    upcoming = client.get("/api/dashboard/upcoming-interviews").get_json()
    assert upcoming == [{"id": 2, "date": "2999-01-02", "time": "10:00", "candidate": "Priya Nair",
                         "position": "Backend Engineer", "type": "technical", "location": "virtual"}]
    assert client.get("/api/dashboard/verifications").get_json() == {"total": 0}


def test_candidates_api(client):
    res = client.post("/api/candidates", json={"name": "Ravi Shah", "email": "ravi@example.com", "jobPostingId": 1})
    assert res.status_code == 201
    cid = res.get_json()["candidate"]["id"]
    assert client.post("/api/candidates", json={}).status_code == 400
    assert client.post("/api/candidates", json={"name": 123}).status_code == 400

    assert [c["name"] for c in client.get("/api/candidates?status=applied").get_json()] == ["Priya Nair", "Ravi Shah"]
    assert client.get("/api/candidates?status=nope").status_code == 400

    res = client.post(f"/api/candidates/{cid}/status", json={"status": "shortlisted"})
    assert res.get_json()["candidate"]["status"] == "shortlisted"
    assert client.post(f"/api/candidates/{cid}/status", json={"status": "joined"}).status_code == 409

    detail = client.get(f"/api/candidates/{cid}").get_json()
    assert detail["posting"]["title"] == "Backend Engineer"
    assert detail["interviews"] == [] and detail["verifications"] == []


def test_ics_download(client, sent):
    _schedule(client)
    res = client.get("/api/interviews/1/ics")
    assert res.status_code == 200
    assert res.mimetype == "text/calendar"
    body = res.get_data(as_text=True)
    assert "DTSTART:20240115T100000" in body
    assert "Backend Engineer" in body

    store.get("interviews", 1).time = "ten"
    assert client.get("/api/interviews/1/ics").status_code == 400

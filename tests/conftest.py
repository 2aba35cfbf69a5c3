import pytest

from hrms import create_app
from hrms.extensions import store
from hrms.models import Candidate, CandidateStatus

USERS = [
    {"name": "Asha Rao", "email": "asha@example.com", "role": "hr"},
    {"name": "Daniel Kim", "email": "daniel@example.com", "role": "interviewer"},
    {"name": "Maria Lopez", "email": "maria@example.com", "role": "interviewer"},
]


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "DATA_FILE": str(tmp_path / "db.json"),
        "REDIS_URL": None,
        "SENDGRID_API_KEY": None,
    })
    with app.app_context():
        for u in USERS:
            store.insert("users", dict(u))                    # ids 1, 2, 3
        store.insert("jobPostings", {"title": "Backend Engineer"})  # id 1
        store.insert("candidates", Candidate(name="Priya Nair", email="priya@example.com",
                                             job_posting_id=1, status=CandidateStatus.APPLIED))
        store.insert("candidates", Candidate(name="Tom Becker", email="tom@example.com",
                                             job_posting_id=1, status=CandidateStatus.SELECTED))
        store.insert("candidates", Candidate(name="Lena Novak", status=CandidateStatus.REJECTED))
        store.persist()
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def sent(monkeypatch):
    """Capture outgoing interview mails instead of calling SendGrid."""
    calls = []

    def fake_scheduled(candidate, posting, interview):
        calls.append(("scheduled", candidate.id, posting, interview.id))
        return 202, {}

    def fake_completed(candidate, posting, interview):
        calls.append(("completed", candidate.id, posting, interview.id))
        return 202, {}

    monkeypatch.setattr("hrms.jobs.notify.send_interview_scheduled", fake_scheduled)
    monkeypatch.setattr("hrms.jobs.notify.send_interview_completed", fake_completed)
    return calls

"""Seed a snapshot with interviewers, a job posting and a few candidates.

Usage:
  DATA_FILE=./db.json python scripts/seed_demo.py
"""

import os, sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from hrms import create_app
from hrms.extensions import store
from hrms.services import workflow

USERS = [
    {"name": "Asha Rao", "email": "asha.rao@example.com", "role": "hr"},
    {"name": "Daniel Kim", "email": "daniel.kim@example.com", "role": "interviewer"},
    {"name": "Maria Lopez", "email": "maria.lopez@example.com", "role": "interviewer"},
]

CANDIDATES = [
    {"name": "Priya Nair", "email": "priya.nair@example.com"},
    {"name": "Tom Becker", "email": "tom.becker@example.com"},
    {"name": "Lena Novak", "email": "lena.novak@example.com"},
]


def main():
    app = create_app({"REDIS_URL": None})
    with app.app_context():
        if store.find_all("users"):
            print('Store already has users; refusing to seed', app.config['DATA_FILE'])
            raise SystemExit(1)
        for u in USERS:
            store.insert("users", dict(u))
        posting_id = store.insert("jobPostings", {"title": "Backend Engineer", "department": "Engineering", "status": "open"})
        store.persist()
        for c in CANDIDATES:
            created = workflow.create_candidate(dict(c, jobPostingId=posting_id))
            print('created', created)
    print('Seeded', app.config['DATA_FILE'])


if __name__ == '__main__':
    main()

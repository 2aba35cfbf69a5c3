from dataclasses import dataclass

from .base import SnapshotMixin
from .status import CandidateStatus


@dataclass
class Candidate(SnapshotMixin):
    _timestamps = ("applied_at",)
    _enums = {"status": CandidateStatus}

    id: int = None
    name: str = ""
    email: str = None
    phone: str = None
    job_posting_id: int = None
    status: CandidateStatus = CandidateStatus.APPLIED
    applied_at: object = None

    def summary(self):
        return {"id": self.id, "name": self.name, "email": self.email}

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} name={self.name!r} status={self.status.value}>"

from dataclasses import dataclass, field

from .base import SnapshotMixin
from .status import InterviewOutcome, InterviewStatus


@dataclass
class Interview(SnapshotMixin):
    _timestamps = ("scheduled_at", "completed_at")
    _enums = {"status": InterviewStatus, "outcome": InterviewOutcome}

    id: int = None
    candidate_id: int = None
    date: str = None        # YYYY-MM-DD
    time: str = None        # HH:MM
    panel: list = field(default_factory=list)  # users.id
    round: int = 1
    type: str = "technical"
    location: str = "virtual"
    status: InterviewStatus = InterviewStatus.SCHEDULED
    rating: int = None      # 1-5
    remarks: str = ""
    outcome: InterviewOutcome = None
    panel_feedback: list = field(default_factory=list)  # [{interviewerId, feedback, rating}]
    scheduled_by: int = None
    scheduled_at: object = None
    completed_at: object = None

    def __repr__(self) -> str:
        return f"<Interview id={self.id} candidate_id={self.candidate_id} status={self.status.value}>"

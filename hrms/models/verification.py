from dataclasses import dataclass, field

from .base import SnapshotMixin
from .status import TERMINAL_VERIFICATION_STATUSES, VerificationStatus


@dataclass
class BackgroundVerification(SnapshotMixin):
    _timestamps = ("initiated_at", "completed_at")
    _enums = {"status": VerificationStatus}

    id: int = None
    candidate_id: int = None
    type: str = "standard"
    agency: str = None
    status: VerificationStatus = VerificationStatus.INITIATED
    documents: list = field(default_factory=list)
    remarks: str = ""
    initiated_by: int = None
    verified_by: int = None
    initiated_at: object = None
    completed_at: object = None

    @property
    def is_terminal(self):
        return self.status in TERMINAL_VERIFICATION_STATUSES

    def __repr__(self) -> str:
        return f"<BackgroundVerification id={self.id} candidate_id={self.candidate_id} status={self.status.value}>"

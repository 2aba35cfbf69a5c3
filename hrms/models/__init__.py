from .status import (
    CandidateStatus,
    InterviewStatus,
    InterviewOutcome,
    VerificationStatus,
)
from .candidate import Candidate
from .interview import Interview
from .verification import BackgroundVerification

# snapshot collections that load into model objects; the rest stay plain dicts
MODEL_COLLECTIONS = {
    "candidates": Candidate,
    "interviews": Interview,
    "backgroundVerifications": BackgroundVerification,
}

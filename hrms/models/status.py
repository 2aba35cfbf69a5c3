"""Status values for candidates, interviews and background verifications.

Members subclass ``str`` so they compare equal to the raw strings stored in the
snapshot and serialize unchanged in API payloads.
"""

from enum import Enum


class CandidateStatus(str, Enum):
    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    INTERVIEWED = "interviewed"
    SELECTED = "selected"
    REJECTED = "rejected"
    ON_HOLD = "on_hold"
    NEXT_ROUND = "next_round"
    BACKGROUND_VERIFICATION = "background_verification"
    VERIFIED = "verified"
    VERIFICATION_FAILED = "verification_failed"
    JOINED = "joined"


class InterviewStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"


class InterviewOutcome(str, Enum):
    SELECTED = "selected"
    REJECTED = "rejected"
    HOLD = "hold"
    NEXT_ROUND = "next_round"


class VerificationStatus(str, Enum):
    INITIATED = "initiated"
    IN_PROGRESS = "in_progress"
    COMPLETED_PASSED = "completed_passed"
    COMPLETED_FAILED = "completed_failed"


TERMINAL_CANDIDATE_STATUSES = frozenset({
    CandidateStatus.REJECTED,
    CandidateStatus.VERIFICATION_FAILED,
    CandidateStatus.JOINED,
})

TERMINAL_VERIFICATION_STATUSES = frozenset({
    VerificationStatus.COMPLETED_PASSED,
    VerificationStatus.COMPLETED_FAILED,
})

# forward-only ordering; both completed states share the last rank
VERIFICATION_RANK = {
    VerificationStatus.INITIATED: 0,
    VerificationStatus.IN_PROGRESS: 1,
    VerificationStatus.COMPLETED_PASSED: 2,
    VerificationStatus.COMPLETED_FAILED: 2,
}

OUTCOME_TO_CANDIDATE_STATUS = {
    InterviewOutcome.SELECTED: CandidateStatus.SELECTED,
    InterviewOutcome.REJECTED: CandidateStatus.REJECTED,
    InterviewOutcome.NEXT_ROUND: CandidateStatus.INTERVIEW_SCHEDULED,
    InterviewOutcome.HOLD: CandidateStatus.ON_HOLD,
}

VERIFICATION_TO_CANDIDATE_STATUS = {
    VerificationStatus.COMPLETED_PASSED: CandidateStatus.VERIFIED,
    VerificationStatus.COMPLETED_FAILED: CandidateStatus.VERIFICATION_FAILED,
}

# Manual pipeline moves accepted by advance_candidate(). Only edges no trigger
# owns are listed: interview_scheduled, interviewed, selected, on_hold,
# background_verification, verified and verification_failed are reached
# through scheduling, feedback and verification only.
CANDIDATE_TRANSITIONS = {
    CandidateStatus.APPLIED: {
        CandidateStatus.SHORTLISTED,
        CandidateStatus.REJECTED,
    },
    CandidateStatus.SHORTLISTED: {
        CandidateStatus.REJECTED,
    },
    CandidateStatus.INTERVIEW_SCHEDULED: set(),
    CandidateStatus.INTERVIEWED: set(),
    CandidateStatus.ON_HOLD: {
        CandidateStatus.REJECTED,
    },
    CandidateStatus.NEXT_ROUND: set(),
    CandidateStatus.SELECTED: set(),
    CandidateStatus.BACKGROUND_VERIFICATION: set(),
    CandidateStatus.VERIFIED: {
        CandidateStatus.JOINED,
    },
    CandidateStatus.REJECTED: set(),
    CandidateStatus.VERIFICATION_FAILED: set(),
    CandidateStatus.JOINED: set(),
}

# Candidate statuses from which a background verification may be initiated.
VERIFIABLE_CANDIDATE_STATUSES = frozenset({
    CandidateStatus.SELECTED,
    CandidateStatus.BACKGROUND_VERIFICATION,
})

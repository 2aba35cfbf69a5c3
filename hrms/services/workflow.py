"""Candidate, interview and background-verification transitions.

Every function here validates first and mutates second: a raised error leaves
the store untouched. Callers get the updated entity back after the snapshot
has been persisted; notification jobs are the caller's concern.

Update payloads follow "omit means keep": a missing key or ``None`` keeps the
stored value, anything else is validated and applied as given (so ``rating=0``
is rejected rather than ignored, and ``remarks=""`` clears the remarks).
"""

from dataclasses import replace

from flask import current_app

from ..errors import InvalidStateTransition, NotFound, ValidationError
from ..extensions import store
from ..models import BackgroundVerification, Candidate, Interview
from ..models.base import utcnow
from ..models.status import (
    CANDIDATE_TRANSITIONS,
    OUTCOME_TO_CANDIDATE_STATUS,
    TERMINAL_CANDIDATE_STATUSES,
    VERIFIABLE_CANDIDATE_STATUSES,
    VERIFICATION_RANK,
    VERIFICATION_TO_CANDIDATE_STATUS,
    CandidateStatus,
    InterviewOutcome,
    InterviewStatus,
    VerificationStatus,
)
from .directory import user_exists


# Helpers: coerce loosely-typed JSON values, raising ValidationError on garbage
def _blank(val):
    return val is None or (isinstance(val, str) and not val.strip())


def _coerce_int(val, name):
    if _blank(val):
        return None
    if isinstance(val, bool):
        raise ValidationError(f"{name} must be an integer")
    if isinstance(val, int):
        return val
    if isinstance(val, float) and val.is_integer():
        return int(val)
    if isinstance(val, str):
        try:
            return int(val.strip())
        except ValueError:
            pass
    raise ValidationError(f"{name} must be an integer")


def _coerce_rating(val, name="Rating"):
    rating = _coerce_int(val, name)
    if rating is not None and not 1 <= rating <= 5:
        raise ValidationError(f"{name} must be between 1 and 5")
    return rating


def _coerce_enum(enum_cls, val, message):
    if _blank(val):
        return None
    try:
        return enum_cls(val)
    except ValueError:
        raise ValidationError(message) from None


def _coerce_list(val, name):
    if val is None:
        return None
    if not isinstance(val, (list, tuple)):
        raise ValidationError(f"{name} must be a list")
    return list(val)


def _validate_panel(val):
    panel = []
    for raw in _coerce_list(val, "panel") or []:
        interviewer_id = _coerce_int(raw, "Interviewer ID")
        if interviewer_id is None:
            raise ValidationError("Interviewer ID must not be empty")
        if not user_exists(interviewer_id):
            raise NotFound(f"Interviewer with ID {interviewer_id} not found")
        if interviewer_id not in panel:
            panel.append(interviewer_id)
    return panel


def _validate_panel_feedback(val):
    entries = _coerce_list(val, "panelFeedback")
    if entries is None:
        return None
    out = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValidationError("panelFeedback entries must be objects")
        out.append({
            "interviewerId": _coerce_int(entry.get("interviewerId"), "interviewerId"),
            "feedback": entry.get("feedback") or "",
            "rating": _coerce_rating(entry.get("rating"), "Panel rating"),
        })
    return out


def _keep(new, old):
    return old if new is None else new


def _active_candidate(candidate_id):
    candidate = store.get_by_id("candidates", candidate_id)
    if candidate.status in TERMINAL_CANDIDATE_STATUSES:
        raise InvalidStateTransition(
            f"Candidate {candidate.id} is {candidate.status.value}; no further transitions allowed"
        )
    return candidate


def _set_candidate_status(candidate, status):
    updated = replace(candidate, status=status)
    store.replace("candidates", candidate.id, updated)
    current_app.logger.info('Candidate %s: %s -> %s', candidate.id, candidate.status.value, status.value)
    return updated


# ==================== Candidates ====================

def get_candidate(candidate_id) -> Candidate:
    return store.get_by_id("candidates", candidate_id)


def list_candidates(status=None):
    wanted = _coerce_enum(CandidateStatus, status, "Invalid candidate status")
    return store.find_all("candidates", lambda c: wanted is None or c.status == wanted)


def create_candidate(fields) -> Candidate:
    fields = fields or {}
    name = fields.get("name")
    if _blank(name):
        raise ValidationError("Candidate name is required")
    if not isinstance(name, str):
        raise ValidationError("Candidate name must be a string")
    posting_id = _coerce_int(fields.get("jobPostingId"), "jobPostingId")
    if posting_id is not None:
        store.get_by_id("jobPostings", posting_id)
    candidate = Candidate(
        name=name.strip(),
        email=fields.get("email") or None,
        phone=fields.get("phone") or None,
        job_posting_id=posting_id,
        status=CandidateStatus.APPLIED,
        applied_at=utcnow(),
    )
    store.insert("candidates", candidate)
    store.persist()
    current_app.logger.info('Candidate %s created (posting %s)', candidate.id, posting_id)
    return candidate


def advance_candidate(candidate_id, status) -> Candidate:
    """Manual pipeline move, e.g. applied -> shortlisted or verified -> joined."""
    target = _coerce_enum(CandidateStatus, status, "Invalid candidate status")
    if target is None:
        raise ValidationError("status is required")
    candidate = store.get_by_id("candidates", candidate_id)
    if target not in CANDIDATE_TRANSITIONS[candidate.status]:
        raise InvalidStateTransition(
            f"Cannot move candidate from {candidate.status.value} to {target.value}"
        )
    updated = _set_candidate_status(candidate, target)
    store.persist()
    return updated


# ==================== Interview Scheduling ====================

def schedule_interview(candidate_id, fields=None) -> Interview:
    fields = fields or {}
    if _blank(candidate_id) or _blank(fields.get("date")) or _blank(fields.get("time")):
        raise ValidationError("Candidate ID, date, and time are required")
    candidate = _active_candidate(_coerce_int(candidate_id, "Candidate ID"))
    panel = _validate_panel(fields.get("panel"))
    round_no = _coerce_int(fields.get("round"), "round")
    if round_no is None:
        round_no = 1
    elif round_no < 1:
        raise ValidationError("round must be a positive integer")

    interview = Interview(
        candidate_id=candidate.id,
        date=str(fields["date"]).strip(),
        time=str(fields["time"]).strip(),
        panel=panel,
        round=round_no,
        type=fields.get("type") or "technical",
        location=fields.get("location") or "virtual",
        status=InterviewStatus.SCHEDULED,
        scheduled_by=_coerce_int(fields.get("scheduledBy"), "scheduledBy"),
        scheduled_at=utcnow(),
    )
    store.insert("interviews", interview)
    _set_candidate_status(candidate, CandidateStatus.INTERVIEW_SCHEDULED)
    store.persist()
    current_app.logger.info('Interview %s scheduled for candidate %s on %s %s',
                            interview.id, candidate.id, interview.date, interview.time)
    return interview


def get_interview(interview_id) -> Interview:
    return store.get_by_id("interviews", interview_id)


def get_interviews_by_candidate(candidate_id):
    return store.find_all("interviews", lambda i: i.candidate_id == candidate_id)


def update_interview(interview_id, updates) -> Interview:
    """Edit date/time/panel/type/location/round of a still-scheduled interview."""
    updates = updates or {}
    interview = get_interview(interview_id)
    if updates.get("status") is not None:
        raise ValidationError("Interview status changes only through feedback")
    if interview.status != InterviewStatus.SCHEDULED:
        raise InvalidStateTransition("Only scheduled interviews can be edited")

    changes = {}
    for name in ("date", "time"):
        if name in updates and updates[name] is not None:
            if _blank(updates[name]):
                raise ValidationError(f"{name} must not be empty")
            changes[name] = str(updates[name]).strip()
    if updates.get("panel") is not None:
        changes["panel"] = _validate_panel(updates["panel"])
    if updates.get("round") is not None:
        round_no = _coerce_int(updates["round"], "round")
        if round_no is None or round_no < 1:
            raise ValidationError("round must be a positive integer")
        changes["round"] = round_no
    for name in ("type", "location"):
        if updates.get(name) is not None:
            changes[name] = updates[name]

    if not changes:
        return interview
    updated = replace(interview, **changes)
    store.replace("interviews", interview.id, updated)
    store.persist()
    current_app.logger.info('Interview %s updated: %s', interview.id, ", ".join(sorted(changes)))
    return updated


# ==================== Interview Feedback & Completion ====================

def record_interview_feedback(interview_id, feedback=None) -> Interview:
    """Complete a scheduled interview and move the candidate by outcome.

    selected -> selected, rejected -> rejected, next_round ->
    interview_scheduled, hold -> on_hold; no outcome -> interviewed.
    ``completedAt`` is stamped for every outcome. A candidate already in a
    terminal status keeps it; the interview is still completed.
    """
    feedback = feedback or {}
    interview = get_interview(interview_id)
    if interview.status != InterviewStatus.SCHEDULED:
        raise InvalidStateTransition("Can only record feedback for scheduled interviews")

    rating = _coerce_rating(feedback.get("rating"))
    outcome = _coerce_enum(
        InterviewOutcome, feedback.get("outcome"),
        "Invalid outcome. Must be: selected, rejected, hold, or next_round",
    )
    panel_feedback = _validate_panel_feedback(feedback.get("panelFeedback"))
    candidate = store.get_by_id("candidates", interview.candidate_id)

    updated = replace(
        interview,
        rating=_keep(rating, interview.rating),
        remarks=_keep(feedback.get("remarks"), interview.remarks),
        outcome=outcome,
        panel_feedback=_keep(panel_feedback, interview.panel_feedback),
        status=InterviewStatus.COMPLETED,
        completed_at=utcnow(),
    )
    store.replace("interviews", interview.id, updated)
    target = OUTCOME_TO_CANDIDATE_STATUS[outcome] if outcome is not None else CandidateStatus.INTERVIEWED
    if candidate.status in TERMINAL_CANDIDATE_STATUSES:
        # the interview still closes; a finished candidate keeps their status
        current_app.logger.info('Candidate %s is %s; not moving to %s after interview %s',
                                candidate.id, candidate.status.value, target.value, interview.id)
    else:
        _set_candidate_status(candidate, target)
    store.persist()
    current_app.logger.info('Interview %s completed (rating=%s outcome=%s)',
                            interview.id, updated.rating, outcome.value if outcome else None)
    return updated


def get_interview_feedback(interview_id):
    i = get_interview(interview_id)
    d = i.to_dict()
    return {
        "interviewId": i.id,
        "candidateId": i.candidate_id,
        "rating": i.rating,
        "remarks": i.remarks,
        "outcome": d["outcome"],
        "panelFeedback": d["panelFeedback"],
        "completedAt": d["completedAt"],
    }


# ==================== Background Verification ====================

def initiate_background_verification(candidate_id, fields=None) -> BackgroundVerification:
    fields = fields or {}
    if _blank(candidate_id):
        raise ValidationError("Candidate ID is required")
    candidate = _active_candidate(_coerce_int(candidate_id, "Candidate ID"))
    if candidate.status not in VERIFIABLE_CANDIDATE_STATUSES:
        raise InvalidStateTransition(
            f"Candidate {candidate.id} is {candidate.status.value}; "
            "background verification starts after selection"
        )
    documents = _coerce_list(fields.get("documents"), "documents") or []

    verification = BackgroundVerification(
        candidate_id=candidate.id,
        type=fields.get("type") or "standard",
        agency=fields.get("agency") or None,
        status=VerificationStatus.INITIATED,
        documents=documents,
        initiated_by=_coerce_int(fields.get("initiatedBy"), "initiatedBy"),
        initiated_at=utcnow(),
    )
    store.insert("backgroundVerifications", verification)
    _set_candidate_status(candidate, CandidateStatus.BACKGROUND_VERIFICATION)
    store.persist()
    current_app.logger.info('Background verification %s initiated for candidate %s',
                            verification.id, candidate.id)
    return verification


def update_background_verification(verification_id, updates=None) -> BackgroundVerification:
    updates = updates or {}
    verification = store.get_by_id("backgroundVerifications", verification_id)
    status = _coerce_enum(VerificationStatus, updates.get("status"), "Invalid status")
    documents = _coerce_list(updates.get("documents"), "documents")
    verified_by = _coerce_int(updates.get("verifiedBy"), "verifiedBy")

    completing = False
    candidate = None
    if status is not None and status != verification.status:
        if verification.is_terminal:
            raise InvalidStateTransition(
                f"Verification {verification.id} is already {verification.status.value}"
            )
        if VERIFICATION_RANK[status] < VERIFICATION_RANK[verification.status]:
            raise InvalidStateTransition(
                f"Cannot move verification from {verification.status.value} to {status.value}"
            )
        completing = status in VERIFICATION_TO_CANDIDATE_STATUS
        if completing:
            candidate = _active_candidate(verification.candidate_id)

    updated = replace(
        verification,
        status=_keep(status, verification.status),
        remarks=_keep(updates.get("remarks"), verification.remarks),
        verified_by=_keep(verified_by, verification.verified_by),
        documents=_keep(documents, verification.documents),
    )
    if completing:
        updated.completed_at = utcnow()
        _set_candidate_status(candidate, VERIFICATION_TO_CANDIDATE_STATUS[status])
    store.replace("backgroundVerifications", verification.id, updated)
    store.persist()
    current_app.logger.info('Background verification %s now %s', updated.id, updated.status.value)
    return updated


def get_background_verifications(candidate_id):
    return store.find_all("backgroundVerifications", lambda v: v.candidate_id == candidate_id)

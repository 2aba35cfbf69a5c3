"""Best-effort interview emails, run on RQ after a transition commits.

Failures are logged and swallowed: a notification never undoes or blocks the
status change that triggered it.
"""

from flask import current_app

from ..extensions import store
from ..services.directory import get_posting_by_candidate
from ..services.mail import send_interview_completed, send_interview_scheduled


def _dispatch(interview_id: int, sender, label: str) -> bool:
    try:
        # worker processes hold their own copy of the snapshot
        store.refresh()
        interview = store.get_by_id("interviews", interview_id)
        candidate = store.get_by_id("candidates", interview.candidate_id)
        posting = get_posting_by_candidate(candidate.id)
        result = sender(candidate, posting, interview)
    except Exception:
        current_app.logger.exception('Failed to send %s notification for interview %s', label, interview_id)
        return False
    if result is None:
        return False
    status, _headers = result
    current_app.logger.info('Sent %s notification for interview %s (provider status %s)', label, interview_id, status)
    return True


def notify_interview_scheduled(interview_id: int) -> bool:
    return _dispatch(interview_id, send_interview_scheduled, "interview scheduled")


def notify_interview_completed(interview_id: int) -> bool:
    return _dispatch(interview_id, send_interview_completed, "interview completed")

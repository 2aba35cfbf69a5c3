"""Read-side projections: interview filters, dashboards, API enrichment.

All of these are linear scans over the store; entity counts are in the
hundreds.
"""

from collections import Counter
from datetime import date as date_cls

from ..extensions import store
from ..models.status import InterviewStatus
from .directory import panel_members, posting_for_candidate


def get_interviews(status=None, date=None, interviewer_id=None):
    """Filter by exact status, exact date string and panel membership."""
    def keep(i):
        if status and i.status != status:
            return False
        if date and i.date != date:
            return False
        if interviewer_id is not None and interviewer_id not in i.panel:
            return False
        return True
    return store.find_all("interviews", keep)


def _interview_day(interview):
    try:
        return date_cls.fromisoformat(interview.date)
    except (TypeError, ValueError):
        return None


def _upcoming(today=None, limit=10):
    today = today or date_cls.today()
    rows = []
    for i in store.find_all("interviews", lambda i: i.status == InterviewStatus.SCHEDULED):
        day = _interview_day(i)
        if day is not None and day >= today:
            rows.append(i)
    rows.sort(key=lambda i: (_interview_day(i), i.time or "", i.id))
    return rows[:limit]


def interview_dashboard(today=None):
    interviews = store.find_all("interviews")
    ratings = [i.rating for i in interviews if i.rating is not None]
    outcomes = Counter(i.outcome.value for i in interviews if i.outcome is not None)
    candidates = Counter(c.status.value for c in store.find_all("candidates"))
    return {
        "totalInterviews": len(interviews),
        "scheduledInterviews": sum(1 for i in interviews if i.status == InterviewStatus.SCHEDULED),
        "completedInterviews": sum(1 for i in interviews if i.status == InterviewStatus.COMPLETED),
        # plain mean over rated interviews; 0 when nothing is rated yet
        "averageRating": sum(ratings) / len(ratings) if ratings else 0,
        "outcomeStats": dict(outcomes),
        "upcomingInterviews": [i.to_dict() for i in _upcoming(today, limit=10)],
        "candidatesByStatus": dict(candidates),
    }


def verification_dashboard():
    stats = {"total": 0}
    for v in store.find_all("backgroundVerifications"):
        stats["total"] += 1
        stats[v.status.value] = stats.get(v.status.value, 0) + 1
    return stats


def upcoming_interviews(limit=20, today=None):
    rows = []
    for i in _upcoming(today, limit=limit):
        candidate = store.get("candidates", i.candidate_id)
        posting = posting_for_candidate(candidate)
        rows.append({
            "id": i.id,
            "date": i.date,
            "time": i.time,
            "candidate": candidate.name if candidate else "Unknown",
            "position": (posting or {}).get("title") or "Unknown",
            "type": i.type,
            "location": i.location,
        })
    return rows


# ==================== API enrichment ====================

def enrich_interview(interview, full_candidate=False):
    out = interview.to_dict()
    candidate = store.get("candidates", interview.candidate_id)
    if candidate is None:
        out["candidate"] = None
    else:
        out["candidate"] = candidate.to_dict() if full_candidate else candidate.summary()
    out["panel"] = panel_members(interview.panel)
    return out


def enrich_verification(verification):
    out = verification.to_dict()
    candidate = store.get("candidates", verification.candidate_id)
    out["candidate"] = candidate.summary() if candidate else None
    return out

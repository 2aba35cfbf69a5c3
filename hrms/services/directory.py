"""Lookups against collections this core reads but does not own."""

from ..extensions import store


def user_exists(user_id) -> bool:
    return store.exists("users", user_id)


def panel_members(panel):
    """Resolve interviewer ids to ``{id, name, email}``; unknown ids are dropped."""
    members = []
    for user_id in panel or []:
        u = store.get("users", user_id)
        if u:
            members.append({"id": u.get("id"), "name": u.get("name"), "email": u.get("email")})
    return members


def posting_for_candidate(candidate):
    if candidate is None or candidate.job_posting_id is None:
        return None
    return store.get("jobPostings", candidate.job_posting_id)


def get_posting_by_candidate(candidate_id):
    return posting_for_candidate(store.get("candidates", candidate_id))

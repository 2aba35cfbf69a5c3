from datetime import datetime, timedelta, timezone
from uuid import uuid4


def interview_slot(interview, minutes=60):
    """(start, end) wall-clock datetimes for an interview, or None if unparseable."""
    try:
        start = datetime.strptime(f"{interview.date} {interview.time}", "%Y-%m-%d %H:%M")
    except (TypeError, ValueError):
        return None
    return start, start + timedelta(minutes=minutes)


def _ics_escape(text):
    return (text or "").replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,").replace("\n", "\\n")


def build_ics(uid_domain, title, start, end, location="", description=""):
    uid = f"{uuid4()}@{uid_domain}"
    def to_dt(dt):
        # naive datetimes are the interview's local wall clock: emit floating time
        if dt.tzinfo:
            return dt.astimezone(timezone.utc).strftime('%Y%m%dT%H%M%SZ')
        return dt.strftime('%Y%m%dT%H%M%S')
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//HRMS Recruit//Interview//EN",
        "METHOD:REQUEST",
        "BEGIN:VEVENT",
        f"UID:{uid}",
        f"DTSTAMP:{to_dt(datetime.now(timezone.utc))}",
        f"DTSTART:{to_dt(start)}",
        f"DTEND:{to_dt(end)}",
        f"SUMMARY:{_ics_escape(title)}",
        f"LOCATION:{_ics_escape(location)}",
        f"DESCRIPTION:{_ics_escape(description)}",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"


def interview_ics(uid_domain, interview, candidate=None, posting=None):
    slot = interview_slot(interview)
    if slot is None:
        return None
    position = (posting or {}).get("title")
    title = f"Interview #{interview.id} (round {interview.round})"
    if position:
        title = f"{title}: {position}"
    description = f"{interview.type} interview"
    if candidate is not None:
        description = f"{description} with {candidate.name}"
    return build_ics(uid_domain, title=title, start=slot[0], end=slot[1],
                     location=interview.location or "", description=description)

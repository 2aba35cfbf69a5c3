import base64

from flask import current_app
from markupsafe import escape
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Attachment, Disposition, FileContent, FileName, FileType, Mail

from .ics import interview_ics

OUTCOME_LINES = {
    "selected": "We are pleased to let you know that you have been selected for the next stage.",
    "rejected": "After careful consideration we will not be moving forward with your application.",
    "hold": "Your application is currently on hold; we will contact you once we have an update.",
    "next_round": "You have progressed to the next interview round. Details will follow shortly.",
}


def send_mail(to_email, subject, html, attachment=None):
    api_key = current_app.config.get('SENDGRID_API_KEY')
    if not api_key:
        current_app.logger.warning('SENDGRID_API_KEY not set; skipping mail %r to %s', subject, to_email)
        return None
    sg = SendGridAPIClient(api_key=api_key)
    message = Mail(from_email=(current_app.config['MAIL_FROM'], current_app.config['MAIL_FROM_NAME']),
                   to_emails=to_email,
                   subject=subject,
                   html_content=html)
    if attachment is not None:
        message.attachment = attachment
    resp = sg.send(message)
    return resp.status_code, getattr(resp, 'headers', None)


def _ics_attachment(ics):
    return Attachment(FileContent(base64.b64encode(ics.encode('utf-8')).decode('ascii')),
                      FileName('interview.ics'),
                      FileType('text/calendar'),
                      Disposition('attachment'))


def _position(posting):
    return (posting or {}).get('title') or 'the open position'


def send_interview_scheduled(candidate, posting, interview):
    if not candidate.email:
        current_app.logger.warning('Candidate %s has no email; interview %s invitation not sent', candidate.id, interview.id)
        return None
    subject = f"Interview scheduled: {_position(posting)}"
    html = (
        f"<p>Dear {escape(candidate.name)},</p>"
        f"<p>Your {escape(interview.type)} interview (round {interview.round}) for "
        f"{escape(_position(posting))} is scheduled on {escape(interview.date)} at {escape(interview.time)}.</p>"
        f"<p>Location: {escape(interview.location)}</p>"
        "<p>A calendar invitation is attached.</p>"
    )
    ics = interview_ics(current_app.config['UID_DOMAIN'], interview, candidate, posting)
    return send_mail(candidate.email, subject, html, _ics_attachment(ics) if ics else None)


def send_interview_completed(candidate, posting, interview):
    if not candidate.email:
        current_app.logger.warning('Candidate %s has no email; interview %s result not sent', candidate.id, interview.id)
        return None
    outcome = interview.outcome.value if interview.outcome else None
    subject = f"Your interview for {_position(posting)}"
    html = (
        f"<p>Dear {escape(candidate.name)},</p>"
        f"<p>Thank you for attending your interview for {escape(_position(posting))} on {escape(interview.date)}.</p>"
        f"<p>{OUTCOME_LINES.get(outcome, 'We will be in touch with next steps soon.')}</p>"
    )
    return send_mail(candidate.email, subject, html)

from io import BytesIO

from flask import current_app, jsonify, request, send_file

from . import bp
from ...errors import ValidationError
from ...extensions import rq
from ...jobs.notify import notify_interview_completed, notify_interview_scheduled
from ...services import workflow
from ...services.directory import posting_for_candidate
from ...services.ics import interview_ics
from ...services.queries import enrich_interview, get_interviews
from ...utils.payload import json_body


@bp.post("")
def schedule_interview():
    data = json_body()
    interview = workflow.schedule_interview(data.get("candidateId"), data)
    rq.enqueue(notify_interview_scheduled, interview.id)
    return jsonify({"message": "Interview scheduled successfully", "interview": interview.to_dict()}), 201


@bp.get("")
def list_interviews():
    # ?status=scheduled&date=2024-01-15&interviewerId=2
    items = get_interviews(
        status=request.args.get("status") or None,
        date=request.args.get("date") or None,
        interviewer_id=request.args.get("interviewerId", type=int),
    )
    return jsonify([enrich_interview(i) for i in items])


@bp.get("/<int:interview_id>")
def detail(interview_id):
    i = workflow.get_interview(interview_id)
    return jsonify(enrich_interview(i, full_candidate=True))


@bp.put("/<int:interview_id>")
def update_interview(interview_id):
    i = workflow.update_interview(interview_id, json_body())
    return jsonify({"message": "Interview updated successfully", "interview": i.to_dict()})


@bp.get("/candidate/<int:candidate_id>")
def interviews_for_candidate(candidate_id):
    return jsonify([i.to_dict() for i in workflow.get_interviews_by_candidate(candidate_id)])


@bp.post("/<int:interview_id>/feedback")
def record_feedback(interview_id):
    i = workflow.record_interview_feedback(interview_id, json_body())
    rq.enqueue(notify_interview_completed, i.id)
    return jsonify({"message": "Interview feedback recorded successfully", "feedback": i.to_dict()})


@bp.get("/<int:interview_id>/feedback")
def get_feedback(interview_id):
    return jsonify(workflow.get_interview_feedback(interview_id))


@bp.get("/<int:interview_id>/ics")
def download_ics(interview_id):
    i = workflow.get_interview(interview_id)
    candidate = workflow.get_candidate(i.candidate_id)
    ics = interview_ics(current_app.config['UID_DOMAIN'], i, candidate, posting_for_candidate(candidate))
    if ics is None:
        raise ValidationError("Interview date/time must be YYYY-MM-DD and HH:MM to build a calendar entry")
    return send_file(BytesIO(ics.encode('utf-8')), as_attachment=True,
                     download_name=f"interview_{i.id}.ics", mimetype="text/calendar")

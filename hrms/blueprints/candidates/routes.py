from flask import jsonify, request

from . import bp
from ...services import workflow
from ...services.directory import posting_for_candidate
from ...utils.payload import json_body


@bp.post("")
def create_candidate():
    c = workflow.create_candidate(json_body())
    return jsonify({"message": "Candidate created", "candidate": c.to_dict()}), 201


@bp.get("")
def list_candidates():
    items = workflow.list_candidates(status=request.args.get("status") or None)
    return jsonify([c.to_dict() for c in items])


@bp.get("/<int:candidate_id>")
def detail(candidate_id):
    c = workflow.get_candidate(candidate_id)
    out = c.to_dict()
    out["posting"] = posting_for_candidate(c)
    out["interviews"] = [i.to_dict() for i in workflow.get_interviews_by_candidate(c.id)]
    out["verifications"] = [v.to_dict() for v in workflow.get_background_verifications(c.id)]
    return jsonify(out)


@bp.post("/<int:candidate_id>/status")
def change_status(candidate_id):
    c = workflow.advance_candidate(candidate_id, json_body().get("status"))
    return jsonify({"message": "Candidate status updated", "candidate": c.to_dict()})

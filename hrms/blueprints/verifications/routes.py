from flask import jsonify

from . import bp
from ...extensions import store
from ...services import workflow
from ...services.queries import enrich_verification
from ...utils.payload import json_body


@bp.post("")
def initiate_verification():
    data = json_body()
    v = workflow.initiate_background_verification(data.get("candidateId"), data)
    return jsonify({"message": "Background verification initiated", "verification": v.to_dict()}), 201


@bp.put("/<int:verification_id>")
def update_verification(verification_id):
    v = workflow.update_background_verification(verification_id, json_body())
    return jsonify({"message": "Background verification updated", "verification": v.to_dict()})


@bp.get("")
def list_verifications():
    return jsonify([enrich_verification(v) for v in store.find_all("backgroundVerifications")])


@bp.get("/candidate/<int:candidate_id>")
def verifications_for_candidate(candidate_id):
    return jsonify([v.to_dict() for v in workflow.get_background_verifications(candidate_id)])

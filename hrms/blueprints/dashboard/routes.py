from flask import jsonify, request

from . import bp
from ...services import queries


@bp.get("/interviews")
def interview_stats():
    return jsonify(queries.interview_dashboard())


@bp.get("/verifications")
def verification_stats():
    return jsonify(queries.verification_dashboard())


@bp.get("/upcoming-interviews")
def upcoming():
    limit = request.args.get("limit", default=20, type=int)
    return jsonify(queries.upcoming_interviews(limit=max(1, min(limit, 100))))

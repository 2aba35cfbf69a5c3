"""Error kinds raised by the recruitment core.

Services raise these; the app factory maps them to JSON responses so routes
never need their own try/except blocks.
"""

from flask import jsonify


class HrmsError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class NotFound(HrmsError):
    """A referenced candidate, interview, verification or user does not exist."""
    status_code = 404


class ValidationError(HrmsError):
    """Missing required field, out-of-range rating or unknown enum value."""
    status_code = 400


class InvalidStateTransition(HrmsError):
    """The entity's current status does not permit the requested operation."""
    status_code = 409


def register_error_handlers(app):
    @app.errorhandler(HrmsError)
    def handle_hrms_error(e):
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(400)
    def handle_bad_request(e):
        return jsonify({"error": getattr(e, "description", None) or "bad request"}), 400

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({"error": "method not allowed"}), 405

from flask import request

from ..errors import ValidationError


def json_body():
    """The request's JSON object; an empty body reads as ``{}``."""
    if not request.get_data():
        return {}
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data

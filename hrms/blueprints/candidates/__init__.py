from flask import Blueprint

bp = Blueprint("candidates", __name__)

from . import routes  # noqa: E402,F401

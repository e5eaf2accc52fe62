from flask import Blueprint

kuesioner_bp = Blueprint('kuesioner', __name__)

from . import routes  # noqa: E402,F401

from flask import Blueprint

wizard_bp = Blueprint('wizard', __name__)

from . import routes  # noqa: E402,F401

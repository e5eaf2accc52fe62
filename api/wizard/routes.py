from flask import request, jsonify
import logging

from ..base.base_schemas import BaseResponse
from config.settings import settings
from shared.session_manager import get_or_create_session, SessionManager
from shared.stores import get_forms_store, get_dashboard_cache
from .schemas import WizardStateData
from .usecases import (
    process_intro,
    process_qa_umum,
    process_role_specific,
    process_qa_end,
    process_back,
    process_goto,
)
from . import wizard_bp

logger = logging.getLogger(__name__)


def _state_response(manager: SessionManager, message: str, submission=None):
    data = WizardStateData(**manager.to_view(), submission=submission)
    response = BaseResponse[WizardStateData].ok(data=data, message=message)
    return jsonify(response.to_json()), 200


def _error_response(manager: SessionManager, error: ValueError):
    errors = getattr(error, "errors", None) or {"step": str(error)}
    response = BaseResponse.fail(message=str(error), errors=errors)
    return jsonify(response.to_json(session_id=manager.session_id, current_step=manager.current_step)), 400


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@wizard_bp.route('/state', methods=['GET'])
def get_state():
    """
    Current wizard state for the session

    The session is taken from ?session_id=, the X-Session-ID header, a
    JSON `session_id` field, or the session cookie; a new one starts at
    the intro step.
    """
    manager = get_or_create_session()
    return _state_response(manager, "Wizard state retrieved successfully")


@wizard_bp.route('/intro', methods=['POST'])
def submit_intro():
    """
    Request Example:
        {"fullName": "Budi", "gender": "Laki-laki", "age": "21-30 tahun"}
    """
    manager = get_or_create_session()
    try:
        process_intro(manager, _json_body())
    except ValueError as e:
        return _error_response(manager, e)
    return _state_response(manager, "Intro saved")


@wizard_bp.route('/qa-umum', methods=['POST'])
def submit_qa_umum():
    """
    Request Example:
        {"answers": [
            {"questionId": 1, "answer": "Pernah mencoba"},
            {"questionId": 2, "answer": "Sulit menilai kualitas"},
            {"questionId": 3, "answer": "UMKM"}
        ]}
    """
    manager = get_or_create_session()
    try:
        process_qa_umum(manager, _json_body())
    except ValueError as e:
        return _error_response(manager, e)
    return _state_response(manager, "General answers saved")


@wizard_bp.route('/role-specific', methods=['POST'])
def submit_role_specific():
    """
    Request Example:
        {"answers": [{"questionId": 1, "rating": 4}, ...]}
    """
    manager = get_or_create_session()
    try:
        process_role_specific(manager, _json_body())
    except ValueError as e:
        return _error_response(manager, e)
    return _state_response(manager, "Role-specific answers saved")


@wizard_bp.route('/qa-end', methods=['POST'])
def submit_qa_end():
    """
    Submit the closing answers and the whole questionnaire

    Always ends on the results step once the answers are valid; when
    storing fails the response carries an `alert`.
    """
    manager = get_or_create_session()
    try:
        submission = process_qa_end(
            manager,
            _json_body(),
            store=get_forms_store(),
            timeout=min(settings.INSERT_TIMEOUT_SECONDS, settings.SUBMIT_TIMEOUT_SECONDS),
            on_saved=get_dashboard_cache().revalidate,
        )
    except ValueError as e:
        return _error_response(manager, e)

    message = "Questionnaire submitted successfully" if submission["success"] else "Questionnaire could not be stored"
    return _state_response(manager, message, submission=submission)


@wizard_bp.route('/back', methods=['POST'])
def go_back():
    manager = get_or_create_session()
    process_back(manager)
    return _state_response(manager, "Moved back")


@wizard_bp.route('/goto', methods=['POST'])
def go_to():
    """
    Jump to a breadcrumb entry

    Request Example:
        {"index": 1}
    """
    manager = get_or_create_session()
    try:
        process_goto(manager, _json_body())
    except ValueError as e:
        return _error_response(manager, e)
    return _state_response(manager, "Moved to breadcrumb step")

from typing import Any, Dict, Optional, Callable
import logging

from api.kuesioner.usecases import submit_questionnaire, SubmissionTimeoutError
from lib import wizard_flow as flow
from services.database import BaseDocumentStore, DatabaseConnectionError
from shared.session_manager import SessionManager
from .utils import (
    validate_intro,
    validate_qa_umum,
    validate_role_specific,
    validate_qa_end,
)

logger = logging.getLogger(__name__)

TIMEOUT_ALERT = "Pengiriman kuesioner melebihi batas waktu dan dibatalkan. Jawaban Anda mungkin belum tersimpan."
CONNECTION_ALERT = "Tidak dapat terhubung ke server. Jawaban Anda mungkin belum tersimpan."
FAILURE_ALERT = "Gagal mengirim kuesioner. Silakan coba lagi nanti."


def _require_step(manager: SessionManager, *expected: str) -> None:
    if manager.current_step not in expected:
        raise ValueError(
            f"Current step is '{manager.current_step}', expected one of: {', '.join(expected)}"
        )


def process_intro(manager: SessionManager, data: Dict[str, Any]) -> None:
    _require_step(manager, flow.STEP_INTRO)
    manager.complete_intro(validate_intro(data))


def process_qa_umum(manager: SessionManager, data: Dict[str, Any]) -> None:
    _require_step(manager, flow.STEP_QA_UMUM)
    answers, role = validate_qa_umum(data.get("answers"))
    manager.complete_qa_umum(answers, role)


def process_role_specific(manager: SessionManager, data: Dict[str, Any]) -> None:
    _require_step(manager, *flow.ROLE_STEPS)
    answers = validate_role_specific(manager.user_role, data.get("answers"))
    manager.complete_role_specific(answers)


def process_qa_end(
    manager: SessionManager,
    data: Dict[str, Any],
    store: BaseDocumentStore,
    timeout: float,
    on_saved: Optional[Callable[[], None]] = None,
) -> Dict[str, Any]:
    """
    Validate the closing answers, submit the whole questionnaire and
    move to the results step

    A failed submission does not block the respondent: the wizard still
    reaches results and the returned `alert` describes the failure.

    Returns:
        Dict with: success, id (on success), alert (on failure)
    """
    _require_step(manager, flow.STEP_QA_END)
    answers = validate_qa_end(data.get("answers"))

    manager.form_data["qaEnd"] = {"answers": answers}
    payload = manager.questionnaire_payload()

    alert = ""
    result: Dict[str, Any] = {"success": False}
    try:
        saved = submit_questionnaire(store, payload, timeout=timeout, on_saved=on_saved)
        result = {"success": True, "id": saved["id"]}
    except SubmissionTimeoutError as e:
        logger.error(f"Wizard submission timed out for session {manager.session_id}: {e}")
        alert = TIMEOUT_ALERT
    except DatabaseConnectionError as e:
        logger.error(f"Wizard submission could not reach the database for session {manager.session_id}: {e}")
        alert = CONNECTION_ALERT
    except Exception as e:
        logger.error(f"Error submitting questionnaire for session {manager.session_id}: {e}", exc_info=True)
        alert = FAILURE_ALERT

    manager.complete_qa_end(answers, alert)
    if alert:
        result["alert"] = alert
    return result


def process_back(manager: SessionManager) -> None:
    manager.go_back()


def process_goto(manager: SessionManager, data: Dict[str, Any]) -> None:
    index = data.get("index")
    if not isinstance(index, int) or isinstance(index, bool):
        raise ValueError("index must be an integer")
    manager.go_to_breadcrumb(index)

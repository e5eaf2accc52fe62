import threading
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, List

from flask import request, session

from config.settings import settings
from lib import wizard_flow as flow
from lib.questions import QA_UMUM_QUESTIONS, QA_END_QUESTIONS, get_role_questions

session_managers: Dict[str, "SessionManager"] = {}
_sessions_lock = threading.Lock()


# Session Management
class SessionManager:
    """Wizard state for one respondent"""

    def __init__(self):
        self.session_id = str(uuid.uuid4())
        self.created_at = datetime.now()
        self.current_step = flow.STEP_INTRO
        self.user_role = ""
        self.form_data: Dict[str, Any] = {}
        self.last_alert = ""

    # === forward transitions ===

    def complete_intro(self, intro: Dict[str, str]) -> None:
        self.form_data["intro"] = intro
        self.current_step = flow.STEP_QA_UMUM

    def complete_qa_umum(self, answers: List[Dict[str, Any]], role: str) -> None:
        step = flow.role_step(role)
        if step is None:
            raise ValueError(f"Unknown role '{role}'")

        self.form_data["qaUmum"] = {"answers": answers}
        if role != self.user_role:
            # answers of another role's panel do not carry over
            self.form_data.pop("roleSpecific", None)
        self.user_role = role
        self.current_step = step

    def complete_role_specific(self, answers: List[Dict[str, Any]]) -> None:
        self.form_data["roleSpecific"] = {"answers": answers}
        self.current_step = flow.STEP_QA_END

    def complete_qa_end(self, answers: List[Dict[str, Any]], alert: str = "") -> None:
        self.form_data["qaEnd"] = {"answers": answers}
        self.last_alert = alert
        self.current_step = flow.STEP_RESULTS

    # === backward navigation ===

    def go_back(self) -> str:
        self.current_step = flow.previous_step(self.current_step, self.user_role)
        return self.current_step

    def go_to_breadcrumb(self, index: int) -> str:
        steps = flow.breadcrumb_steps(self.current_step, self.user_role)
        if index < 0 or index >= len(steps):
            raise ValueError(f"Breadcrumb index {index} out of range")
        self.current_step = steps[index]
        return self.current_step

    # === derived views ===

    @property
    def step_number(self) -> int:
        return flow.step_number(self.current_step, self.user_role)

    def breadcrumb(self) -> List[str]:
        if self.current_step in (flow.STEP_INTRO, flow.STEP_RESULTS):
            return []
        return flow.breadcrumb_items(self.current_step, self.user_role)

    def current_questions(self) -> List[Dict[str, Any]]:
        if self.current_step == flow.STEP_QA_UMUM:
            return QA_UMUM_QUESTIONS
        if flow.is_role_step(self.current_step):
            return get_role_questions(self.user_role)
        if self.current_step == flow.STEP_QA_END:
            return QA_END_QUESTIONS
        return []

    def questionnaire_payload(self) -> Dict[str, Any]:
        """Body sent to the submission endpoint"""
        return {
            "intro": self.form_data.get("intro"),
            "userRole": self.user_role,
            "qaUmum": self.form_data.get("qaUmum"),
            "roleSpecific": self.form_data.get("roleSpecific", {"answers": []}),
            "qaEnd": self.form_data.get("qaEnd"),
        }

    def to_view(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "current_step": self.current_step,
            "user_role": self.user_role,
            "step_number": self.step_number,
            "total_steps": flow.TOTAL_STEPS,
            "breadcrumb": self.breadcrumb(),
            "header": flow.header_content(self.current_step, self.user_role),
            "questions": self.current_questions(),
            "form_data": self.form_data,
            "alert": self.last_alert or None,
        }


def _expire_sessions() -> None:
    cutoff = datetime.now() - timedelta(hours=settings.SESSION_TIMEOUT_HOURS)
    for sid in [sid for sid, m in session_managers.items() if m.created_at < cutoff]:
        del session_managers[sid]


def _body_session_id():
    body = request.get_json(silent=True) if request.is_json else None
    return body.get('session_id') if isinstance(body, dict) else None


def get_or_create_session() -> SessionManager:
    """Get or create session manager"""
    session_id = (
        request.args.get('session_id') or
        request.headers.get('X-Session-ID') or
        _body_session_id() or
        session.get('session_id')
    )
    if not isinstance(session_id, str):
        session_id = None

    with _sessions_lock:
        if not session_id or session_id not in session_managers:
            _expire_sessions()
            manager = SessionManager()
            session['session_id'] = manager.session_id
            session_managers[manager.session_id] = manager
            return manager

    if session_id != session.get('session_id'):
        session['session_id'] = session_id

    return session_managers[session_id]

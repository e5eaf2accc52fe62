# ============== UTILS ==============
from typing import Any, Dict, List, Tuple

from api.kuesioner.utils import strip_disallowed_chars, is_number
from lib.questions import (
    QA_UMUM_QUESTIONS,
    QA_END_QUESTIONS,
    RATING_SCALE,
    ROLE_QUESTION_ID,
    get_role_questions,
)
from lib.wizard_flow import role_step

REQUIRED_MESSAGE = "Kolom ini wajib diisi"
RATING_MESSAGE = "Pilih nilai 1 sampai 5"
UNKNOWN_ROLE_MESSAGE = "Peran tidak dikenali"


class WizardValidationError(ValueError):
    """Step input rejected; `errors` maps field or question id to a message"""

    def __init__(self, errors: Dict[str, str], message: str = "Please complete the required fields"):
        super().__init__(message)
        self.errors = errors


def _index_answers(answers: Any) -> Dict[int, Dict[str, Any]]:
    """Answers keyed by questionId; a later entry for the same question wins"""
    if not isinstance(answers, list):
        raise WizardValidationError({"answers": REQUIRED_MESSAGE}, "answers must be a list")

    indexed: Dict[int, Dict[str, Any]] = {}
    for entry in answers:
        if not isinstance(entry, dict) or not is_number(entry.get("questionId")):
            continue
        qid = entry["questionId"]
        if isinstance(qid, float) and not qid.is_integer():
            # NaN, Infinity and fractional ids match no question
            continue
        indexed[int(qid)] = entry
    return indexed


def _valid_rating(value: Any) -> bool:
    return is_number(value) and value in RATING_SCALE


def validate_intro(data: Dict[str, Any]) -> Dict[str, str]:
    """fullName, gender and age are required; fullName is stripped of markup characters"""
    full_name = strip_disallowed_chars(data.get("fullName") if isinstance(data.get("fullName"), str) else "")
    gender = data.get("gender") if isinstance(data.get("gender"), str) else ""
    age = data.get("age") if isinstance(data.get("age"), str) else ""

    errors = {}
    if not full_name.strip():
        errors["fullName"] = REQUIRED_MESSAGE
    if not gender:
        errors["gender"] = REQUIRED_MESSAGE
    if not age:
        errors["age"] = REQUIRED_MESSAGE

    if errors:
        raise WizardValidationError(errors)

    return {"fullName": full_name, "gender": gender, "age": age}


def validate_qa_umum(answers: Any) -> Tuple[List[Dict[str, Any]], str]:
    """
    Every general question needs an answer; question 3 must be a known role

    Returns:
        (answers, role)
    """
    indexed = _index_answers(answers)

    cleaned = []
    errors = {}
    for question in QA_UMUM_QUESTIONS:
        qid = question["id"]
        value = indexed.get(qid, {}).get("answer")
        if not isinstance(value, str):
            value = ""

        if question["type"] == "text":
            value = strip_disallowed_chars(value)
        elif question["type"] == "radio" and value not in question["options"]:
            value = ""

        if not value.strip():
            errors[str(qid)] = REQUIRED_MESSAGE
            continue
        cleaned.append({"questionId": qid, "answer": value})

    if errors:
        raise WizardValidationError(errors)

    role = next(a["answer"] for a in cleaned if a["questionId"] == ROLE_QUESTION_ID)
    if role_step(role) is None:
        raise WizardValidationError({str(ROLE_QUESTION_ID): UNKNOWN_ROLE_MESSAGE}, UNKNOWN_ROLE_MESSAGE)

    return cleaned, role


def validate_role_specific(user_role: str, answers: Any) -> List[Dict[str, Any]]:
    """Every question of the role's panel needs a 1-5 rating"""
    indexed = _index_answers(answers)

    cleaned = []
    errors = {}
    for question in get_role_questions(user_role):
        qid = question["id"]
        rating = indexed.get(qid, {}).get("rating")
        if not _valid_rating(rating):
            errors[str(qid)] = REQUIRED_MESSAGE if rating is None else RATING_MESSAGE
            continue
        cleaned.append({"questionId": qid, "rating": rating})

    if errors:
        raise WizardValidationError(errors)
    return cleaned


def validate_qa_end(answers: Any) -> List[Dict[str, Any]]:
    """
    Rating questions are required (rating or numeric answer, 1-5);
    the closing text question is optional
    """
    indexed = _index_answers(answers)

    cleaned = []
    errors = {}
    for question in QA_END_QUESTIONS:
        qid = question["id"]
        entry = indexed.get(qid, {})

        if question["type"] == "rating":
            rating = entry.get("rating")
            if rating is None:
                rating = entry.get("answer")
            if not _valid_rating(rating):
                errors[str(qid)] = REQUIRED_MESSAGE if rating is None else RATING_MESSAGE
                continue
            cleaned.append({"questionId": qid, "answer": rating})
        else:
            text = entry.get("answer")
            text = strip_disallowed_chars(text) if isinstance(text, str) else ""
            cleaned.append({"questionId": qid, "answer": text})

    if errors:
        raise WizardValidationError(errors)
    return cleaned

# ============== UTILS ==============
import re
from numbers import Number
from typing import Any, Dict, List, Optional

ANSWER_SECTIONS = ("qaUmum", "roleSpecific", "qaEnd")
INTRO_FIELDS = ("fullName", "gender", "age")

DISALLOWED_CHARS = re.compile(r"[<>?/{}\[\]=+]")


def strip_disallowed_chars(text: str) -> str:
    """Remove < > ? / { } [ ] = + from free-text input"""
    if not text:
        return ""
    return DISALLOWED_CHARS.sub("", text)


def is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def sanitize_answer(entry: Any) -> Optional[Dict[str, Any]]:
    """
    Sanitize one answer entry

    Returns None when the entry has no numeric questionId.
    String answers are trimmed, numeric answers and ratings pass through,
    any other value is dropped.
    """
    if not isinstance(entry, dict) or not is_number(entry.get("questionId")):
        return None

    clean = {"questionId": entry["questionId"]}

    answer = entry.get("answer")
    if isinstance(answer, str):
        clean["answer"] = answer.strip()
    elif is_number(answer):
        clean["answer"] = answer

    rating = entry.get("rating")
    if is_number(rating):
        clean["rating"] = rating

    return clean


def sanitize_answers(answers: List[Any]) -> List[Dict[str, Any]]:
    """Keep entries with a numeric questionId, in their original order"""
    sanitized = []
    for entry in answers:
        clean = sanitize_answer(entry)
        if clean is not None:
            sanitized.append(clean)
    return sanitized


def sanitize_questionnaire(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the document to persist from a raw submission body

    Unknown top-level keys are dropped. Sections whose answers are not a
    list are passed through unchanged so validation can reject them.
    """
    sanitized: Dict[str, Any] = {}

    intro = data.get("intro")
    if isinstance(intro, dict):
        sanitized["intro"] = {
            field: intro[field].strip() if isinstance(intro.get(field), str) else intro.get(field)
            for field in INTRO_FIELDS
        }
    elif intro is not None:
        sanitized["intro"] = intro

    user_role = data.get("userRole")
    sanitized["userRole"] = user_role.strip() if isinstance(user_role, str) else user_role

    for section in ANSWER_SECTIONS:
        if section not in data:
            continue
        value = data[section]
        if isinstance(value, dict) and isinstance(value.get("answers"), list):
            sanitized[section] = {"answers": sanitize_answers(value["answers"])}
        else:
            sanitized[section] = value

    return sanitized


def _non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _has_answer_list(section: Any) -> bool:
    return isinstance(section, dict) and isinstance(section.get("answers"), list)


def validate_questionnaire(data: Dict[str, Any]) -> None:
    """
    Validate required fields of a submission

    Raises:
        ValueError: with a human-readable message on the first violation
    """
    intro = data.get("intro")
    if not isinstance(intro, dict):
        raise ValueError("Intro data is required")

    for field in INTRO_FIELDS:
        if not _non_empty_string(intro.get(field)):
            raise ValueError(f"intro.{field} is required")

    if not _non_empty_string(data.get("userRole")):
        raise ValueError("userRole is required")

    if not _has_answer_list(data.get("qaUmum")):
        raise ValueError("qaUmum.answers must be a list")

    if not _has_answer_list(data.get("qaEnd")):
        raise ValueError("qaEnd.answers must be a list")

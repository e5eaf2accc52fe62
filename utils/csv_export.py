# utils/csv_export.py
"""
CSV export of questionnaire responses

Fixed column layout, one row per response in the order given (callers
pass newest first). Numbers stay unquoted so spreadsheet tools read
them as numbers; every other value is double-quoted.
"""
import re
from datetime import datetime, timezone, date
from numbers import Number
from typing import Any, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

UMUM_COLUMNS = 3
ROLE_SPECIFIC_COLUMNS = 10
END_COLUMNS = 3

CSV_HEADERS = [
    "No",
    "Nama Lengkap",
    "Jenis Kelamin",
    "Usia",
    "Peran",
    "Tanggal Submit",
    *[f"QA Umum - Pertanyaan {i}" for i in range(1, UMUM_COLUMNS + 1)],
    *[f"Role Specific - Pertanyaan {i}" for i in range(1, ROLE_SPECIFIC_COLUMNS + 1)],
    *[f"QA End - Pertanyaan {i}" for i in range(1, END_COLUMNS + 1)],
]

NUMERIC_PATTERN = re.compile(r"^-?\d+(?:[.,]\d+)?$", re.ASCII)


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _number_to_str(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_cell(cell: Any) -> str:
    """
    Format one CSV cell

    None -> empty, numbers -> raw, numeric-looking strings -> raw with a
    dot decimal separator, anything else -> quoted with "" escaping.
    """
    if cell is None:
        return ""
    if _is_number(cell):
        return _number_to_str(cell)
    if isinstance(cell, str) and NUMERIC_PATTERN.match(cell.strip()):
        return cell.strip().replace(",", ".", 1)
    if isinstance(cell, bool):
        text = "true" if cell else "false"
    else:
        text = str(cell)
    escaped = text.replace('"', '""')
    return f'"{escaped}"'


def _answers(section: Any) -> List[Dict[str, Any]]:
    if isinstance(section, dict) and isinstance(section.get("answers"), list):
        return section["answers"]
    return []


def get_answer(answers: List[Dict[str, Any]], question_id: int) -> Any:
    """`answer`, else `rating`, else "" for the first entry with this questionId"""
    for entry in answers:
        if not isinstance(entry, dict):
            continue
        qid = entry.get("questionId")
        if _is_number(qid) and qid == question_id:
            if entry.get("answer") is not None:
                return entry["answer"]
            if entry.get("rating") is not None:
                return entry["rating"]
            return ""
    return ""


def _parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def format_date_id(value: Any, tz_name: str = "Asia/Jakarta") -> str:
    """Short date in the Indonesian locale style: d/m/yyyy"""
    parsed = _parse_datetime(value)
    if parsed is None:
        return ""
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    local = parsed.astimezone(ZoneInfo(tz_name))
    return f"{local.day}/{local.month}/{local.year}"


def build_row(index: int, doc: Dict[str, Any], tz_name: str = "Asia/Jakarta") -> List[Any]:
    intro = doc.get("intro") if isinstance(doc.get("intro"), dict) else {}
    umum = _answers(doc.get("qaUmum"))
    role_specific = _answers(doc.get("roleSpecific"))
    end = _answers(doc.get("qaEnd"))

    age = intro.get("age")
    return [
        index + 1,
        intro.get("fullName") or "",
        intro.get("gender") or "",
        age if age is not None else "",
        doc.get("userRole") or "",
        format_date_id(doc.get("submittedAt"), tz_name) if doc.get("submittedAt") else "",
        *[get_answer(umum, i) for i in range(1, UMUM_COLUMNS + 1)],
        *[get_answer(role_specific, i) for i in range(1, ROLE_SPECIFIC_COLUMNS + 1)],
        *[get_answer(end, i) for i in range(1, END_COLUMNS + 1)],
    ]


def build_csv(documents: Iterable[Dict[str, Any]], tz_name: str = "Asia/Jakarta") -> str:
    """Header line plus one line per document, joined by newlines"""
    rows = [CSV_HEADERS] + [build_row(i, doc, tz_name) for i, doc in enumerate(documents)]
    return "\n".join(",".join(format_cell(cell) for cell in row) for row in rows)


def csv_filename(today: Optional[date] = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"data-kuesioner-{today.isoformat()}.csv"

import threading
import time
import logging
from typing import Any, Dict, List, Optional

from lib.questions import get_question_text
from services.database import BaseDocumentStore

logger = logging.getLogger(__name__)


class DashboardCache:
    """
    In-process cache of the admin listing

    Entries expire after `ttl` seconds; `revalidate()` drops them so the
    next dashboard load reads the store again. A listing read before the
    latest revalidation is not stored.
    """

    def __init__(self, ttl: int):
        self.ttl = ttl
        self._lock = threading.Lock()
        self._documents: Optional[List[Dict[str, Any]]] = None
        self._loaded_at = 0.0
        self._generation = 0

    def get(self) -> Optional[List[Dict[str, Any]]]:
        with self._lock:
            if self._documents is None or self.ttl <= 0:
                return None
            if time.monotonic() - self._loaded_at > self.ttl:
                self._documents = None
                return None
            return self._documents

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def put(self, documents: List[Dict[str, Any]], generation: Optional[int] = None) -> None:
        with self._lock:
            if generation is not None and generation != self._generation:
                logger.debug("Discarding listing read before the last revalidation")
                return
            self._documents = documents
            self._loaded_at = time.monotonic()

    def revalidate(self) -> None:
        with self._lock:
            self._documents = None
            self._generation += 1
        logger.debug("Dashboard cache revalidated")


def load_questionnaires(store: BaseDocumentStore, cache: Optional[DashboardCache] = None) -> List[Dict[str, Any]]:
    """All stored responses, newest first"""
    generation = None
    if cache is not None:
        cached = cache.get()
        if cached is not None:
            return cached
        generation = cache.generation

    documents = store.find_all(sort_field="submittedAt", descending=True)

    if cache is not None:
        cache.put(documents, generation)
    return documents


def filter_questionnaires(documents: List[Dict[str, Any]], search: Optional[str]) -> List[Dict[str, Any]]:
    """Case-insensitive match on respondent name or role"""
    if not search:
        return documents

    needle = search.lower()
    matched = []
    for doc in documents:
        intro = doc.get("intro") if isinstance(doc.get("intro"), dict) else {}
        name = str(intro.get("fullName") or "").lower()
        role = str(doc.get("userRole") or "").lower()
        if needle in name or needle in role:
            matched.append(doc)
    return matched


def find_questionnaire(documents: List[Dict[str, Any]], form_id: str) -> Optional[Dict[str, Any]]:
    return next((doc for doc in documents if str(doc.get("_id")) == form_id), None)


# (document key, question-bank section, section title)
DETAIL_SECTIONS = [
    ("qaUmum", "umum", "Kuesioner Umum"),
    ("roleSpecific", "role", None),
    ("qaEnd", "end", "Kuesioner Penutup"),
]


def describe_questionnaire(doc: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Answers of one response grouped by section, each labelled with its
    question text

    Response Example:
        [{"key": "qaUmum", "title": "Kuesioner Umum", "answers": [
            {"questionId": 1, "question": "Sejauh mana ...", "answer": "Pernah mencoba"}
        ]}, ...]
    """
    user_role = doc.get("userRole") or ""
    sections = []
    for key, bank_section, title in DETAIL_SECTIONS:
        section = doc.get(key)
        answers = section.get("answers") if isinstance(section, dict) else None

        labelled = []
        for entry in answers if isinstance(answers, list) else []:
            if not isinstance(entry, dict):
                continue
            item = dict(entry)
            item["question"] = get_question_text(user_role, bank_section, entry.get("questionId"))
            labelled.append(item)

        sections.append({
            "key": key,
            "title": title or f"Kuesioner {user_role}",
            "answers": labelled,
        })
    return sections

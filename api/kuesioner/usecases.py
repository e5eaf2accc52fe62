from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional
import logging

from services.database import BaseDocumentStore
from .utils import sanitize_questionnaire, validate_questionnaire

logger = logging.getLogger(__name__)

# Inserts run here so the request can stop waiting without cancelling them
_insert_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="kuesioner-insert")


class SubmissionTimeoutError(Exception):
    """Raised when an insert does not finish within the allowed time"""


def prepare_submission(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sanitize then validate a raw submission body

    Raises:
        ValueError: If a required field is missing
    """
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")

    document = sanitize_questionnaire(data)
    validate_questionnaire(document)
    return document


def submit_questionnaire(
    store: BaseDocumentStore,
    data: Dict[str, Any],
    timeout: float,
    on_saved: Optional[Callable[[], None]] = None,
) -> Dict[str, str]:
    """
    Validate, sanitize and insert one questionnaire response

    Returns:
        Dict with: id, timestamp

    Raises:
        ValueError: If validation fails
        SubmissionTimeoutError: If the insert takes longer than `timeout`
        DatabaseConnectionError / DatabaseOperationError: On store failures
    """
    document = prepare_submission(data)
    document["submittedAt"] = datetime.now(timezone.utc)

    future = _insert_executor.submit(store.insert_one, document)
    try:
        inserted_id = future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.error(f"Insert did not complete within {timeout}s, leaving it to finish in the background")
        raise SubmissionTimeoutError(f"Database insert timed out after {timeout} seconds")

    logger.info(f"Questionnaire {inserted_id} stored for role '{document['userRole']}'")

    if on_saved is not None:
        try:
            on_saved()
        except Exception as e:
            logger.warning(f"Dashboard revalidation failed: {e}")

    return {
        "id": inserted_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

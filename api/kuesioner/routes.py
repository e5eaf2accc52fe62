from flask import request, jsonify
import logging

from ..base.base_schemas import BaseResponse
from config.settings import settings
from lib.questions import (
    QA_UMUM_QUESTIONS,
    QA_END_QUESTIONS,
    ROLE_QUESTIONS,
    ROLE_OPTIONS,
    GENDER_OPTIONS,
    AGE_OPTIONS,
    RATING_SCALE,
    RATING_LABELS,
)
from services.database import DatabaseConnectionError
from shared.stores import get_forms_store, get_dashboard_cache
from .usecases import submit_questionnaire, SubmissionTimeoutError
from .schemas import SubmitQuestionnaireData, QuestionBankData
from . import kuesioner_bp

logger = logging.getLogger(__name__)


@kuesioner_bp.route('/submit-questionnaire', methods=['POST'])
def submit():
    """
    Store one completed questionnaire

    Request Body:
        {
            "intro": {"fullName": "...", "gender": "...", "age": "21-30 tahun"},
            "userRole": "UMKM",
            "qaUmum": {"answers": [{"questionId": 1, "answer": "..."}, ...]},
            "roleSpecific": {"answers": [{"questionId": 1, "rating": 4}, ...]},
            "qaEnd": {"answers": [{"questionId": 1, "answer": 5}, ...]}
        }

    Response Example (201):
        {
            "success": true,
            "message": "Questionnaire submitted successfully",
            "data": {"id": "665f...", "timestamp": "2025-11-02T08:15:00+00:00"}
        }
    """
    data = request.get_json(silent=True)
    if data is None:
        return jsonify(
            BaseResponse.fail(message="Request must be JSON").to_json()
        ), 400

    try:
        result = submit_questionnaire(
            get_forms_store(),
            data,
            timeout=settings.INSERT_TIMEOUT_SECONDS,
            on_saved=get_dashboard_cache().revalidate,
        )
    except ValueError as e:
        return jsonify(BaseResponse.fail(message=str(e)).to_json()), 400
    except SubmissionTimeoutError as e:
        return jsonify(
            BaseResponse.fail(message="Failed to submit questionnaire").to_json(error=str(e))
        ), 500
    except DatabaseConnectionError as e:
        logger.error(f"Error submitting questionnaire: {e}")
        return jsonify(
            BaseResponse.fail(message="Could not connect to the database").to_json(error=str(e))
        ), 500
    except Exception as e:
        logger.error(f"Error submitting questionnaire: {e}", exc_info=True)
        return jsonify(
            BaseResponse.fail(message="Failed to submit questionnaire").to_json(error="Unknown error")
        ), 500

    response = BaseResponse[SubmitQuestionnaireData].ok(
        data=SubmitQuestionnaireData(**result),
        message="Questionnaire submitted successfully"
    )
    return jsonify(response.to_json()), 201


@kuesioner_bp.route('/questions', methods=['GET'])
def get_questions():
    """Question bank used by the wizard panels"""
    data = QuestionBankData(
        qaUmum=QA_UMUM_QUESTIONS,
        roleSpecific=ROLE_QUESTIONS,
        qaEnd=QA_END_QUESTIONS,
        roles=ROLE_OPTIONS,
        genderOptions=GENDER_OPTIONS,
        ageOptions=AGE_OPTIONS,
        ratingScale=RATING_SCALE,
        ratingLabels=RATING_LABELS,
    )
    response = BaseResponse[QuestionBankData].ok(
        data=data,
        message="Questions retrieved successfully"
    )
    return jsonify(response.to_json())

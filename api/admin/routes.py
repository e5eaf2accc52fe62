from flask import request, jsonify, Response
import logging

from ..base.base_schemas import BaseResponse
from config.settings import settings
from services.database import DatabaseConnectionError
from shared.stores import get_forms_store, get_dashboard_cache
from utils.csv_export import build_csv, csv_filename
from .usecases import load_questionnaires, filter_questionnaires, find_questionnaire, describe_questionnaire
from . import admin_bp

logger = logging.getLogger(__name__)


@admin_bp.route('/forms', methods=['GET'])
def get_forms():
    """
    Get every stored questionnaire, newest first

    Query Params:
        search: optional filter on respondent name or role

    Response Example:
        {
            "success": true,
            "data": [{...}, ...],
            "totalCount": 25,
            "message": "Successfully fetched all 25 questionnaire records"
        }
    """
    try:
        documents = load_questionnaires(get_forms_store(), get_dashboard_cache())
        documents = filter_questionnaires(documents, request.args.get('search', '').strip())

        logger.info(f"📊 Successfully fetched {len(documents)} forms from database")

        response = BaseResponse.ok(
            data=documents,
            message=f"Successfully fetched all {len(documents)} questionnaire records"
        )
        return jsonify(response.to_json(totalCount=len(documents))), 200

    except DatabaseConnectionError as e:
        logger.error(f"❌ Error fetching forms: {e}")
        return jsonify(BaseResponse.fail(
            message="Could not connect to the database",
            errors="Failed to fetch questionnaire data"
        ).to_json()), 500
    except Exception as e:
        logger.error(f"❌ Error fetching forms: {e}", exc_info=True)
        return jsonify(BaseResponse.fail(
            message="Failed to fetch questionnaire data",
            errors=str(e)
        ).to_json()), 500


@admin_bp.route('/forms/count', methods=['GET'])
def count_forms():
    """Number of stored questionnaires (respondent counter)"""
    try:
        count = get_forms_store().count_documents()
        return jsonify(BaseResponse.ok(data={"count": count}).to_json()), 200
    except Exception as e:
        logger.error(f"Error counting forms: {e}", exc_info=True)
        return jsonify(BaseResponse.fail(
            message="Failed to count questionnaire data",
            errors=str(e)
        ).to_json()), 500


@admin_bp.route('/download-csv', methods=['GET'])
def download_csv():
    """Download every stored questionnaire as CSV"""
    try:
        documents = get_forms_store().find_all(sort_field="submittedAt", descending=True)
        content = build_csv(documents, settings.EXPORT_TIMEZONE)
    except Exception as e:
        logger.error(f"Error generating CSV: {e}", exc_info=True)
        return Response(
            "Error generating CSV file",
            status=500,
            headers={"Content-Type": "text/plain"}
        )

    return Response(
        content,
        status=200,
        headers={
            "Content-Type": "text/csv;charset=utf-8;",
            "Content-Disposition": f'attachment; filename="{csv_filename()}"',
        }
    )


@admin_bp.route('/forms/<form_id>', methods=['GET'])
def get_form_detail(form_id):
    """
    One stored questionnaire with its answers labelled by question text

    Response Example:
        {
            "success": true,
            "data": {"questionnaire": {...}, "sections": [{"key": "qaUmum", ...}, ...]}
        }
    """
    try:
        documents = load_questionnaires(get_forms_store(), get_dashboard_cache())
    except Exception as e:
        logger.error(f"❌ Error fetching form {form_id}: {e}", exc_info=True)
        return jsonify(BaseResponse.fail(
            message="Failed to fetch questionnaire data",
            errors=str(e)
        ).to_json()), 500

    doc = find_questionnaire(documents, form_id)
    if doc is None:
        return jsonify(BaseResponse.fail(message="Questionnaire not found").to_json()), 404

    response = BaseResponse.ok(
        data={"questionnaire": doc, "sections": describe_questionnaire(doc)},
        message="Questionnaire retrieved successfully"
    )
    return jsonify(response.to_json()), 200

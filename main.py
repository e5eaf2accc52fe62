"""
Main Flask Application
Freelinkd Kuesioner API
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from config.settings import settings
from services.database import build_store, DatabaseConnectionError
from shared.stores import EXTENSION_KEY

# Import blueprints
from api.kuesioner import kuesioner_bp
from api.wizard import wizard_bp
from api.admin import admin_bp
from api.admin.usecases import DashboardCache
from api.auth import auth_bp

logger = logging.getLogger(__name__)


# ============== APP INITIALIZATION ==============
def create_app(forms_store=None, users_store=None, dashboard_cache=None) -> Flask:
    """
    Build the Flask app

    Stores default to the adapter selected by STORAGE_BACKEND; tests pass
    their own.
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = settings.SECRET_KEY or 'secret_key'

    # CORS configuration
    CORS(app, origins=settings.CORS_ORIGINS, supports_credentials=True)

    app.extensions[EXTENSION_KEY] = {
        "forms": forms_store or build_store(settings.FORMS_COLLECTION),
        "users": users_store or build_store(settings.USERS_COLLECTION),
        "dashboard_cache": dashboard_cache or DashboardCache(settings.DASHBOARD_CACHE_TTL),
    }

    # ============== REGISTER BLUEPRINTS ==============
    app.register_blueprint(kuesioner_bp, url_prefix='/api/v1')
    app.register_blueprint(wizard_bp, url_prefix='/api/v1/wizard')
    app.register_blueprint(admin_bp, url_prefix='/api/v1/admin')
    app.register_blueprint(auth_bp, url_prefix='/api/v1/auth/admin')

    # unversioned paths used by the existing web client
    app.register_blueprint(kuesioner_bp, url_prefix='/api', name='kuesioner_legacy')
    app.register_blueprint(admin_bp, url_prefix='/api/admin', name='admin_legacy')
    app.register_blueprint(auth_bp, url_prefix='/api/auth/admin', name='auth_legacy')

    _register_routes(app)
    _register_error_handlers(app)
    return app


# ============== ROUTES ==============
def _register_routes(app: Flask) -> None:
    @app.route('/', methods=['GET'])
    def home():
        """API information"""
        return jsonify({
            "message": "Freelinkd Kuesioner API",
            "version": settings.VERSION,
            "features": [
                "Questionnaire Wizard",
                "Questionnaire Submission",
                "Admin Dashboard",
                "CSV Export"
            ]
        })


# ============== ERROR HANDLERS ==============
def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Endpoint not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            "error": "Method not allowed",
            "message": "Please check the HTTP method (GET/POST) for this endpoint"
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"error": "Internal server error"}), 500


# ============== DATABASE INITIALIZATION ==============
def initialize_database(app: Flask) -> None:
    """Open the store connections and report what is stored"""
    stores = app.extensions[EXTENSION_KEY]
    try:
        stores["forms"].open()
        stores["users"].open()
        logger.info("✓ Database connected successfully")

        form_count = stores["forms"].count_documents()
        user_count = stores["users"].count_documents()
        logger.info(f"✓ Questionnaires in database: {form_count}")
        logger.info(f"✓ Admin accounts in database: {user_count}")

        if user_count == 0:
            logger.warning("⚠ No admin accounts yet, register one via /api/v1/auth/admin/register")

    except DatabaseConnectionError as e:
        logger.error(f"✗ Database initialization failed: {e}")
        raise


app = create_app()


# ============== APPLICATION STARTUP ==============
if __name__ == '__main__':
    settings.validate()
    settings.print_config_summary()

    initialize_database(app)

    logger.info(f"Server starting on http://{settings.HOST}:{settings.PORT}")
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)

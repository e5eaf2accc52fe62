# shared/stores.py
from flask import current_app

EXTENSION_KEY = "kuesioner"


def _registry() -> dict:
    return current_app.extensions[EXTENSION_KEY]


def get_forms_store():
    """Store holding questionnaire responses"""
    return _registry()["forms"]


def get_users_store():
    """Store holding admin accounts"""
    return _registry()["users"]


def get_dashboard_cache():
    return _registry()["dashboard_cache"]

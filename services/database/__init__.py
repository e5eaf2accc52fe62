"""
Database services
One storage port, two adapters (MongoDB, Astra DB)

Usage:
    from services.database import build_store

    forms = build_store(settings.FORMS_COLLECTION)
    forms.insert_one({...})
    forms.find_all()
"""
from config.settings import settings as default_settings

from .base import BaseDocumentStore, DatabaseConnectionError, DatabaseOperationError
from .mongo import MongoDocumentStore
from .astra import AstraDocumentStore

BACKENDS = {
    "mongo": MongoDocumentStore,
    "astra": AstraDocumentStore,
}


def build_store(collection_name: str, settings=None) -> BaseDocumentStore:
    """Create the store adapter selected by STORAGE_BACKEND"""
    settings = settings or default_settings
    try:
        store_cls = BACKENDS[settings.STORAGE_BACKEND]
    except KeyError:
        raise ValueError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}'") from None
    return store_cls(collection_name, settings)


__all__ = [
    'BaseDocumentStore',
    'MongoDocumentStore',
    'AstraDocumentStore',
    'DatabaseConnectionError',
    'DatabaseOperationError',
    'build_store',
]

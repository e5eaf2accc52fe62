import uuid
from datetime import datetime, timedelta, timezone

import pytest

from api.admin.usecases import DashboardCache
from services.database import BaseDocumentStore


class StoreSettings:
    """Settings double for stores: no backoff delay, page size above the store cap"""
    DB_MAX_RETRIES = 3
    DB_RETRY_BASE_DELAY = 0
    DB_RETRY_MAX_DELAY = 0
    DB_PAGE_SIZE = 50

    MONGODB_URI = "mongodb://db.test:27017"
    MONGODB_DB_NAME = "freelinkd-test"
    ASTRA_DB_API_ENDPOINT = "https://astra.test"
    ASTRA_DB_APPLICATION_TOKEN = "AstraCS:test"
    ASTRA_DB_KEYSPACE = "default_keyspace"

    def get_mongodb_config(self) -> dict:
        return {"uri": self.MONGODB_URI, "database": self.MONGODB_DB_NAME}

    def get_astra_config(self) -> dict:
        return {
            "endpoint": self.ASTRA_DB_API_ENDPOINT,
            "token": self.ASTRA_DB_APPLICATION_TOKEN,
            "keyspace": self.ASTRA_DB_KEYSPACE,
        }


class InMemoryStore(BaseDocumentStore):
    """Store double that, like Astra, never returns more than 20 documents per page"""

    backend_name = "memory"
    PAGE_CAP = 20

    def __init__(self, collection_name="kuesioner", fail_connects=0):
        super().__init__(collection_name, StoreSettings())
        self.documents = []
        self.fail_connects = fail_connects
        self.connect_calls = 0
        self.insert_calls = 0

    def _connect(self):
        self.connect_calls += 1
        if self.connect_calls <= self.fail_connects:
            raise ConnectionError("store unreachable")

    def _ping(self):
        pass

    def _disconnect(self):
        pass

    def _insert_one(self, document):
        self.insert_calls += 1
        doc = dict(document)
        doc["_id"] = uuid.uuid4().hex
        self.documents.append(doc)
        return doc["_id"]

    def _fetch_page(self, skip, limit, sort_field, descending):
        ordered = sorted(self.documents, key=lambda d: (d[sort_field], str(d["_id"])), reverse=descending)
        return [dict(d) for d in ordered[skip:skip + min(limit, self.PAGE_CAP)]]

    def _count_documents(self):
        return len(self.documents)

    def _find_one(self, query):
        for doc in self.documents:
            if all(doc.get(k) == v for k, v in query.items()):
                return dict(doc)
        return None


def make_response_document(name="Budi", role="UMKM", submitted_at=None, **overrides):
    doc = {
        "intro": {"fullName": name, "gender": "Laki-laki", "age": "21-30 tahun"},
        "userRole": role,
        "qaUmum": {"answers": [
            {"questionId": 1, "answer": "Pernah mencoba"},
            {"questionId": 2, "answer": "Sulit menilai kualitas"},
            {"questionId": 3, "answer": role},
        ]},
        "roleSpecific": {"answers": [{"questionId": i, "rating": 4} for i in range(1, 8)]},
        "qaEnd": {"answers": [
            {"questionId": 1, "answer": 5},
            {"questionId": 2, "answer": 4},
            {"questionId": 3, "answer": "Mantap"},
        ]},
        "submittedAt": submitted_at or datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc),
    }
    doc.update(overrides)
    return doc


def seed_documents(store, count):
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    for i in range(count):
        store.documents.append({
            **make_response_document(name=f"Responden {i}", submitted_at=start + timedelta(hours=i)),
            "_id": f"doc-{i}",
        })


@pytest.fixture
def forms_store():
    return InMemoryStore("kuesioner")


@pytest.fixture
def users_store():
    return InMemoryStore("users")


@pytest.fixture
def dashboard_cache():
    return DashboardCache(ttl=30)


@pytest.fixture
def app(forms_store, users_store, dashboard_cache):
    from main import create_app

    app = create_app(forms_store=forms_store, users_store=users_store, dashboard_cache=dashboard_cache)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()

from api.admin.usecases import DashboardCache, describe_questionnaire, filter_questionnaires, load_questionnaires
from lib.questions import get_question_text
from conftest import InMemoryStore, make_response_document, seed_documents


def test_forms_returns_every_document_newest_first(client, forms_store):
    seed_documents(forms_store, 25)

    resp = client.get("/api/v1/admin/forms")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["totalCount"] == 25
    assert len(body["data"]) == 25
    names = [doc["intro"]["fullName"] for doc in body["data"]]
    assert names[0] == "Responden 24"
    assert names[-1] == "Responden 0"
    assert len(set(doc["_id"] for doc in body["data"])) == 25


def test_forms_search(client, forms_store):
    seed_documents(forms_store, 25)
    forms_store.documents.append({**make_response_document(name="Siti", role="Guru/Dosen/Tenaga Pendidik"), "_id": "guru"})

    by_name = client.get("/api/v1/admin/forms", query_string={"search": "responden 1"}).get_json()
    by_role = client.get("/api/v1/admin/forms", query_string={"search": "guru"}).get_json()

    assert by_name["totalCount"] == 11
    assert [doc["_id"] for doc in by_role["data"]] == ["guru"]


def test_forms_count(client, forms_store):
    seed_documents(forms_store, 4)

    resp = client.get("/api/v1/admin/forms/count")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"count": 4}


def test_forms_unreachable_store(app, client):
    app.extensions["kuesioner"]["forms"] = InMemoryStore(fail_connects=10)

    resp = client.get("/api/v1/admin/forms")

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["success"] is False
    assert body["message"] == "Could not connect to the database"


def test_listing_is_revalidated_after_submit(client, forms_store):
    seed_documents(forms_store, 1)
    assert client.get("/api/v1/admin/forms").get_json()["totalCount"] == 1

    # written behind the API's back: still served from cache
    seed_documents(forms_store, 1)
    assert client.get("/api/v1/admin/forms").get_json()["totalCount"] == 1

    body = make_response_document()
    body.pop("submittedAt")
    assert client.post("/api/v1/submit-questionnaire", json=body).status_code == 201

    assert client.get("/api/v1/admin/forms").get_json()["totalCount"] == 3


def test_dashboard_cache_with_zero_ttl_never_serves():
    cache = DashboardCache(ttl=0)
    cache.put([{"_id": "a"}])
    assert cache.get() is None


def test_dashboard_cache_revalidate():
    cache = DashboardCache(ttl=60)
    cache.put([{"_id": "a"}])
    assert cache.get() == [{"_id": "a"}]

    cache.revalidate()

    assert cache.get() is None


def test_filter_questionnaires_without_search_returns_all():
    docs = [make_response_document(), {"userRole": "UMKM"}]
    assert filter_questionnaires(docs, "") == docs
    assert filter_questionnaires(docs, None) == docs
    assert filter_questionnaires(docs, "budi") == [docs[0]]


def test_listing_read_before_revalidation_is_not_cached():
    cache = DashboardCache(ttl=60)

    class RacingStore(InMemoryStore):
        def _fetch_page(self, skip, limit, sort_field, descending):
            # a submission lands while the listing is being read
            cache.revalidate()
            return super()._fetch_page(skip, limit, sort_field, descending)

    store = RacingStore()
    seed_documents(store, 2)

    assert len(load_questionnaires(store, cache)) == 2
    assert cache.get() is None


def test_listing_is_cached_without_concurrent_revalidation():
    cache = DashboardCache(ttl=60)
    store = InMemoryStore()
    seed_documents(store, 2)

    load_questionnaires(store, cache)

    assert len(cache.get()) == 2


def test_get_question_text():
    assert get_question_text("UMKM", "umum", 3) == "Sebagai apa anda saat ini?"
    assert get_question_text("Guru/Dosen/Tenaga Pendidik", "role", 6).startswith("Antarmuka website Freelinkd")
    assert get_question_text("Pengusaha", "role", 1) == "Pertanyaan 1"
    assert get_question_text("UMKM", "role", 42) == "Pertanyaan 42"
    assert get_question_text("UMKM", "end", 9) == "Pertanyaan 9"


def test_describe_questionnaire_labels_answers():
    sections = describe_questionnaire(make_response_document())

    assert [s["key"] for s in sections] == ["qaUmum", "roleSpecific", "qaEnd"]
    assert [s["title"] for s in sections] == ["Kuesioner Umum", "Kuesioner UMKM", "Kuesioner Penutup"]
    assert sections[0]["answers"][2] == {
        "questionId": 3,
        "answer": "UMKM",
        "question": "Sebagai apa anda saat ini?",
    }
    assert sections[1]["answers"][0]["rating"] == 4
    assert sections[2]["answers"][2]["question"].startswith("Saran atau masukan")


def test_describe_questionnaire_with_unknown_role_and_missing_sections():
    sections = describe_questionnaire({
        "userRole": "Pengusaha",
        "roleSpecific": {"answers": [{"questionId": 2, "rating": 3}]},
    })

    assert sections[0]["answers"] == []
    assert sections[1]["answers"] == [{"questionId": 2, "rating": 3, "question": "Pertanyaan 2"}]


def test_form_detail_endpoint(client, forms_store):
    seed_documents(forms_store, 3)

    resp = client.get("/api/v1/admin/forms/doc-1")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["questionnaire"]["intro"]["fullName"] == "Responden 1"
    assert data["sections"][1]["title"] == "Kuesioner UMKM"
    assert data["sections"][1]["answers"][0]["question"] == get_question_text("UMKM", "role", 1)

    assert client.get("/api/v1/admin/forms/missing").status_code == 404


def test_unversioned_paths_match_versioned_ones(client, forms_store):
    seed_documents(forms_store, 2)

    assert client.get("/api/admin/forms").get_json()["totalCount"] == 2
    assert client.get("/api/admin/forms/count").get_json()["data"] == {"count": 2}
    assert client.get("/api/admin/download-csv").status_code == 200
    assert client.post("/api/auth/admin/me", json={}).status_code == 400

import pytest

from api.wizard.usecases import CONNECTION_ALERT
from api.wizard.utils import REQUIRED_MESSAGE, RATING_MESSAGE, UNKNOWN_ROLE_MESSAGE
from lib.questions import ROLE_GURU, ROLE_UMKM
from conftest import InMemoryStore

INTRO = {"fullName": "Budi Santoso", "gender": "Laki-laki", "age": "21-30 tahun"}


def umum_answers(role):
    return [
        {"questionId": 1, "answer": "Pernah mencoba"},
        {"questionId": 2, "answer": "Sulit menilai kualitas"},
        {"questionId": 3, "answer": role},
    ]


def role_answers(count, rating=4):
    return [{"questionId": i, "rating": rating} for i in range(1, count + 1)]


END_ANSWERS = [
    {"questionId": 1, "rating": 5},
    {"questionId": 2, "rating": 4},
    {"questionId": 3, "answer": "Bagus <b>"},
]


def post(client, step, payload=None):
    return client.post(f"/api/v1/wizard/{step}", json=payload or {})


def state(resp):
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()["data"]


def advance_to_qa_end(client, role=ROLE_UMKM, role_question_count=7):
    state(post(client, "intro", INTRO))
    state(post(client, "qa-umum", {"answers": umum_answers(role)}))
    return state(post(client, "role-specific", {"answers": role_answers(role_question_count)}))


def test_new_session_starts_at_intro(client):
    data = state(client.get("/api/v1/wizard/state"))

    assert data["current_step"] == "intro"
    assert data["step_number"] == 1
    assert data["total_steps"] == 4
    assert data["breadcrumb"] == []
    assert data["header"]["title"] == "Kuesioner Penelitian"


def test_intro_requires_all_fields(client):
    resp = post(client, "intro", {"fullName": "  "})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["errors"] == {
        "fullName": REQUIRED_MESSAGE,
        "gender": REQUIRED_MESSAGE,
        "age": REQUIRED_MESSAGE,
    }
    assert body["current_step"] == "intro"


def test_umkm_path_to_results(client, forms_store):
    data = state(post(client, "intro", INTRO))
    assert data["current_step"] == "qa-umum"
    assert data["breadcrumb"] == ["Home", "Kuesioner Umum"]

    data = state(post(client, "qa-umum", {"answers": umum_answers(ROLE_UMKM)}))
    assert data["current_step"] == "qa-umkm"
    assert data["step_number"] == 3
    assert data["header"]["title"] == "Kuesioner Untuk UMKM"
    assert len(data["questions"]) == 7
    assert data["breadcrumb"] == ["Home", "Kuesioner Umum", "Kuesioner UMKM"]

    data = state(post(client, "role-specific", {"answers": role_answers(7)}))
    assert data["current_step"] == "qa-end"
    assert data["breadcrumb"] == ["Home", "Kuesioner Umum", "Kuesioner UMKM", "Kuesioner Penutup"]

    resp = post(client, "qa-end", {"answers": END_ANSWERS})
    data = state(resp)
    assert resp.get_json()["message"] == "Questionnaire submitted successfully"
    assert data["current_step"] == "results"
    assert data["step_number"] == 0
    assert data["breadcrumb"] == []
    assert data["submission"]["success"] is True
    assert "alert" not in data

    assert len(forms_store.documents) == 1
    stored = forms_store.documents[0]
    assert data["submission"]["id"] == stored["_id"]
    assert stored["intro"] == INTRO
    assert stored["userRole"] == ROLE_UMKM
    assert stored["roleSpecific"]["answers"] == role_answers(7)
    assert stored["qaEnd"]["answers"] == [
        {"questionId": 1, "answer": 5},
        {"questionId": 2, "answer": 4},
        {"questionId": 3, "answer": "Bagus b"},
    ]


def test_unknown_role_is_rejected(client):
    state(post(client, "intro", INTRO))

    resp = post(client, "qa-umum", {"answers": umum_answers("Pengusaha")})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["message"] == UNKNOWN_ROLE_MESSAGE
    assert body["errors"] == {"3": UNKNOWN_ROLE_MESSAGE}
    assert body["current_step"] == "qa-umum"


def test_general_questions_are_required(client):
    state(post(client, "intro", INTRO))

    resp = post(client, "qa-umum", {"answers": [{"questionId": 3, "answer": ROLE_UMKM}]})

    assert resp.status_code == 400
    assert resp.get_json()["errors"] == {"1": REQUIRED_MESSAGE, "2": REQUIRED_MESSAGE}


def test_role_ratings_must_be_on_scale(client):
    state(post(client, "intro", INTRO))
    state(post(client, "qa-umum", {"answers": umum_answers(ROLE_GURU)}))

    answers = role_answers(6)
    answers[2]["rating"] = 9
    resp = post(client, "role-specific", {"answers": answers[:5] + [{"questionId": 6}]})

    assert resp.status_code == 400
    assert resp.get_json()["errors"] == {"3": RATING_MESSAGE, "6": REQUIRED_MESSAGE}


def test_closing_rating_missing_is_rejected_before_storing(client, forms_store):
    advance_to_qa_end(client)

    resp = post(client, "qa-end", {"answers": [{"questionId": 1, "rating": 5}]})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["errors"] == {"2": REQUIRED_MESSAGE}
    assert body["current_step"] == "qa-end"
    assert forms_store.insert_calls == 0


def test_failed_submission_still_reaches_results(app, client):
    app.extensions["kuesioner"]["forms"] = InMemoryStore(fail_connects=10)
    advance_to_qa_end(client)

    resp = post(client, "qa-end", {"answers": END_ANSWERS})

    data = state(resp)
    assert resp.get_json()["message"] == "Questionnaire could not be stored"
    assert data["current_step"] == "results"
    assert data["alert"] == CONNECTION_ALERT
    assert data["submission"] == {"success": False, "alert": CONNECTION_ALERT}


def test_back_navigation(client):
    advance_to_qa_end(client)

    assert state(post(client, "back"))["current_step"] == "qa-umkm"
    assert state(post(client, "back"))["current_step"] == "qa-umum"
    data = state(post(client, "back"))
    assert data["current_step"] == "intro"
    assert data["form_data"]["intro"] == INTRO
    assert state(post(client, "back"))["current_step"] == "intro"


def test_breadcrumb_jump_keeps_answers(client):
    advance_to_qa_end(client)

    data = state(post(client, "goto", {"index": 1}))

    assert data["current_step"] == "qa-umum"
    assert data["form_data"]["qaUmum"]["answers"][2]["answer"] == ROLE_UMKM
    assert "roleSpecific" in data["form_data"]


@pytest.mark.parametrize("index", [4, -1, "1"])
def test_breadcrumb_jump_out_of_range(client, index):
    advance_to_qa_end(client)

    resp = post(client, "goto", {"index": index})

    assert resp.status_code == 400
    assert resp.get_json()["current_step"] == "qa-end"


def test_changing_role_drops_previous_panel_answers(client):
    advance_to_qa_end(client)
    state(post(client, "goto", {"index": 1}))

    data = state(post(client, "qa-umum", {"answers": umum_answers(ROLE_GURU)}))

    assert data["current_step"] == "qa-guru"
    assert data["user_role"] == ROLE_GURU
    assert "roleSpecific" not in data["form_data"]
    assert data["breadcrumb"] == ["Home", "Kuesioner Umum", "Kuesioner Guru"]


def test_step_out_of_order_is_rejected(client):
    resp = post(client, "role-specific", {"answers": role_answers(7)})

    assert resp.status_code == 400
    body = resp.get_json()
    assert "step" in body["errors"]
    assert body["current_step"] == "intro"


def test_session_can_be_resumed_by_header(app, client):
    session_id = state(post(client, "intro", INTRO))["session_id"]

    other = app.test_client()
    data = state(other.get("/api/v1/wizard/state", headers={"X-Session-ID": session_id}))

    assert data["session_id"] == session_id
    assert data["current_step"] == "qa-umum"


@pytest.mark.parametrize("answers, errors", [
    (
        [{"questionId": 1, "answer": "Pernah mencoba"}, {"questionId": 2, "answer": ["not", "text"]},
         {"questionId": 3, "answer": ROLE_UMKM}],
        {"2": REQUIRED_MESSAGE},
    ),
    (
        [{"questionId": 1, "answer": "Kadang-kadang"}, {"questionId": 2, "answer": "Sulit"},
         {"questionId": 3, "answer": ROLE_UMKM}],
        {"1": REQUIRED_MESSAGE},
    ),
    (
        [{"questionId": 1, "answer": 2}, {"questionId": 2, "answer": {"text": "x"}},
         {"questionId": 3, "answer": ROLE_UMKM}],
        {"1": REQUIRED_MESSAGE, "2": REQUIRED_MESSAGE},
    ),
])
def test_general_answers_must_be_text_or_a_listed_option(client, answers, errors):
    state(post(client, "intro", INTRO))

    resp = post(client, "qa-umum", {"answers": answers})

    assert resp.status_code == 400
    assert resp.get_json()["errors"] == errors
    assert resp.get_json()["current_step"] == "qa-umum"


def test_non_object_body_is_a_validation_error(client):
    resp = client.post("/api/v1/wizard/intro", json=[1])

    assert resp.status_code == 400
    assert resp.get_json()["current_step"] == "intro"


def test_non_string_session_id_in_body_starts_a_new_session(client):
    resp = post(client, "intro", {**INTRO, "session_id": ["abc"]})

    assert state(resp)["current_step"] == "qa-umum"


def test_non_finite_question_ids_are_ignored(client):
    state(post(client, "intro", INTRO))

    answers = umum_answers(ROLE_UMKM) + [
        {"questionId": float("inf"), "answer": "x"},
        {"questionId": float("nan"), "answer": "y"},
        {"questionId": 1.5, "answer": "z"},
    ]
    data = state(post(client, "qa-umum", {"answers": answers}))

    assert data["current_step"] == "qa-umkm"
    assert [a["questionId"] for a in data["form_data"]["qaUmum"]["answers"]] == [1, 2, 3]


def test_infinite_question_id_alone_is_a_validation_error(client):
    state(post(client, "intro", INTRO))

    resp = post(client, "qa-umum", {"answers": [{"questionId": float("inf"), "answer": ROLE_UMKM}]})

    assert resp.status_code == 400
    assert set(resp.get_json()["errors"]) == {"1", "2", "3"}

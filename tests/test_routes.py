from conftest import option_of, question_of

STUDENT = 42
LECTURER = 7


def _start(client, headers, quiz_id):
    response = client.post(f"/api/student/quiz/{quiz_id}/attempts", headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_requires_token(client, make_quiz):
    quiz = make_quiz()
    response = client.post(f"/api/student/quiz/{quiz.id}/attempts")
    assert response.status_code == 401

    response = client.post(
        f"/api/student/quiz/{quiz.id}/attempts",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401


def test_full_student_flow(client, auth_headers, make_quiz):
    quiz = make_quiz(questions=("mcq", "short"))
    mcq = question_of(quiz, "multiple_choice")
    short = question_of(quiz, "short_answer")
    mars = option_of(mcq, "Mars").id
    headers = auth_headers(STUDENT)

    details = client.get(f"/api/student/quiz/{quiz.id}/details", headers=headers).get_json()
    assert details["attempts_left"] == 2

    attempt = _start(client, headers, quiz.id)
    assert attempt["status"] == "in_progress"
    assert attempt["attempt_number"] == 1
    assert len(attempt["questions"]) == 2
    assert "is_correct" not in attempt["questions"][0]["options"][0]
    assert "acceptable_answers" not in attempt["questions"][1]

    for payload in (
        {"question_id": mcq.id, "selected_option_id": mars},
        {"question_id": short.id, "answer_text": "Lyon"},
        {"question_id": short.id, "answer_text": "Paris"},
    ):
        response = client.put(f"/api/student/attempts/{attempt['id']}/answers", json=payload, headers=headers)
        assert response.status_code == 200

    response = client.post(f"/api/student/attempts/{attempt['id']}/submit", headers=headers)
    assert response.status_code == 200
    body = response.get_json()
    assert body["data"]["status"] == "graded"
    assert body["stats"]["total_score"] == 15
    assert body["stats"]["percentage"] == 100.0
    assert body["stats"]["passed"] is True

    results = client.get(f"/api/student/quiz/{quiz.id}/results", headers=headers).get_json()
    assert results["attempt"]["result"]["score"] == 15
    assert results["attempts_used"] == 1
    assert results["attempts_left"] == 1


def test_answer_after_submit_returns_invalid_state(client, auth_headers, make_quiz):
    quiz = make_quiz(questions=("short",))
    short = quiz.questions[0]
    headers = auth_headers(STUDENT)
    attempt = _start(client, headers, quiz.id)
    client.post(f"/api/student/attempts/{attempt['id']}/submit", headers=headers)

    response = client.put(
        f"/api/student/attempts/{attempt['id']}/answers",
        json={"question_id": short.id, "answer_text": "Paris"},
        headers=headers,
    )

    assert response.status_code == 409
    assert response.get_json()["meta"]["code"] == "INVALID_STATE"


def test_answer_requires_question_id(client, auth_headers, make_quiz):
    quiz = make_quiz(questions=("short",))
    headers = auth_headers(STUDENT)
    attempt = _start(client, headers, quiz.id)

    response = client.put(f"/api/student/attempts/{attempt['id']}/answers", json={}, headers=headers)

    assert response.status_code == 400
    assert response.get_json()["meta"]["code"] == "MALFORMED_RESPONSE"


def test_attempt_limit_over_http(client, auth_headers, make_quiz):
    quiz = make_quiz(attempts_allowed=1)
    headers = auth_headers(STUDENT)
    _start(client, headers, quiz.id)

    response = client.post(f"/api/student/quiz/{quiz.id}/attempts", headers=headers)

    assert response.status_code == 403
    assert response.get_json()["meta"]["code"] == "ATTEMPTS_EXCEEDED"


def test_unknown_quiz(client, auth_headers):
    response = client.post("/api/student/quiz/404/attempts", headers=auth_headers(STUDENT))
    assert response.status_code == 404
    assert response.get_json()["meta"]["code"] == "QUIZ_NOT_FOUND"


def test_students_cannot_read_each_others_attempts(client, auth_headers, make_quiz):
    quiz = make_quiz()
    attempt = _start(client, auth_headers(STUDENT), quiz.id)

    response = client.get(f"/api/student/attempts/{attempt['id']}", headers=auth_headers(STUDENT + 1))

    assert response.status_code == 403


def test_abandon_attempt(client, auth_headers, make_quiz):
    quiz = make_quiz()
    headers = auth_headers(STUDENT)
    attempt = _start(client, headers, quiz.id)

    response = client.delete(f"/api/student/attempts/{attempt['id']}", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["data"]["status"] == "abandoned"

    response = client.delete(f"/api/student/attempts/{attempt['id']}", headers=headers)
    assert response.status_code == 409


def test_essay_review_flow(client, auth_headers, make_quiz):
    quiz = make_quiz(questions=("mcq", "essay"))
    mcq = question_of(quiz, "multiple_choice")
    essay = question_of(quiz, "essay")
    student = auth_headers(STUDENT)
    lecturer = auth_headers(LECTURER, role="lecturer")

    attempt = _start(client, student, quiz.id)
    client.put(
        f"/api/student/attempts/{attempt['id']}/answers",
        json={"question_id": mcq.id, "selected_option_id": option_of(mcq, "Venus").id},
        headers=student,
    )
    client.put(
        f"/api/student/attempts/{attempt['id']}/answers",
        json={"question_id": essay.id, "answer_text": "Nationalism"},
        headers=student,
    )
    submitted = client.post(f"/api/student/attempts/{attempt['id']}/auto-submit", headers=student).get_json()
    assert submitted["data"]["status"] == "submitted"
    assert submitted["data"]["needs_review"] is True

    pending = client.get("/api/lecturer/quiz-attempts?status=submitted", headers=lecturer).get_json()
    assert [a["id"] for a in pending["data"]] == [attempt["id"]]

    detail = client.get(f"/api/lecturer/quiz-attempts/{attempt['id']}", headers=lecturer).get_json()
    assert detail["pending_review"] == [essay.id]

    # students may not review
    response = client.post(
        f"/api/lecturer/quiz-attempts/{attempt['id']}/responses/{essay.id}/review",
        json={"points": 10},
        headers=student,
    )
    assert response.status_code == 403

    response = client.post(
        f"/api/lecturer/quiz-attempts/{attempt['id']}/responses/{essay.id}/review",
        json={"points": 9, "feedback": "Well argued"},
        headers=lecturer,
    )
    assert response.status_code == 200
    body = response.get_json()
    assert body["data"]["status"] == "graded"
    assert body["stats"]["total_score"] == 9
    assert body["stats"]["max_score"] == 20
    assert body["stats"]["passed"] is False

    response = client.post(f"/api/lecturer/quiz-attempts/{attempt['id']}/regrade", headers=lecturer)
    assert response.get_json()["stats"]["total_score"] == 9


def test_review_requires_points(client, auth_headers, make_quiz):
    quiz = make_quiz(questions=("essay",))
    attempt = _start(client, auth_headers(STUDENT), quiz.id)
    response = client.post(
        f"/api/lecturer/quiz-attempts/{attempt['id']}/responses/{quiz.questions[0].id}/review",
        json={},
        headers=auth_headers(LECTURER, role="lecturer"),
    )
    assert response.status_code == 400

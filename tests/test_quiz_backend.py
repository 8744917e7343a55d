"""
Tests for the HTTP quiz backend (requests mocked) and the terminal runner
"""
import threading
from unittest.mock import MagicMock

import pytest
import requests

from quizapp.cli.take_quiz import handle_command, render_result, run_quiz
from quizapp.core.session import QuizSession
from quizapp.errors import QuizClientError
from quizapp.models import QuizSubmission, UserAnswer
from quizapp.services.quiz_backend import HttpQuizBackend, LocalQuizBackend


def response(status, payload):
    r = MagicMock()
    r.status_code = status
    r.ok = status < 400
    r.json.return_value = payload
    return r


def test_fetch_questions():
    http = MagicMock()
    http.get.return_value = response(200, {"questions": [
        {"id": 1, "text": "One?", "options": ["a", "b", "c", "d"]},
    ]})
    backend = HttpQuizBackend("http://quiz.local/", http=http)

    questions = backend.fetch_questions()

    http.get.assert_called_once_with("http://quiz.local/api/quiz/questions", timeout=10.0)
    assert questions[0].id == 1
    assert questions[0].options == ["a", "b", "c", "d"]


def test_fetch_questions_server_error():
    http = MagicMock()
    http.get.return_value = response(500, {"detail": "Failed to fetch questions"})
    with pytest.raises(QuizClientError, match="Failed to fetch questions"):
        HttpQuizBackend("http://quiz.local", http=http).fetch_questions()


def test_fetch_questions_connection_error():
    http = MagicMock()
    http.get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(QuizClientError, match="refused"):
        HttpQuizBackend("http://quiz.local", http=http).fetch_questions()


def test_submit_posts_camel_case():
    http = MagicMock()
    http.post.return_value = response(200, {"result": {
        "score": 1, "totalQuestions": 1, "percentage": 100,
        "answers": [{"questionId": 1, "question": "One?", "selectedOption": 2,
                     "correctOption": 2, "isCorrect": True, "options": ["a", "b", "c", "d"]}],
    }})
    backend = HttpQuizBackend("http://quiz.local", http=http)

    result = backend.submit(QuizSubmission(answers=[UserAnswer(question_id=1, selected_option=2)]))

    http.post.assert_called_once_with(
        "http://quiz.local/api/quiz/submit",
        json={"answers": [{"questionId": 1, "selectedOption": 2}]},
        timeout=10.0,
    )
    assert result.score == 1
    assert result.answers[0].is_correct is True


def test_submit_validation_error_message():
    http = MagicMock()
    http.post.return_value = response(400, {"detail": {
        "error": "Invalid submission", "details": ["Expected 5 answers, but received 1"],
    }})
    backend = HttpQuizBackend("http://quiz.local", http=http)
    with pytest.raises(QuizClientError, match="Invalid submission: Expected 5 answers"):
        backend.submit(QuizSubmission(answers=[]))


# ---- terminal runner ----

def test_run_quiz_answers_and_submits(seeded_store):
    session = QuizSession(LocalQuizBackend(seeded_store), time_limit=600)
    commands = iter(["b", "b", "c", "a", "g 4", "d", "s"])
    printed = []

    result = run_quiz(session, input_fn=lambda prompt: next(commands), output=printed.append)

    assert result.score == 4
    assert session.state.answers == {1: 1, 2: 1, 3: 2, 4: 3}
    assert "Score: 4/5 (80%)" in printed[-1]


def test_run_quiz_failed_submit_keeps_quiz_open(seeded_store):
    backend = LocalQuizBackend(seeded_store)
    backend.submit = MagicMock(side_effect=QuizClientError("HTTP 500"))
    session = QuizSession(backend)
    commands = iter(["b", "s", "s", "q"])
    printed = []

    result = run_quiz(session, input_fn=lambda prompt: next(commands), output=printed.append)

    assert result is None
    assert backend.submit.call_count == 2
    assert session.state.is_submitted is False
    assert session.state.answers == {1: 1}
    assert printed.count("❌ HTTP 500") == 2


def test_run_quiz_retry_after_failed_submit(seeded_store):
    backend = LocalQuizBackend(seeded_store)
    real_submit = backend.submit
    calls = []

    def flaky_submit(submission):
        calls.append(submission)
        if len(calls) == 1:
            raise QuizClientError("HTTP 500")
        return real_submit(submission)

    backend.submit = flaky_submit
    session = QuizSession(backend)
    commands = iter(["b", "s", "s"])
    printed = []

    result = run_quiz(session, input_fn=lambda prompt: next(commands), output=printed.append)

    assert len(calls) == 2
    assert result.score == 1
    assert session.state.is_submitted is True
    assert session.submit_error is None
    assert "Score: 1/5 (20%)" in printed[-1]


def test_run_quiz_auto_submits_when_time_runs_out(seeded_store):
    """The result is shown while the prompt is still waiting for input"""
    submitted = threading.Event()

    def mark_submitted(result):
        submitted.set()

    session = QuizSession(
        LocalQuizBackend(seeded_store),
        time_limit=1,
        tick_interval=0.01,
        on_submit=mark_submitted,
    )
    printed = []

    def wait_for_timer(prompt):
        assert submitted.wait(timeout=5)
        assert any("Time is up" in line for line in printed)
        return ""

    result = run_quiz(session, input_fn=wait_for_timer, output=printed.append)

    assert result is not None
    assert result.score == 2
    assert session.state.is_submitted is True
    assert session.state.time_remaining == 0
    assert sum("Score: 2/5 (40%)" in line for line in printed) == 1
    assert session.on_submit is mark_submitted


def test_run_quiz_quit(seeded_store):
    session = QuizSession(LocalQuizBackend(seeded_store))
    result = run_quiz(session, input_fn=lambda prompt: "q", output=lambda text: None)
    assert result is None
    assert session.state.is_submitted is False


def test_run_quiz_empty_bank(store):
    printed = []
    result = run_quiz(QuizSession(LocalQuizBackend(store)), input_fn=lambda p: "s", output=printed.append)
    assert result is None
    assert printed == ["No questions available."]


def test_handle_command_unknown(seeded_store):
    session = QuizSession(LocalQuizBackend(seeded_store))
    session.load_questions()
    printed = []
    assert handle_command(session, "zz", printed.append) is True
    assert handle_command(session, "g x", printed.append) is True
    assert len(printed) == 2


def test_render_result_shows_correct_answer(seeded_store):
    backend = LocalQuizBackend(seeded_store)
    session = QuizSession(backend)
    session.load_questions()
    text = render_result(session.submit())
    assert "Score: 2/5 (40%)" in text
    assert "Correct answer: B" in text

"""
Shared fixtures: a fresh SQLite store per test and a TestClient bound to it
"""
import pytest
from fastapi.testclient import TestClient

from quizapp import state
from quizapp.db.store import QuestionStore
from quizapp.main import app
from quizapp.models import Question, QuestionData


SAMPLE_QUESTIONS = [
    QuestionData(text="Question 1?", options=["A", "B", "C", "D"], correct_answer=0),
    QuestionData(text="Question 2?", options=["A", "B", "C", "D"], correct_answer=1),
    QuestionData(text="Question 3?", options=["A", "B", "C", "D"], correct_answer=2),
    QuestionData(text="Question 4?", options=["A", "B", "C", "D"], correct_answer=3),
    QuestionData(text="Question 5?", options=["A", "B", "C", "D"], correct_answer=0),
]


@pytest.fixture
def bank():
    """Five questions with ids 1..5 and answers 0,1,2,3,0"""
    return [
        Question(id=i, text=q.text, options=q.options, correct_answer=q.correct_answer)
        for i, q in enumerate(SAMPLE_QUESTIONS, start=1)
    ]


@pytest.fixture
def store(tmp_path):
    s = QuestionStore(str(tmp_path / "quiz.db"))
    yield s
    s.close()


@pytest.fixture
def seeded_store(store):
    store.add_questions(SAMPLE_QUESTIONS)
    return store


@pytest.fixture
def client(seeded_store):
    """TestClient without lifespan; routers see the per-test store"""
    previous = state.STORE
    state.STORE = seeded_store
    yield TestClient(app)
    state.STORE = previous

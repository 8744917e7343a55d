"""
Tests for the SQLite question store and seed loader
"""
import sqlite3

import pytest

from quizapp.db.seed import load_seed_questions, seed_database
from quizapp.db.store import QuestionStore
from quizapp.models import QuestionData


def test_schema_created_empty(store):
    assert store.get_question_count() == 0
    assert store.get_questions() == []


def test_add_and_get_question(store):
    data = QuestionData(text="Where is the Taj Mahal located?",
                        options=["Delhi", "Agra", "Jaipur", "Lucknow"], correct_answer=1)
    question_id = store.add_question(data)

    question = store.get_question(question_id)
    assert question.id == question_id
    assert question.text == data.text
    assert question.options == data.options
    assert question.correct_answer == 1


def test_get_question_missing(store):
    assert store.get_question(42) is None


def test_ids_outside_sqlite_integer_range(seeded_store):
    data = QuestionData(text="Changed?", options=["w", "x", "y", "z"], correct_answer=3)
    for question_id in (2 ** 63, -(2 ** 63) - 1, 10 ** 30):
        assert seeded_store.get_question(question_id) is None
        assert seeded_store.update_question(question_id, data) is False
        assert seeded_store.delete_question(question_id) is False
    assert seeded_store.get_question(2 ** 63 - 1) is None
    assert seeded_store.get_question_count() == 5


def test_public_questions_have_no_answer_key(seeded_store):
    questions = seeded_store.get_questions()
    assert [q.id for q in questions] == [1, 2, 3, 4, 5]
    assert "correctAnswer" not in questions[0].to_wire()


def test_questions_with_answers_ordered_by_id(seeded_store):
    questions = seeded_store.get_questions_with_answers()
    assert [q.correct_answer for q in questions] == [0, 1, 2, 3, 0]
    assert seeded_store.get_all_questions() == questions


def test_update_question(seeded_store):
    data = QuestionData(text="Changed?", options=["w", "x", "y", "z"], correct_answer=3)
    assert seeded_store.update_question(2, data) is True
    question = seeded_store.get_question(2)
    assert question.text == "Changed?"
    assert question.options == ["w", "x", "y", "z"]
    assert question.correct_answer == 3


def test_update_missing_question(seeded_store):
    data = QuestionData(text="Changed?", options=["w", "x", "y", "z"], correct_answer=3)
    assert seeded_store.update_question(99, data) is False


def test_delete_question(seeded_store):
    assert seeded_store.delete_question(3) is True
    assert seeded_store.delete_question(3) is False
    assert seeded_store.get_question_count() == 4


def test_check_constraint_rejects_bad_answer(store):
    with pytest.raises(sqlite3.IntegrityError):
        store.add_question(QuestionData(text="?", options=["a", "b", "c", "d"], correct_answer=4))
    assert store.get_question_count() == 0


def test_add_questions_is_atomic(store):
    batch = [
        QuestionData(text="ok", options=["a", "b", "c", "d"], correct_answer=0),
        QuestionData(text="bad", options=["a", "b", "c", "d"], correct_answer=7),
    ]
    with pytest.raises(sqlite3.IntegrityError):
        store.add_questions(batch)
    assert store.get_question_count() == 0


def test_clear_and_reset_ids(seeded_store):
    seeded_store.clear_all_questions()
    assert seeded_store.get_question_count() == 0

    seeded_store.reset_auto_increment()
    new_id = seeded_store.add_question(
        QuestionData(text="Fresh?", options=["a", "b", "c", "d"], correct_answer=0)
    )
    assert new_id == 1


def test_ids_not_reused_without_reset(seeded_store):
    seeded_store.clear_all_questions()
    new_id = seeded_store.add_question(
        QuestionData(text="Fresh?", options=["a", "b", "c", "d"], correct_answer=0)
    )
    assert new_id == 6


def test_store_persists_between_connections(tmp_path):
    path = str(tmp_path / "persist.db")
    with QuestionStore(path) as first:
        first.add_question(QuestionData(text="Kept?", options=["a", "b", "c", "d"], correct_answer=2))
    with QuestionStore(path) as second:
        assert second.get_question_count() == 1


# ---- seed ----

def test_bundled_seed_bank():
    questions = load_seed_questions()
    assert len(questions) == 15
    assert questions[0].text == "What is the capital of India?"
    assert questions[0].options[questions[0].correct_answer] == "New Delhi"
    assert all(len(q.options) == 4 for q in questions)


def test_seed_only_when_empty(store):
    assert seed_database(store) == 15
    assert seed_database(store) == 0
    assert store.get_question_count() == 15


def test_seed_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_seed_questions(str(tmp_path / "nope.csv"))


def test_seed_rejects_bad_answer(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text(
        "text,option_a,option_b,option_c,option_d,correct_answer\n"
        "Q?,a,b,c,d,5\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="Line 2"):
        load_seed_questions(str(path))


def test_seed_rejects_missing_option(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text(
        "text,option_a,option_b,option_c,option_d,correct_answer\n"
        "Q?,a,b,,d,1\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="all four options"):
        load_seed_questions(str(path))

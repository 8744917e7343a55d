"""
SQLite question store

One table, four option columns, correct answer stored as an index 0..3.
"""
import logging
import sqlite3
import threading
from typing import Iterable, List, Optional

from quizapp.models import Question, QuestionData, QuizQuestion


logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS questions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    text TEXT NOT NULL,
    option_a TEXT NOT NULL,
    option_b TEXT NOT NULL,
    option_c TEXT NOT NULL,
    option_d TEXT NOT NULL,
    correct_answer INTEGER NOT NULL CHECK (correct_answer IN (0, 1, 2, 3))
)
"""

SELECT_WITH_ANSWERS = """
SELECT id, text, option_a, option_b, option_c, option_d, correct_answer
FROM questions
"""

INSERT_QUESTION = """
INSERT INTO questions (text, option_a, option_b, option_c, option_d, correct_answer)
VALUES (?, ?, ?, ?, ?, ?)
"""

UPDATE_QUESTION = """
UPDATE questions
SET text = ?, option_a = ?, option_b = ?, option_c = ?, option_d = ?, correct_answer = ?
WHERE id = ?
"""

# SQLite INTEGER is a signed 64-bit value; larger ids can never match a row
MAX_ROW_ID = 2 ** 63 - 1


def _row_to_question(row: sqlite3.Row) -> Question:
    return Question(
        id=row["id"],
        text=row["text"],
        options=[row["option_a"], row["option_b"], row["option_c"], row["option_d"]],
        correct_answer=row["correct_answer"],
    )


def _params(data: QuestionData) -> tuple:
    return (data.text, *data.options[:4], data.correct_answer)


def _storable_id(question_id: int) -> bool:
    return -MAX_ROW_ID - 1 <= question_id <= MAX_ROW_ID


class QuestionStore:
    """
    Prepared-statement access to the questions table

    A single connection is shared; calls are serialized with a lock so the
    store can be used from FastAPI's worker threads.
    """

    def __init__(self, database_path: str = "quiz.db"):
        self.database_path = database_path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(database_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        if database_path != ":memory:":
            self._conn.execute("PRAGMA journal_mode = WAL")
        self._conn.execute(SCHEMA)
        self._conn.commit()
        logger.debug(f"Opened question store at {database_path}")

    # ---- context manager ----

    def __enter__(self) -> "QuestionStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # ---- reads ----

    def get_questions(self) -> List[QuizQuestion]:
        """All questions without correct answers, ordered by id"""
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, text, option_a, option_b, option_c, option_d FROM questions ORDER BY id"
            ).fetchall()
        return [
            QuizQuestion(
                id=row["id"],
                text=row["text"],
                options=[row["option_a"], row["option_b"], row["option_c"], row["option_d"]],
            )
            for row in rows
        ]

    def get_questions_with_answers(self) -> List[Question]:
        """All questions including the answer key, ordered by id"""
        with self._lock:
            rows = self._conn.execute(SELECT_WITH_ANSWERS + " ORDER BY id").fetchall()
        return [_row_to_question(row) for row in rows]

    get_all_questions = get_questions_with_answers

    def get_question(self, question_id: int) -> Optional[Question]:
        if not _storable_id(question_id):
            return None
        with self._lock:
            row = self._conn.execute(SELECT_WITH_ANSWERS + " WHERE id = ?", (question_id,)).fetchone()
        return _row_to_question(row) if row else None

    def get_question_count(self) -> int:
        with self._lock:
            row = self._conn.execute("SELECT COUNT(*) AS count FROM questions").fetchone()
        return row["count"]

    # ---- writes ----

    def add_question(self, data: QuestionData) -> int:
        """Insert one question and return its id"""
        with self._lock, self._conn:
            cursor = self._conn.execute(INSERT_QUESTION, _params(data))
        return cursor.lastrowid

    def add_questions(self, questions: Iterable[QuestionData]) -> int:
        """Insert many questions in a single transaction (all or nothing)"""
        rows = [_params(q) for q in questions]
        with self._lock, self._conn:
            self._conn.executemany(INSERT_QUESTION, rows)
        return len(rows)

    def update_question(self, question_id: int, data: QuestionData) -> bool:
        if not _storable_id(question_id):
            return False
        with self._lock, self._conn:
            cursor = self._conn.execute(UPDATE_QUESTION, (*_params(data), question_id))
        return cursor.rowcount > 0

    def delete_question(self, question_id: int) -> bool:
        if not _storable_id(question_id):
            return False
        with self._lock, self._conn:
            cursor = self._conn.execute("DELETE FROM questions WHERE id = ?", (question_id,))
        return cursor.rowcount > 0

    def clear_all_questions(self) -> None:
        with self._lock, self._conn:
            self._conn.execute("DELETE FROM questions")

    def reset_auto_increment(self) -> None:
        """Restart ids at 1 (only meaningful after clear_all_questions)"""
        with self._lock, self._conn:
            self._conn.execute("DELETE FROM sqlite_sequence WHERE name = 'questions'")

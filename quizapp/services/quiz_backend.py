"""
Quiz backends - where a QuizSession loads questions and sends answers

LocalQuizBackend talks to the question store directly.
HttpQuizBackend talks to a running server's public quiz API.
"""
import logging
from typing import List, Optional

import requests

from quizapp.core.scoring import calculate_score, validate_submission
from quizapp.db.store import QuestionStore
from quizapp.errors import QuizClientError
from quizapp.models import QuizQuestion, QuizResult, QuizSubmission


logger = logging.getLogger(__name__)


class QuizBackend:
    def fetch_questions(self) -> List[QuizQuestion]:
        raise NotImplementedError

    def submit(self, submission: QuizSubmission) -> QuizResult:
        raise NotImplementedError


class LocalQuizBackend(QuizBackend):
    """Scores in-process against a QuestionStore"""

    def __init__(self, store: QuestionStore):
        self.store = store

    def fetch_questions(self) -> List[QuizQuestion]:
        return self.store.get_questions()

    def submit(self, submission: QuizSubmission) -> QuizResult:
        questions = self.store.get_questions_with_answers()
        errors = validate_submission(submission.to_wire(), questions)
        if errors:
            raise QuizClientError("Invalid submission: " + "; ".join(errors))
        return calculate_score(submission, questions)


def _error_message(response: requests.Response, default: str) -> str:
    """Pull a readable message out of an error response"""
    try:
        data = response.json()
    except ValueError:
        return f"{default} (HTTP {response.status_code})"

    detail = data.get("detail", data) if isinstance(data, dict) else data
    if isinstance(detail, dict):
        message = detail.get("error") or default
        details = detail.get("details")
        if details:
            message = f"{message}: {'; '.join(details)}"
        return message
    return str(detail) if detail else default


class HttpQuizBackend(QuizBackend):
    """Uses GET /api/quiz/questions and POST /api/quiz/submit"""

    def __init__(self, base_url: str, timeout: float = 10.0, http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.http = http or requests.Session()

    def fetch_questions(self) -> List[QuizQuestion]:
        url = f"{self.base_url}/api/quiz/questions"
        try:
            response = self.http.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise QuizClientError(f"Failed to fetch questions: {e}") from e

        if not response.ok:
            raise QuizClientError(_error_message(response, "Failed to fetch questions"))

        return [QuizQuestion.model_validate(q) for q in response.json().get("questions", [])]

    def submit(self, submission: QuizSubmission) -> QuizResult:
        url = f"{self.base_url}/api/quiz/submit"
        try:
            response = self.http.post(url, json=submission.to_wire(), timeout=self.timeout)
        except requests.RequestException as e:
            raise QuizClientError(f"Failed to submit quiz: {e}") from e

        if not response.ok:
            raise QuizClientError(_error_message(response, "Failed to submit quiz"))

        return QuizResult.model_validate(response.json()["result"])

"""
Normalizer for admin question payloads
"""
from typing import Any, Dict

from quizapp.core.scoring import NUM_OPTIONS, is_number
from quizapp.errors import InvalidQuestionError
from quizapp.models import QuestionData


def normalize_question(body: Dict[str, Any]) -> QuestionData:
    """
    Normalize an add/update question payload

    Body format:
    {
        "text": "What is the capital of India?",
        "options": ["Mumbai", "Kolkata", "New Delhi", "Chennai"],
        "correctAnswer": 2
    }

    Args:
        body: Request body JSON

    Returns:
        QuestionData

    Raises:
        InvalidQuestionError: "Invalid question data" for missing/malformed
            fields, or a range message for correctAnswer outside 0..3
    """
    if not isinstance(body, dict):
        raise InvalidQuestionError("Invalid question data")

    text = body.get("text")
    options = body.get("options")
    correct_answer = body.get("correctAnswer", body.get("correct_answer"))

    if (
        not isinstance(text, str) or not text
        or not isinstance(options, list) or len(options) != NUM_OPTIONS
        or not all(isinstance(o, str) for o in options)
        or not is_number(correct_answer)
    ):
        raise InvalidQuestionError("Invalid question data")

    if correct_answer < 0 or correct_answer > NUM_OPTIONS - 1:
        raise InvalidQuestionError(f"Correct answer must be between 0 and {NUM_OPTIONS - 1}")

    return QuestionData(text=text, options=options, correct_answer=int(correct_answer))

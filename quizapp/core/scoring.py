"""
Quiz scoring and submission validation

Rules:
  - One point per answer whose selected option equals the correct option
  - Total is the number of questions in the bank, not the number of answers
  - Percentage = score / total × 100, rounded half-up to an integer
"""
import math
from typing import Any, Dict, List, Sequence

from quizapp.errors import QuestionNotFoundError
from quizapp.models import AnswerResult, Question, QuizResult, QuizSubmission


NUM_OPTIONS = 4


def is_number(value: Any) -> bool:
    """
    True for ints and integral floats

    Booleans are rejected even though bool is a subclass of int.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def calculate_percentage(score: int, total: int) -> int:
    """
    Rounded percentage, half-up (1/3 → 33, 2/3 → 67, 1/8 → 13)

    An empty bank scores 0%.
    """
    if total <= 0:
        return 0
    return int(math.floor(score * 100 / total + 0.5))


def validate_submission(submission: Any, questions: Sequence[Question]) -> List[str]:
    """
    Validate a decoded submission body

    Works on the raw JSON (dict) so malformed fields are reported instead of
    failing model parsing. Errors are returned in a stable order:
    format, answer count, per-answer checks, duplicates.

    Args:
        submission: Decoded request body, expected {"answers": [...]}
        questions: Current question bank

    Returns:
        List of error messages (empty when the submission is valid)
    """
    errors = []

    answers = submission.get("answers") if isinstance(submission, dict) else None
    if not isinstance(answers, list):
        errors.append("Invalid submission format: answers must be an array")
        return errors

    question_ids = {q.id for q in questions}

    if len(answers) != len(questions):
        errors.append(f"Expected {len(questions)} answers, but received {len(answers)}")

    submitted_ids = []
    for index, answer in enumerate(answers, start=1):
        if not isinstance(answer, dict):
            answer = {}

        question_id = answer.get("questionId")
        submitted_ids.append(question_id)
        if not is_number(question_id):
            errors.append(f"Answer {index}: questionId must be a number")
        elif int(question_id) not in question_ids:
            errors.append(f"Answer {index}: invalid questionId {int(question_id)}")

        selected = answer.get("selectedOption")
        if not is_number(selected):
            errors.append(f"Answer {index}: selectedOption must be a number")
        elif selected < 0 or selected > NUM_OPTIONS - 1:
            errors.append(f"Answer {index}: selectedOption must be between 0 and {NUM_OPTIONS - 1}")

    hashable_ids = [qid if is_number(qid) else repr(qid) for qid in submitted_ids]
    if len(hashable_ids) != len(set(hashable_ids)):
        errors.append("Duplicate question IDs found in submission")

    return errors


def calculate_score(submission: QuizSubmission, questions: Sequence[Question]) -> QuizResult:
    """
    Score a submission against the question bank

    Args:
        submission: Parsed submission
        questions: Question bank with answer keys

    Returns:
        QuizResult with one AnswerResult per submitted answer, in submission order

    Raises:
        QuestionNotFoundError: If an answer references an unknown question
    """
    question_map: Dict[int, Question] = {q.id: q for q in questions}

    score = 0
    results = []
    for answer in submission.answers:
        question = question_map.get(answer.question_id)
        if question is None:
            raise QuestionNotFoundError(answer.question_id)

        is_correct = answer.selected_option == question.correct_answer
        if is_correct:
            score += 1

        results.append(AnswerResult(
            question_id=answer.question_id,
            question=question.text,
            selected_option=answer.selected_option,
            correct_option=question.correct_answer,
            is_correct=is_correct,
            options=list(question.options),
        ))

    total_questions = len(questions)

    return QuizResult(
        score=score,
        total_questions=total_questions,
        percentage=calculate_percentage(score, total_questions),
        answers=results,
    )

"""
Public quiz endpoints - questions without answer keys, and submission scoring
"""
from fastapi import APIRouter, HTTPException, Request
import logging

from quizapp.api.deps import get_store
from quizapp.core.scoring import calculate_score, validate_submission
from quizapp.models import QuizSubmission


router = APIRouter(prefix="/api/quiz", tags=["quiz"])
logger = logging.getLogger(__name__)


@router.get("/questions")
async def list_questions():
    """List all questions (id, text, options) for a quiz-taker"""
    store = get_store()
    try:
        questions = store.get_questions()
    except Exception as e:
        logger.error(f"❌ Error fetching questions: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch questions")

    return {"questions": [q.to_wire() for q in questions]}


@router.post("/submit")
async def submit_quiz(request: Request):
    """
    Score a quiz submission

    Request:
        {
            "answers": [
                {"questionId": 1, "selectedOption": 2},
                ...
            ]
        }

    Response (200):
        {
            "result": {
                "score": 3,
                "totalQuestions": 5,
                "percentage": 60,
                "answers": [{"questionId", "question", "selectedOption",
                             "correctOption", "isCorrect", "options"}, ...]
            }
        }

    Response (400):
        {"detail": {"error": "Invalid submission", "details": [...]}}
    """
    store = get_store()

    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON in request body")

    client_ip = request.client.host if request.client else "unknown"

    try:
        questions = store.get_questions_with_answers()

        errors = validate_submission(body, questions)
        if errors:
            logger.info(f"⚠️ Rejected submission from {client_ip}: {len(errors)} error(s)")
            raise HTTPException(
                status_code=400,
                detail={"error": "Invalid submission", "details": errors}
            )

        submission = QuizSubmission.model_validate(body)
        result = calculate_score(submission, questions)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"❌ ERROR in /api/quiz/submit from {client_ip}\n"
            f"Request Body: {body}\n"
            f"Error: {str(e)}\n"
            f"Error Type: {type(e).__name__}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail="Failed to process quiz submission")

    logger.info(
        f"✅ Submission from {client_ip} | Score: {result.score}/{result.total_questions} "
        f"({result.percentage}%)"
    )
    return {"result": result.to_wire()}

"""
Admin endpoints for question management
"""
from fastapi import APIRouter, HTTPException, Request
import logging

from quizapp.api.deps import get_store
from quizapp.core.normalizer import normalize_question
from quizapp.errors import InvalidQuestionError
from quizapp.models import QuestionData


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _parse_question_id(raw: str) -> int:
    # Plain decimal only; int() would also take "1_000" or " 7 "
    digits = raw[1:] if raw.startswith("-") else raw
    if not (digits.isascii() and digits.isdigit()):
        raise HTTPException(status_code=400, detail="Invalid question ID")
    return int(raw)


async def _read_question(request: Request) -> QuestionData:
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON in request body")
    try:
        return normalize_question(body)
    except InvalidQuestionError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/questions")
async def get_all_questions():
    """All questions including correct answers"""
    store = get_store()
    try:
        questions = store.get_all_questions()
    except Exception as e:
        logger.error(f"❌ Error fetching questions: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch questions")

    return {"success": True, "data": [q.to_wire() for q in questions]}


@router.post("/questions")
async def add_question(request: Request):
    """
    Admin: Add a question

    Request:
        {
            "text": "Where is the Taj Mahal located?",
            "options": ["Delhi", "Agra", "Jaipur", "Lucknow"],
            "correctAnswer": 1
        }
    """
    store = get_store()
    data = await _read_question(request)

    try:
        question_id = store.add_question(data)
    except Exception as e:
        logger.error(f"❌ Error adding question: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to add question")

    logger.info(f"➕ Added question {question_id}")
    return {"success": True, "data": {"id": question_id, **data.to_wire()}}


@router.get("/questions/{question_id}")
async def get_question(question_id: str):
    store = get_store()
    qid = _parse_question_id(question_id)

    try:
        question = store.get_question(qid)
    except Exception as e:
        logger.error(f"❌ Error fetching question {qid}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch question")

    if question is None:
        raise HTTPException(status_code=404, detail="Question not found")

    return {"success": True, "data": question.to_wire()}


@router.put("/questions/{question_id}")
async def update_question(question_id: str, request: Request):
    """Admin: Replace all fields of a question"""
    store = get_store()
    qid = _parse_question_id(question_id)
    data = await _read_question(request)

    try:
        updated = store.update_question(qid, data)
    except Exception as e:
        logger.error(f"❌ Error updating question {qid}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update question")

    if not updated:
        raise HTTPException(status_code=404, detail="Question not found or update failed")

    logger.info(f"✏️ Updated question {qid}")
    return {"success": True, "data": {"id": qid, **data.to_wire()}}


@router.delete("/questions/{question_id}")
async def delete_question(question_id: str):
    store = get_store()
    qid = _parse_question_id(question_id)

    try:
        deleted = store.delete_question(qid)
    except Exception as e:
        logger.error(f"❌ Error deleting question {qid}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete question")

    if not deleted:
        raise HTTPException(status_code=404, detail="Question not found or delete failed")

    logger.info(f"🗑️ Deleted question {qid}")
    return {"success": True, "message": "Question deleted successfully"}


@router.get("/stats")
async def get_stats():
    """Question bank statistics"""
    store = get_store()
    try:
        count = store.get_question_count()
    except Exception as e:
        logger.error(f"❌ Error fetching stats: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch statistics")

    return {"success": True, "data": {"totalQuestions": count}}

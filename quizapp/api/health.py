"""
Health check endpoint
"""
from fastapi import APIRouter

from quizapp import state
from quizapp.version import __version__


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "Quiz Server",
        "version": __version__,
        "total_questions": state.STORE.get_question_count() if state.STORE else 0
    }

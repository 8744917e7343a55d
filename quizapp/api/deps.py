"""
Shared helpers for API routers
"""
from fastapi import HTTPException

from quizapp import state
from quizapp.db.store import QuestionStore


def get_store() -> QuestionStore:
    """Return the open question store or fail with 500"""
    if state.STORE is None:
        raise HTTPException(status_code=500, detail="Question store is not initialized")
    return state.STORE

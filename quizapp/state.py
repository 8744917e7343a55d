"""
Global application state
Shared resources accessible across all modules
"""
from typing import Optional

from quizapp.db.store import QuestionStore
from quizapp.models import QuizConfig

# Loaded at startup (see main.lifespan)
CONFIG: QuizConfig = QuizConfig()

# Question store, opened at startup and closed at shutdown
STORE: Optional[QuestionStore] = None

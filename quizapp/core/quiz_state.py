"""
Quiz-taking state machine

State transitions are a pure reducer: quiz_reducer(state, action) returns a
new QuizState and never mutates its input. Selectors below read the state.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from quizapp.models import QuizQuestion, QuizSubmission, UserAnswer


DEFAULT_TIME_LIMIT = 600  # 10 minutes

LOW_TIME_SECONDS = 60
CRITICAL_TIME_SECONDS = 30


class ActionType(str, Enum):
    LOAD_QUESTIONS = "LOAD_QUESTIONS"
    SET_ANSWER = "SET_ANSWER"
    NEXT_QUESTION = "NEXT_QUESTION"
    PREVIOUS_QUESTION = "PREVIOUS_QUESTION"
    GO_TO_QUESTION = "GO_TO_QUESTION"
    TICK_TIMER = "TICK_TIMER"
    SET_TIMER = "SET_TIMER"
    SUBMIT_QUIZ = "SUBMIT_QUIZ"
    RESET_QUIZ = "RESET_QUIZ"


class QuizAction(BaseModel):
    """
    Reducer input

    Payload by type:
        LOAD_QUESTIONS: List[QuizQuestion]
        SET_ANSWER: {"question_id": int, "selected_option": int}
        GO_TO_QUESTION: int (index)
        SET_TIMER: int (seconds)
        others: None
    """
    type: ActionType
    payload: Any = None


class QuizState(BaseModel):
    questions: List[QuizQuestion] = Field(default_factory=list)
    current_question_index: int = 0
    answers: Dict[int, int] = Field(default_factory=dict)   # question_id → selected option
    time_remaining: int = DEFAULT_TIME_LIMIT                 # seconds
    is_submitted: bool = False


def initial_state(time_limit: int = DEFAULT_TIME_LIMIT) -> QuizState:
    return QuizState(time_remaining=time_limit)


def _clamp_index(index: int, state: QuizState) -> int:
    return max(0, min(index, len(state.questions) - 1))


def quiz_reducer(state: QuizState, action: QuizAction) -> QuizState:
    """
    Apply one action

    Navigation is clamped to the loaded questions; the timer never goes
    below zero. Unknown action types leave the state unchanged.
    """
    kind = action.type

    if kind == ActionType.LOAD_QUESTIONS:
        return state.model_copy(update={
            "questions": list(action.payload or []),
            "current_question_index": 0,
            "answers": {},
            "is_submitted": False,
        })

    if kind == ActionType.SET_ANSWER:
        answers = dict(state.answers)
        answers[action.payload["question_id"]] = action.payload["selected_option"]
        return state.model_copy(update={"answers": answers})

    if kind == ActionType.NEXT_QUESTION:
        return state.model_copy(update={
            "current_question_index": min(state.current_question_index + 1, len(state.questions) - 1),
        })

    if kind == ActionType.PREVIOUS_QUESTION:
        return state.model_copy(update={
            "current_question_index": max(state.current_question_index - 1, 0),
        })

    if kind == ActionType.GO_TO_QUESTION:
        return state.model_copy(update={"current_question_index": _clamp_index(action.payload, state)})

    if kind == ActionType.TICK_TIMER:
        return state.model_copy(update={"time_remaining": max(0, state.time_remaining - 1)})

    if kind == ActionType.SET_TIMER:
        return state.model_copy(update={"time_remaining": action.payload})

    if kind == ActionType.SUBMIT_QUIZ:
        return state.model_copy(update={"is_submitted": True})

    if kind == ActionType.RESET_QUIZ:
        return QuizState(questions=list(state.questions))

    return state


# ---- Selectors ----

def current_question(state: QuizState) -> Optional[QuizQuestion]:
    if 0 <= state.current_question_index < len(state.questions):
        return state.questions[state.current_question_index]
    return None


def answered_count(state: QuizState) -> int:
    return len(state.answers)


def is_current_answered(state: QuizState) -> bool:
    question = current_question(state)
    return question is not None and question.id in state.answers


def timer_should_run(state: QuizState) -> bool:
    """Timer runs while questions are loaded, time is left and the quiz is open"""
    return bool(state.questions) and state.time_remaining > 0 and not state.is_submitted


def should_auto_submit(state: QuizState) -> bool:
    return bool(state.questions) and state.time_remaining == 0 and not state.is_submitted


def build_submission(state: QuizState) -> QuizSubmission:
    """
    One answer per loaded question, in question order

    Unanswered questions are submitted as option 0.
    """
    return QuizSubmission(answers=[
        UserAnswer(question_id=q.id, selected_option=state.answers.get(q.id, 0))
        for q in state.questions
    ])


def format_time(seconds: int) -> str:
    """
    >>> format_time(125)
    '02:05'
    """
    minutes, remaining = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remaining:02d}"


def time_level(seconds: int) -> str:
    """Display urgency of the countdown: critical (<=30s), low (<=60s) or normal"""
    if seconds <= CRITICAL_TIME_SECONDS:
        return "critical"
    if seconds <= LOW_TIME_SECONDS:
        return "low"
    return "normal"

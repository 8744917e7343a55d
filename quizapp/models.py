"""
Data models for the quiz server
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional


class WireModel(BaseModel):
    """Base model serialized with camelCase keys (questionId, correctAnswer, ...)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class QuizQuestion(WireModel):
    """Question as shown to a quiz-taker (no answer key)"""
    id: int
    text: str
    options: List[str]


class Question(WireModel):
    """Question with its answer key"""
    id: int
    text: str
    options: List[str]          # exactly four, label order A..D
    correct_answer: int         # index into options (0..3)

    def sanitized(self) -> QuizQuestion:
        return QuizQuestion(id=self.id, text=self.text, options=list(self.options))


class QuestionData(WireModel):
    """Question fields used to add or update a record"""
    text: str
    options: List[str]
    correct_answer: int


class UserAnswer(WireModel):
    question_id: int
    selected_option: int


class QuizSubmission(WireModel):
    answers: List[UserAnswer] = Field(default_factory=list)


class AnswerResult(WireModel):
    """Per-question breakdown of a scored submission"""
    question_id: int
    question: str
    selected_option: int
    correct_option: int
    is_correct: bool
    options: List[str]


class QuizResult(WireModel):
    score: int
    total_questions: int
    percentage: int
    answers: List[AnswerResult] = Field(default_factory=list)


class QuizConfig(BaseModel):
    """Runtime configuration (config/quiz.yaml)"""
    database_path: str = "quiz.db"
    time_limit: int = 600           # seconds
    seed_on_startup: bool = True
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    tick_interval: float = 1.0      # seconds between timer ticks
    api_url: Optional[str] = None   # default server for quiz-take

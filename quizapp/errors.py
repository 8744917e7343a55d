"""
Domain errors raised by the quiz core, storage and clients
"""


class QuizError(Exception):
    """Base class for quiz application errors"""


class QuestionNotFoundError(QuizError):
    def __init__(self, question_id):
        self.question_id = question_id
        super().__init__(f"Question with id {question_id} not found")


class InvalidQuestionError(QuizError, ValueError):
    """Question payload failed validation"""


class QuizClientError(QuizError):
    """A quiz backend could not load questions or accept a submission"""

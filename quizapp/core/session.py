"""
Timed quiz session

Owns one QuizState and drives it through quiz_reducer. A background
Countdown ticks the timer once per interval; when the countdown reaches zero
the session submits itself exactly once.
"""
import logging
import threading
from typing import Callable, Optional

from quizapp.core.quiz_state import (
    ActionType,
    DEFAULT_TIME_LIMIT,
    QuizAction,
    QuizState,
    build_submission,
    initial_state,
    quiz_reducer,
    should_auto_submit,
    timer_should_run,
)
from quizapp.errors import QuizClientError
from quizapp.models import QuizResult
from quizapp.services.quiz_backend import QuizBackend


logger = logging.getLogger(__name__)


class Countdown:
    """
    Calls `tick` every `interval` seconds on a daemon thread

    Stops when `tick` returns False or stop() is called.
    """

    def __init__(self, tick: Callable[[], bool], interval: float = 1.0):
        self.tick = tick
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="quiz-countdown", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self.interval + 1)

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            if not self.tick():
                break


class QuizSession:
    """
    One quiz attempt

    Args:
        backend: Where questions come from and answers go
        time_limit: Countdown length in seconds
        tick_interval: Seconds between timer ticks
        on_submit: Called with the QuizResult after a successful submission
    """

    def __init__(
        self,
        backend: QuizBackend,
        time_limit: int = DEFAULT_TIME_LIMIT,
        tick_interval: float = 1.0,
        on_submit: Optional[Callable[[QuizResult], None]] = None,
    ):
        self.backend = backend
        self.time_limit = time_limit
        self.tick_interval = tick_interval
        self.on_submit = on_submit

        self.state: QuizState = initial_state(time_limit)
        self.result: Optional[QuizResult] = None
        self.submit_error: Optional[Exception] = None

        self._lock = threading.RLock()
        self._submit_lock = threading.Lock()
        self._countdown: Optional[Countdown] = None

    def dispatch(self, action_type: ActionType, payload=None) -> QuizState:
        with self._lock:
            self.state = quiz_reducer(self.state, QuizAction(type=action_type, payload=payload))
            return self.state

    # ---- flow ----

    def load_questions(self) -> QuizState:
        questions = self.backend.fetch_questions()
        with self._lock:
            self.result = None
            self.submit_error = None
            self.dispatch(ActionType.LOAD_QUESTIONS, questions)
            state = self.dispatch(ActionType.SET_TIMER, self.time_limit)
        logger.info(f"Loaded {len(questions)} questions, {self.time_limit}s on the clock")
        return state

    def set_answer(self, question_id: int, selected_option: int) -> QuizState:
        return self.dispatch(
            ActionType.SET_ANSWER,
            {"question_id": question_id, "selected_option": selected_option},
        )

    def next_question(self) -> QuizState:
        return self.dispatch(ActionType.NEXT_QUESTION)

    def previous_question(self) -> QuizState:
        return self.dispatch(ActionType.PREVIOUS_QUESTION)

    def go_to_question(self, index: int) -> QuizState:
        return self.dispatch(ActionType.GO_TO_QUESTION, index)

    def reset(self) -> QuizState:
        self.stop_timer()
        with self._lock:
            self.result = None
            self.submit_error = None
            self.dispatch(ActionType.RESET_QUIZ)
            return self.dispatch(ActionType.SET_TIMER, self.time_limit)

    def submit(self) -> QuizResult:
        """
        Send the answers; a second call returns the stored result

        Raises:
            QuizClientError: If the backend rejects or cannot take the submission
        """
        with self._submit_lock:
            with self._lock:
                if self.state.is_submitted:
                    return self.result
                submission = build_submission(self.state)

            try:
                result = self.backend.submit(submission)
            except QuizClientError as e:
                self.submit_error = e
                logger.error(f"❌ Quiz submission failed: {e}")
                raise

            with self._lock:
                self.result = result
                self.submit_error = None
                self.dispatch(ActionType.SUBMIT_QUIZ)

        logger.info(f"✅ Quiz submitted: {result.score}/{result.total_questions} ({result.percentage}%)")
        if self.on_submit:
            self.on_submit(result)
        return result

    # ---- timer ----

    def tick(self) -> bool:
        """
        Advance the countdown by one step

        Returns:
            True while the timer should keep running
        """
        with self._lock:
            if not timer_should_run(self.state):
                return False
            self.dispatch(ActionType.TICK_TIMER)
            expired = should_auto_submit(self.state)

        if expired:
            logger.info("⏰ Time is up, submitting automatically")
            try:
                self.submit()
            except QuizClientError:
                # Kept on submit_error; the quiz-taker can retry manually
                return False

        return timer_should_run(self.state)

    def start_timer(self) -> None:
        if self._countdown is None or not self._countdown.running:
            self._countdown = Countdown(self.tick, self.tick_interval)
            self._countdown.start()

    def stop_timer(self) -> None:
        if self._countdown is not None:
            self._countdown.stop()
            self._countdown = None

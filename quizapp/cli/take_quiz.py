#!/usr/bin/env python3
"""
Take a timed quiz in the terminal

Uses a running server when --url is given, otherwise the local database.

Commands while answering:
  a-d       choose an option for the current question
  n / p     next / previous question
  g <num>   go to question number
  s         submit now
  q         quit without submitting
"""
import argparse
import logging
import sys
import threading
from typing import Callable, List, Optional

from quizapp.config import load_config
from quizapp.core.quiz_state import (
    answered_count,
    current_question,
    format_time,
    time_level,
)
from quizapp.core.session import QuizSession
from quizapp.db.store import QuestionStore
from quizapp.errors import QuizClientError
from quizapp.models import QuizResult
from quizapp.services.quiz_backend import HttpQuizBackend, LocalQuizBackend
from quizapp.utils import option_label


logger = logging.getLogger(__name__)

TIME_MARKERS = {"normal": "⏱️", "low": "⚠️", "critical": "🔥"}


def render_question(session: QuizSession) -> str:
    state = session.state
    question = current_question(state)
    if question is None:
        return "No questions available."

    marker = TIME_MARKERS[time_level(state.time_remaining)]
    lines = [
        f"\n{marker} {format_time(state.time_remaining)}   "
        f"Question {state.current_question_index + 1} of {len(state.questions)}   "
        f"({answered_count(state)} answered)",
        question.text,
    ]
    selected = state.answers.get(question.id)
    for i, option in enumerate(question.options):
        pointer = '>' if selected == i else ' '
        lines.append(f" {pointer} {option_label(i).lower()}) {option}")
    return "\n".join(lines)


def render_result(result: QuizResult) -> str:
    lines = [f"\n🏁 Score: {result.score}/{result.total_questions} ({result.percentage}%)\n"]
    for index, answer in enumerate(result.answers, start=1):
        mark = '✅' if answer.is_correct else '❌'
        lines.append(f"{mark} {index}. {answer.question}")
        lines.append(f"   Your answer: {answer.options[answer.selected_option]}")
        if not answer.is_correct:
            lines.append(f"   Correct answer: {answer.options[answer.correct_option]}")
    return "\n".join(lines)


def handle_command(session: QuizSession, line: str, output: Callable[[str], None] = print) -> bool:
    """
    Apply one typed command

    Returns:
        False when the quiz loop should stop (submitted or quit)
    """
    command = line.strip().lower()
    state = session.state
    question = current_question(state)

    if command == "q":
        return False
    if command == "s":
        try:
            session.submit()
        except QuizClientError as e:
            output(f"❌ {e}")
            return True
        return False
    if command == "n":
        session.next_question()
    elif command == "p":
        session.previous_question()
    elif command.startswith("g"):
        target = command[1:].strip()
        if target.isdigit():
            session.go_to_question(int(target) - 1)
        else:
            output("❌ Usage: g <question number>")
    elif len(command) == 1 and "a" <= command <= "d" and question is not None:
        session.set_answer(question.id, ord(command) - ord("a"))
        if state.current_question_index < len(state.questions) - 1:
            session.next_question()
    elif command:
        output("❌ Unknown command (a-d, n, p, g <num>, s, q)")
    return True


def run_quiz(
    session: QuizSession,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> Optional[QuizResult]:
    """Interactive loop; returns the result, or None if the quiz-taker quit"""
    session.load_questions()
    if not session.state.questions:
        output("No questions available.")
        return None

    # Auto-submit fires on the countdown thread while input_fn is blocked
    loop_thread = threading.current_thread()
    announced = threading.Event()
    previous_hook = session.on_submit

    def announce(result: QuizResult) -> None:
        if threading.current_thread() is not loop_thread:
            output("⏰ Time is up! Your answers were submitted automatically.")
            output(render_result(result))
            output("Press Enter to exit.")
            announced.set()
        if previous_hook:
            previous_hook(result)

    session.on_submit = announce
    session.start_timer()
    try:
        while not session.state.is_submitted:
            output(render_question(session))
            line = input_fn("> ")
            if session.state.is_submitted:
                break
            if not handle_command(session, line, output):
                break
    finally:
        session.stop_timer()
        session.on_submit = previous_hook

    if session.submit_error is not None and not session.state.is_submitted:
        output(f"❌ Quiz not submitted: {session.submit_error}")
    if session.result is not None and not announced.is_set():
        output(render_result(session.result))
    return session.result


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="quiz-take", description="Take the quiz in the terminal")
    parser.add_argument("--url", help="Quiz server base URL (default: use the local database)")
    parser.add_argument("--db", help="SQLite database path for local mode")
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--time-limit", type=int, help="Seconds on the clock")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    config = load_config(args.config)
    time_limit = args.time_limit or config.time_limit
    url = args.url or config.api_url

    store = None
    try:
        if url:
            backend = HttpQuizBackend(url)
        else:
            store = QuestionStore(args.db or config.database_path)
            backend = LocalQuizBackend(store)

        session = QuizSession(backend, time_limit=time_limit, tick_interval=config.tick_interval)
        result = run_quiz(session)
    except QuizClientError as e:
        print(f"❌ {e}")
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\n👋 Quiz abandoned")
        return 1
    finally:
        if store is not None:
            store.close()

    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(main())

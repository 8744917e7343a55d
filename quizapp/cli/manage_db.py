#!/usr/bin/env python3
"""
Question database management

Usage:
  quiz-db init            Create the schema and seed it if empty
  quiz-db add             Add a new question interactively
  quiz-db list            List all questions
  quiz-db update <id>     Update a question by ID
  quiz-db delete <id>     Delete a question by ID
  quiz-db count           Show total question count
  quiz-db clear           Clear all questions
  quiz-db help            Show this help message
"""
import argparse
import logging
import sys
from typing import List, Optional

from quizapp.config import load_config
from quizapp.core.scoring import NUM_OPTIONS
from quizapp.db.seed import seed_database
from quizapp.db.store import QuestionStore
from quizapp.models import QuestionData
from quizapp.utils import option_label


logger = logging.getLogger(__name__)

CLEAR_CONFIRMATION = "DELETE ALL"


# --------------------- prompts --------------------------

def prompt_text(message: str, default: Optional[str] = None) -> str:
    """Ask until a non-empty value is given; Enter returns default when set"""
    while True:
        value = input(message).strip()
        if value:
            return value
        if default is not None:
            return default
        print("❌ A value is required")


def prompt_answer_index(message: str, default: Optional[int] = None) -> int:
    while True:
        value = input(message).strip()
        if not value and default is not None:
            return default
        if value.isdigit() and int(value) < NUM_OPTIONS:
            return int(value)
        print(f"❌ Correct answer must be between 0 and {NUM_OPTIONS - 1}")


# --------------------- commands --------------------------

def cmd_init(store: QuestionStore, args) -> int:
    inserted = seed_database(store)
    if inserted:
        print(f"✅ Database initialized with {inserted} questions")
    else:
        print(f"✅ Database already initialized ({store.get_question_count()} questions)")
    return 0


def cmd_add(store: QuestionStore, args) -> int:
    text = prompt_text("Enter the question: ")
    options = [prompt_text(f"Enter option {option_label(i)}: ") for i in range(NUM_OPTIONS)]
    correct = prompt_answer_index(f"Enter correct answer (0-{NUM_OPTIONS - 1}): ")

    question_id = store.add_question(QuestionData(text=text, options=options, correct_answer=correct))
    print(f"✅ Question added successfully with ID: {question_id}")
    return 0


def cmd_list(store: QuestionStore, args) -> int:
    questions = store.get_all_questions()

    if not questions:
        print("No questions found in the database.")
        return 0

    print(f"\n📋 Found {len(questions)} questions:\n")
    for index, q in enumerate(questions, start=1):
        print(f"{index}. ID: {q.id}")
        print(f"   Question: {q.text}")
        for i, option in enumerate(q.options):
            marker = '✓' if i == q.correct_answer else ' '
            print(f"   {option_label(i)}: {option} {marker}")
        print("")
    return 0


def _parse_id(raw: Optional[str], action: str) -> Optional[int]:
    try:
        question_id = int(raw) if raw is not None else 0
    except ValueError:
        question_id = 0
    if question_id <= 0:
        print(f"❌ Please provide a question ID to {action}")
        print(f"Usage: quiz-db {action} <id>")
        return None
    return question_id


def cmd_update(store: QuestionStore, args) -> int:
    question_id = _parse_id(args.id, "update")
    if question_id is None:
        return 1

    existing = store.get_question(question_id)
    if existing is None:
        print(f"❌ Question with ID {question_id} not found")
        return 1

    print(f"\n📝 Updating question ID {question_id}:")
    print(f"Current: {existing.text}\n")

    text = prompt_text("Enter new question (or press Enter to keep current): ", default=existing.text)
    options = [
        prompt_text(
            f"Enter option {option_label(i)} (or press Enter to keep current): ",
            default=existing.options[i],
        )
        for i in range(NUM_OPTIONS)
    ]
    correct = prompt_answer_index(
        f"Enter correct answer (0-{NUM_OPTIONS - 1}, current: {existing.correct_answer}): ",
        default=existing.correct_answer,
    )

    if store.update_question(question_id, QuestionData(text=text, options=options, correct_answer=correct)):
        print(f"✅ Question {question_id} updated successfully")
        return 0

    print(f"❌ Failed to update question {question_id}")
    return 1


def cmd_delete(store: QuestionStore, args) -> int:
    question_id = _parse_id(args.id, "delete")
    if question_id is None:
        return 1

    question = store.get_question(question_id)
    if question is None:
        print(f"❌ Question with ID {question_id} not found")
        return 1

    print(f"\n🗑️  Deleting question ID {question_id}:")
    print(f"Question: {question.text}")

    confirm = input("Are you sure? (y/N): ").strip().lower()
    if confirm not in ("y", "yes"):
        print("❌ Deletion cancelled")
        return 0

    if store.delete_question(question_id):
        print(f"✅ Question {question_id} deleted successfully")
        return 0

    print(f"❌ Failed to delete question {question_id}")
    return 1


def cmd_count(store: QuestionStore, args) -> int:
    print(f"📊 Total questions in database: {store.get_question_count()}")
    return 0


def cmd_clear(store: QuestionStore, args) -> int:
    count = store.get_question_count()
    print(f"⚠️  This will delete all {count} questions from the database.")

    answer = input(f'Are you sure? Type "{CLEAR_CONFIRMATION}" to confirm: ')
    if answer.strip() != CLEAR_CONFIRMATION:
        print("❌ Clear operation cancelled")
        return 0

    store.clear_all_questions()
    store.reset_auto_increment()
    print("✅ All questions cleared successfully")
    return 0


COMMANDS = {
    "init": cmd_init,
    "add": cmd_add,
    "list": cmd_list,
    "update": cmd_update,
    "delete": cmd_delete,
    "count": cmd_count,
    "clear": cmd_clear,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-db",
        description="Manage the quiz question database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n  quiz-db add\n  quiz-db list\n  quiz-db update 1\n  quiz-db delete 5\n  quiz-db clear",
    )
    parser.add_argument("--db", help="SQLite database path (default: from config)")
    parser.add_argument("--config", help="Path to YAML config file")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("init", help="Create the schema and seed it if empty")
    sub.add_parser("add", help="Add a new question interactively")
    sub.add_parser("list", help="List all questions")
    update = sub.add_parser("update", help="Update a question by ID")
    update.add_argument("id", nargs="?")
    delete = sub.add_parser("delete", help="Delete a question by ID")
    delete.add_argument("id", nargs="?")
    sub.add_parser("count", help="Show total question count")
    sub.add_parser("clear", help="Clear all questions")
    sub.add_parser("help", help="Show this help message")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    parser = build_parser()
    args = parser.parse_args(argv)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        db_path = args.db or load_config(args.config).database_path
        with QuestionStore(db_path) as store:
            return handler(store, args)
    except (EOFError, KeyboardInterrupt):
        print("\n❌ Cancelled")
        return 1
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        print(f"❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

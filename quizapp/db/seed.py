"""
Seed question bank loader from CSV
"""
import csv
import logging
from pathlib import Path
from typing import List, Optional

from quizapp.db.store import QuestionStore
from quizapp.models import QuestionData


logger = logging.getLogger(__name__)

SEED_CSV = Path(__file__).resolve().parent.parent / "data" / "seed_questions.csv"

OPTION_COLUMNS = ("option_a", "option_b", "option_c", "option_d")


def load_seed_questions(csv_path: Optional[str] = None) -> List[QuestionData]:
    """
    Load seed questions from CSV file

    CSV format:
        text,option_a,option_b,option_c,option_d,correct_answer
        What is the capital of India?,Mumbai,Kolkata,New Delhi,Chennai,2

    Args:
        csv_path: Path to CSV file (bundled seed bank when omitted)

    Returns:
        List of QuestionData in file order

    Raises:
        FileNotFoundError: If CSV file not found
        ValueError: If a row has an empty field or an answer outside 0..3
    """
    path = Path(csv_path) if csv_path else SEED_CSV

    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")

    questions = []

    with open(path, 'r', encoding='utf-8', newline='') as f:
        reader = csv.DictReader(f)

        # Header is line 1
        for line_no, row in enumerate(reader, start=2):
            text = (row.get('text') or '').strip()
            options = [(row.get(col) or '').strip() for col in OPTION_COLUMNS]
            answer_str = (row.get('correct_answer') or '').strip()

            if not text or not all(options):
                raise ValueError(f"Line {line_no}: question text and all four options are required")

            if not answer_str.isdigit() or int(answer_str) > 3:
                raise ValueError(
                    f"Line {line_no}: correct_answer must be between 0 and 3, got {answer_str!r}"
                )

            questions.append(QuestionData(text=text, options=options, correct_answer=int(answer_str)))

    if not questions:
        raise ValueError(f"No questions loaded from {path}")

    return questions


def seed_database(store: QuestionStore, questions: Optional[List[QuestionData]] = None) -> int:
    """
    Insert the seed bank when the table is empty

    Returns:
        Number of questions inserted (0 if the store already had data)
    """
    if store.get_question_count() > 0:
        logger.info("Question store already populated, skipping seed")
        return 0

    if questions is None:
        questions = load_seed_questions()

    inserted = store.add_questions(questions)
    logger.info(f"✅ Seeded {inserted} questions into {store.database_path}")
    return inserted

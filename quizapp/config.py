"""
Configuration loader
"""
import os
import yaml
from pathlib import Path
from typing import Optional

from quizapp.models import QuizConfig


DEFAULT_CONFIG_PATH = "config/quiz.yaml"


def load_config(config_path: Optional[str] = None) -> QuizConfig:
    """
    Load configuration from YAML file

    Resolution order for the file:
        1. config_path argument
        2. QUIZ_CONFIG environment variable
        3. config/quiz.yaml (optional; defaults are used when absent)

    QUIZ_DB_PATH, when set, overrides database_path.

    Args:
        config_path: Path to config file

    Returns:
        QuizConfig object

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist
    """
    explicit = config_path or os.environ.get("QUIZ_CONFIG")
    path = Path(explicit or DEFAULT_CONFIG_PATH)

    data = {}
    if path.exists():
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    elif explicit:
        raise FileNotFoundError(f"Config file not found: {path}")

    db_override = os.environ.get("QUIZ_DB_PATH")
    if db_override:
        data['database_path'] = db_override

    return QuizConfig(**data)

"""Static metadata describing QuizPlayer."""

from pathlib import Path

APP_NAME = "QuizPlayer"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizPlayer lets you pick a quiz, answer one question at a time against the clock, "
    "and keeps a history of your scores."
)

DATA_DIRECTORY: Path = Path.home() / ".quiz_player"
DOCUMENT_STORE_PATH: Path = DATA_DIRECTORY / "documents.json"
SAMPLE_QUIZ_PATH: Path = Path(__file__).resolve().parent.parent / "data" / "sample_quiz.txt"

"""Utilities for importing quizzes from a human-friendly text file.

File format: an optional header followed by question blocks separated by blank
lines or '---'.

    TITLE: Quiz title
    DESCRIPTION: One line describing the quiz

    Q: Question text (supports markdown). Additional lines until the
       next marker are treated as part of the question.
    A: First option text
    B: Second option text
    C: Third option text   (between two and eight options, A-H)
    CORRECT: A|B|C|...

Example:

    TITLE: Arithmetic
    DESCRIPTION: Warm-up questions

    Q: What is $2 + 2$?
    A: 3
    B: 4
    CORRECT: B
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from quiz_player.constants.quiz_constants import MAX_OPTION_COUNT, MIN_OPTION_COUNT
from quiz_player.core.models import Question


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path | None
    title: str
    description: str
    questions: list[Question]


_OPTION_LETTERS = [chr(ord("A") + offset) for offset in range(MAX_OPTION_COUNT)]
_HEADER_KEYS = ("TITLE:", "DESCRIPTION:")


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    imported = parse_quiz_text(text, default_title=file_path.stem)
    imported.source_path = file_path
    return imported


def parse_quiz_text(text: str, default_title: str = "Untitled quiz") -> ImportedQuiz:
    title = default_title
    description = ""
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        upper = stripped.upper()
        if not blocks and not current_block and upper.startswith(_HEADER_KEYS):
            value = stripped.split(":", 1)[1].strip()
            if upper.startswith("TITLE:"):
                title = value or default_title
            else:
                description = value
            continue
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    questions = [_parse_block(block) for block in blocks if block]
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(source_path=None, title=title, description=description, questions=questions)


def _parse_block(block: str) -> Question:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letter: str | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letter = line.split(":", 1)[1].strip().upper()
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_LETTERS and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in _OPTION_LETTERS:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    if not question_lines:
        raise QuizImportError("Question text missing (Q: ...)")

    expected_letters = _OPTION_LETTERS[: len(options)]
    if len(options) < MIN_OPTION_COUNT or sorted(options) != expected_letters:
        raise QuizImportError(
            f"Each question must define at least {MIN_OPTION_COUNT} options labelled "
            "consecutively from A."
        )

    option_list = [options[letter].strip() for letter in expected_letters]
    if any(not opt for opt in option_list):
        raise QuizImportError("Option text cannot be empty.")

    if correct_letter is None:
        raise QuizImportError("CORRECT is required for every question.")
    if correct_letter not in expected_letters:
        raise QuizImportError(f"CORRECT must be one of {', '.join(expected_letters)}.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text cannot be empty.")

    return Question(
        question_text=question_text,
        options=tuple(option_list),
        correct_option_index=expected_letters.index(correct_letter),
    )

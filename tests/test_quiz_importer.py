from pathlib import Path

import pytest

from quiz_player.constants.about import SAMPLE_QUIZ_PATH
from quiz_player.core.quiz_importer import QuizImportError, load_quiz_from_file, parse_quiz_text

QUIZ_TEXT = """TITLE: Arithmetic
DESCRIPTION: Warm-up questions

Q: What is $2 + 2$?
A: 3
B: 4
CORRECT: B

---

Q: Which of these
   is prime?
A: 4
B: 6
C: 7
CORRECT: c
"""


def test_parses_header_and_questions():
    imported = parse_quiz_text(QUIZ_TEXT)

    assert imported.title == "Arithmetic"
    assert imported.description == "Warm-up questions"
    assert len(imported.questions) == 2
    first, second = imported.questions
    assert first.question_text == "What is $2 + 2$?"
    assert first.options == ("3", "4")
    assert first.correct_option_index == 1
    assert second.question_text == "Which of these\nis prime?"
    assert second.correct_option_index == 2


def test_title_defaults_when_header_missing():
    imported = parse_quiz_text("Q: Yes?\nA: yes\nB: no\nCORRECT: A\n", default_title="fallback")
    assert imported.title == "fallback"
    assert imported.description == ""


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "did not contain any questions"),
        ("Q: One option?\nA: only\nCORRECT: A\n", "at least 2 options"),
        ("Q: Gap?\nA: one\nC: three\nCORRECT: A\n", "consecutively"),
        ("Q: No answer?\nA: yes\nB: no\n", "CORRECT is required"),
        ("Q: Bad answer?\nA: yes\nB: no\nCORRECT: D\n", "CORRECT must be one of A, B"),
        ("Stray text\nQ: Huh?\nA: a\nB: b\nCORRECT: A\n", "outside of a known section"),
        ("A: yes\nB: no\nCORRECT: A\n", "Question text missing"),
    ],
)
def test_rejects_malformed_quizzes(text, message):
    with pytest.raises(QuizImportError, match=message):
        parse_quiz_text(text)


def test_load_from_file_uses_stem_as_default_title(tmp_path: Path):
    quiz_file = tmp_path / "capitals.txt"
    quiz_file.write_text("Q: Capital of France?\nA: Paris\nB: Rome\nCORRECT: A\n", encoding="utf-8")

    imported = load_quiz_from_file(quiz_file)

    assert imported.title == "capitals"
    assert imported.source_path == quiz_file
    assert imported.questions[0].options == ("Paris", "Rome")


def test_bundled_sample_quiz_is_valid():
    imported = load_quiz_from_file(SAMPLE_QUIZ_PATH)
    assert imported.title == "General Knowledge Warm-up"
    assert len(imported.questions) == 5

"""Per-question record of the option the user selected."""

from __future__ import annotations

from quiz_player.core.models import Quiz


class AnswerTracker:
    """Stores one selection (or ``None`` for unanswered) per question."""

    def __init__(self, quiz: Quiz) -> None:
        self._option_counts = [len(question.options) for question in quiz.questions]
        self._selections: list[int | None] = [None] * len(self._option_counts)
        self._frozen = False

    def __len__(self) -> int:
        return len(self._selections)

    def set(self, index: int, option_index: int) -> None:
        """Record a selection, replacing any earlier one for the same question."""
        if self._frozen:
            raise RuntimeError("Answers are frozen once the quiz is completed.")
        self._check_index(index)
        option_count = self._option_counts[index]
        if isinstance(option_index, bool) or not isinstance(option_index, int):
            raise ValueError("Option index must be an integer.")
        if not 0 <= option_index < option_count:
            raise ValueError(
                f"Option index {option_index} is out of range for question {index + 1} "
                f"({option_count} options)."
            )
        self._selections[index] = option_index

    def get(self, index: int) -> int | None:
        self._check_index(index)
        return self._selections[index]

    def is_answered(self, index: int) -> bool:
        return self.get(index) is not None

    def answers(self) -> list[int | None]:
        """Return a snapshot of all selections in question order."""
        return list(self._selections)

    def freeze(self) -> None:
        self._frozen = True

    def is_frozen(self) -> bool:
        return self._frozen

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._selections):
            raise IndexError(f"Question index {index} out of range")

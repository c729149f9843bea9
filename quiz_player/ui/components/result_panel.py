"""Component showing the outcome of a finished attempt."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from quiz_player.constants.ui_constants import (
    BUTTON_BACK_TO_LIST,
    RESULT_SUMMARY_TEMPLATE,
    RESULT_TITLE,
    SCORE_BAND_LABELS,
)
from quiz_player.core.models import AttemptResult, Quiz
from quiz_player.core.services.scoreboard import score_band
from quiz_player.ui.question_renderer import render_question_review


class ResultPanel(QWidget):
    """UI component for the final score and a per-question review."""

    def __init__(self, on_back: callable, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.on_back = on_back
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title_label = QLabel(RESULT_TITLE, self)
        title_label.setAlignment(Qt.AlignCenter)
        title_label.setStyleSheet("font-size: 18pt; font-weight: bold;")
        layout.addWidget(title_label)

        self.score_label = QLabel("", self)
        self.score_label.setAlignment(Qt.AlignCenter)
        self.score_label.setStyleSheet("font-size: 32pt; font-weight: bold;")
        layout.addWidget(self.score_label)

        self.summary_label = QLabel("", self)
        self.summary_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.summary_label)

        self.review_label = QLabel("", self)
        self.review_label.setTextFormat(Qt.RichText)
        self.review_label.setWordWrap(True)
        self.review_label.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        scroll_area = QScrollArea(self)
        scroll_area.setWidgetResizable(True)
        scroll_area.setWidget(self.review_label)
        layout.addWidget(scroll_area, stretch=1)

        self.back_button = QPushButton(BUTTON_BACK_TO_LIST, self)
        self.back_button.clicked.connect(lambda: self.on_back())
        layout.addWidget(self.back_button)

    def show_result(self, quiz: Quiz, result: AttemptResult) -> None:
        band = SCORE_BAND_LABELS[score_band(result.score).value]
        self.score_label.setText(f"{result.score}%")
        self.summary_label.setText(
            RESULT_SUMMARY_TEMPLATE.format(
                correct=result.correct_answers, total=result.total_questions
            )
            + f" | {band}"
        )
        self.review_label.setText(
            "".join(
                render_question_review(question, result.answers[index])
                for index, question in enumerate(quiz.questions)
            )
        )

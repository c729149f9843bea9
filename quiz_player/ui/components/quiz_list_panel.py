"""Component listing the available quizzes and the user's history."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_player.constants.ui_constants import (
    BUTTON_IMPORT,
    BUTTON_PLAY,
    BUTTON_REFRESH,
    HISTORY_TEMPLATE,
    LIST_EMPTY_STATE,
    LIST_TITLE,
    SCORE_BAND_LABELS,
)
from quiz_player.core.services.identity import IdentityProvider
from quiz_player.core.services.quiz_repository import QuizRepository
from quiz_player.core.services.scoreboard import Scoreboard, score_band
from quiz_player.ui.dialog_helpers import show_info


class QuizListPanel(QWidget):
    """UI component for picking a quiz to play."""

    def __init__(
        self,
        quiz_repository: QuizRepository,
        scoreboard: Scoreboard,
        identity_provider: IdentityProvider,
        on_play_quiz: callable,
        on_import_quiz: callable,
        parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.quiz_repository = quiz_repository
        self.scoreboard = scoreboard
        self.identity_provider = identity_provider
        self.on_play_quiz = on_play_quiz
        self.on_import_quiz = on_import_quiz

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title_label = QLabel(LIST_TITLE, self)
        title_label.setStyleSheet("font-size: 16pt; font-weight: bold;")
        layout.addWidget(title_label)

        self.quiz_list = QListWidget(self)
        self.quiz_list.setAlternatingRowColors(True)
        self.quiz_list.itemDoubleClicked.connect(lambda _item: self._handle_play_click())
        layout.addWidget(self.quiz_list, stretch=2)

        self.empty_label = QLabel(LIST_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        button_row = QHBoxLayout()
        self.play_button = QPushButton(BUTTON_PLAY, self)
        self.play_button.clicked.connect(self._handle_play_click)
        button_row.addWidget(self.play_button)

        self.import_button = QPushButton(BUTTON_IMPORT, self)
        self.import_button.clicked.connect(lambda: self.on_import_quiz())
        button_row.addWidget(self.import_button)

        self.refresh_button = QPushButton(BUTTON_REFRESH, self)
        self.refresh_button.clicked.connect(self.refresh)
        button_row.addWidget(self.refresh_button)
        layout.addLayout(button_row)

        self.history_label = QLabel("", self)
        layout.addWidget(self.history_label)

        self.history_list = QListWidget(self)
        layout.addWidget(self.history_list, stretch=1)

    def _handle_play_click(self) -> None:
        item = self.quiz_list.currentItem()
        if item is None:
            show_info(self, "No quiz selected", "Select a quiz from the list first.")
            return
        self.on_play_quiz(item.data(Qt.UserRole))

    def refresh(self) -> None:
        self.quiz_list.clear()
        quizzes = self.quiz_repository.list_quizzes()
        for quiz in quizzes:
            label = f"{quiz.title} ({quiz.question_count} questions)"
            if quiz.description:
                label += f"\n{quiz.description}"
            item = QListWidgetItem(label, self.quiz_list)
            item.setData(Qt.UserRole, quiz.id)
        self.empty_label.setVisible(not quizzes)
        self.play_button.setEnabled(bool(quizzes))
        self._refresh_history()

    def _refresh_history(self) -> None:
        user = self.identity_provider.current_user()
        results = self.scoreboard.results_for_user(user.user_id)
        overview = self.scoreboard.overview(user.user_id)
        self.history_label.setText(
            HISTORY_TEMPLATE.format(
                count=overview.completed_count,
                average=overview.average_score,
                excellent=overview.excellent_count,
            )
        )
        self.history_list.clear()
        for result in results:
            completed = result.completed_at.strftime("%Y-%m-%d %H:%M") if result.completed_at else "-"
            band = SCORE_BAND_LABELS[score_band(result.score).value]
            QListWidgetItem(
                f"{result.quiz_title}: {result.score}% ({result.correct_answers}/"
                f"{result.total_questions}) {band} | {completed}",
                self.history_list,
            )

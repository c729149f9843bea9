"""Component that presents the running quiz session."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_player.constants.ui_constants import (
    ANSWER_MISSING_HINT,
    ANSWER_SELECTED_HINT,
    BUTTON_FINISH,
    BUTTON_NEXT,
    QUESTION_PROGRESS_TEMPLATE,
    TIME_LEFT_TEMPLATE,
)
from quiz_player.core.quiz_session import QuizSessionController, SessionStateError
from quiz_player.ui.dialog_helpers import show_error
from quiz_player.ui.question_renderer import render_question_text


class PlayPanel(QWidget):
    """Shows one question at a time and forwards user input to the session."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._session: QuizSessionController | None = None
        self._option_buttons: list[QPushButton] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        header_row.addWidget(self.progress_label)
        header_row.addStretch()
        self.time_label = QLabel("", self)
        header_row.addWidget(self.time_label)
        layout.addLayout(header_row)

        self.question_progress = QProgressBar(self)
        self.question_progress.setTextVisible(False)
        layout.addWidget(self.question_progress)

        self.question_label = QLabel("", self)
        self.question_label.setWordWrap(True)
        self.question_label.setTextFormat(Qt.RichText)
        self.question_label.setStyleSheet("font-size: 14pt;")
        layout.addWidget(self.question_label)

        self.options_layout = QVBoxLayout()
        layout.addLayout(self.options_layout)
        self.option_group = QButtonGroup(self)
        self.option_group.setExclusive(True)
        self.option_group.idClicked.connect(self._handle_option_clicked)

        layout.addStretch()

        footer_row = QHBoxLayout()
        self.hint_label = QLabel(ANSWER_MISSING_HINT, self)
        footer_row.addWidget(self.hint_label)
        footer_row.addStretch()
        self.next_button = QPushButton(BUTTON_NEXT, self)
        self.next_button.setEnabled(False)
        self.next_button.clicked.connect(self._handle_next_clicked)
        footer_row.addWidget(self.next_button)
        layout.addLayout(footer_row)

    def bind_session(self, session: QuizSessionController) -> None:
        """Attach a new session; the previous one, if any, is detached."""
        self.unbind_session()
        self._session = session
        session.question_started.connect(self._display_question)
        session.time_changed.connect(self._update_time_label)
        session.answer_selected.connect(self._handle_answer_recorded)
        self.question_progress.setRange(0, session.question_count)

    def unbind_session(self) -> None:
        if self._session is None:
            return
        self._session.question_started.disconnect(self._display_question)
        self._session.time_changed.disconnect(self._update_time_label)
        self._session.answer_selected.disconnect(self._handle_answer_recorded)
        self._session = None

    def _display_question(self, question_index: int) -> None:
        if self._session is None:
            return
        question = self._session.current_question
        total = self._session.question_count
        self.progress_label.setText(
            QUESTION_PROGRESS_TEMPLATE.format(current=question_index + 1, total=total)
        )
        self.question_progress.setValue(question_index + 1)
        self.question_label.setText(render_question_text(question))
        self._rebuild_option_buttons(question.options)
        self._update_time_label(self._session.time_limit_seconds)
        self.next_button.setText(BUTTON_FINISH if self._session.is_last_question() else BUTTON_NEXT)
        self.next_button.setEnabled(False)
        self.hint_label.setText(ANSWER_MISSING_HINT)

    def _rebuild_option_buttons(self, options: tuple[str, ...]) -> None:
        for button in self._option_buttons:
            self.option_group.removeButton(button)
            self.options_layout.removeWidget(button)
            button.deleteLater()
        self._option_buttons = []
        for index, option in enumerate(options):
            button = QPushButton(f"{chr(ord('A') + index)}. {option}", self)
            button.setCheckable(True)
            self.option_group.addButton(button, index)
            self.options_layout.addWidget(button)
            self._option_buttons.append(button)

    def _update_time_label(self, remaining: int) -> None:
        self.time_label.setText(TIME_LEFT_TEMPLATE.format(seconds=remaining))

    def _handle_option_clicked(self, option_index: int) -> None:
        if self._session is None:
            return
        try:
            self._session.select_answer(option_index)
        except (SessionStateError, ValueError) as exc:
            show_error(self, "Answer not recorded", str(exc))

    def _handle_answer_recorded(self, _question_index: int, _option_index: int) -> None:
        self.next_button.setEnabled(True)
        self.hint_label.setText(ANSWER_SELECTED_HINT)

    def _handle_next_clicked(self) -> None:
        if self._session is None:
            return
        try:
            self._session.advance()
        except SessionStateError as exc:
            show_error(self, "Cannot continue", str(exc))

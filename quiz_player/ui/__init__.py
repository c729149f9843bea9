"""Qt UI components for the quiz player application."""

from .dialog_helpers import confirm_abandon_quiz, show_error, show_info
from .question_renderer import render_question_review, render_question_text
from .player_main_window import PlayerMainWindow

__all__ = [
    "PlayerMainWindow",
    "confirm_abandon_quiz",
    "render_question_review",
    "render_question_text",
    "show_error",
    "show_info",
]

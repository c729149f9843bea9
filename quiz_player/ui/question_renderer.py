"""Question rendering utilities for displaying quiz questions."""

from __future__ import annotations

from quiz_player.core.markdown_math_renderer import renderer
from quiz_player.core.models import Question

_CORRECT_STYLE = "background-color: #dcfce7; color: #166534;"
_WRONG_STYLE = "background-color: #fee2e2; color: #991b1b;"


def render_question_text(question: Question) -> str:
    """Render the question prompt as rich text for a QLabel."""
    return renderer.render_fragment(question.question_text)


def render_question_review(question: Question, selected_option: int | None) -> str:
    """Render a question with every option marked as correct, wrong or neutral.

    Args:
        question: The question to render
        selected_option: The option the user picked, or None if unanswered

    Returns:
        HTML fragment for the result screen
    """
    parts = [f"<h4>{renderer.render_inline(question.question_text)}</h4>", "<ul>"]
    for index, option in enumerate(question.options):
        text = renderer.render_inline(option)
        if index == question.correct_option_index:
            parts.append(f'<li style="{_CORRECT_STYLE}">{text} &#10003;</li>')
        elif index == selected_option:
            parts.append(f'<li style="{_WRONG_STYLE}">{text} &#10007;</li>')
        else:
            parts.append(f"<li>{text}</li>")
    parts.append("</ul>")
    if selected_option is None:
        parts.append("<p><em>Not answered in time.</em></p>")
    return "".join(parts)

"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "QuizPlayer"

LIST_TITLE: str = "Available Quizzes"
LIST_EMPTY_STATE: str = "No quizzes found. Import a quiz file to get started."
BUTTON_PLAY: str = "Play Quiz"
BUTTON_IMPORT: str = "Import Quiz"
BUTTON_REFRESH: str = "Refresh"
BUTTON_NEXT: str = "Next"
BUTTON_FINISH: str = "Finish"
BUTTON_BACK_TO_LIST: str = "Back to Quizzes"

IMPORT_DIALOG_TITLE: str = "Select quiz file"
IMPORT_FILE_FILTER: str = "Quiz files (*.txt);;All files (*.*)"

QUESTION_PROGRESS_TEMPLATE: str = "Question {current} of {total}"
TIME_LEFT_TEMPLATE: str = "Time: {seconds}s"
ANSWER_SELECTED_HINT: str = "Answer selected"
ANSWER_MISSING_HINT: str = "Select an answer"

RESULT_TITLE: str = "Quiz Complete!"
RESULT_SUMMARY_TEMPLATE: str = "You got {correct} of {total} questions right"
HISTORY_TEMPLATE: str = "{count} quizzes completed | average {average}% | {excellent} excellent (80%+)"
SCORE_BAND_LABELS: dict[str, str] = {
    "excellent": "Excellent",
    "good": "Good",
    "needs_improvement": "Needs improvement",
}

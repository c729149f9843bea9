"""Quiz-related constants shared across UI and core layers."""

DEFAULT_TIME_LIMIT_SECONDS: int = 30
TIMER_TICK_INTERVAL_MS: int = 1000

MIN_OPTION_COUNT: int = 2
MAX_OPTION_COUNT: int = 8

QUIZZES_COLLECTION: str = "quizzes"
RESULTS_COLLECTION: str = "results"

EXCELLENT_SCORE_THRESHOLD: int = 80
GOOD_SCORE_THRESHOLD: int = 60

"""Quiz-related constants shared across the core and API layers."""

QUIZ_CODE_ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
QUIZ_CODE_LENGTH: int = 6
MAX_CODE_ATTEMPTS: int = 1000

SHARE_QUERY_PARAM: str = "share"

OPTION_LETTERS: tuple[str, ...] = ("A", "B", "C", "D", "E", "F")
MIN_OPTION_COUNT: int = 2
DEFAULT_QUIZ_DIFFICULTY: str = "Mixed"

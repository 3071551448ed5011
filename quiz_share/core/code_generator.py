"""Utility for assigning short join codes to quizzes."""

from __future__ import annotations

from collections.abc import Container
import random
from threading import Lock

from quiz_share.constants.quiz_constants import (
    MAX_CODE_ATTEMPTS,
    QUIZ_CODE_ALPHABET,
    QUIZ_CODE_LENGTH,
)


class QuizCodeGenerator:
    """Produces random join codes that do not clash with codes already in use."""

    def __init__(
        self,
        alphabet: str = QUIZ_CODE_ALPHABET,
        length: int = QUIZ_CODE_LENGTH,
        seed: int | None = None,
    ):
        if not alphabet:
            raise ValueError("Code alphabet cannot be empty.")
        if length <= 0:
            raise ValueError("Code length must be a positive integer.")
        self._alphabet = alphabet
        self._length = length
        self._lock = Lock()
        self._rng = random.Random(seed)

    def next_code(self, existing: Container[str] = ()) -> str:
        with self._lock:
            for _ in range(MAX_CODE_ATTEMPTS):
                code = "".join(self._rng.choice(self._alphabet) for _ in range(self._length))
                if code not in existing:
                    return code
        raise RuntimeError("Could not find an unused quiz code.")

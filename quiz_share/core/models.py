"""Domain models for the quiz sharing core."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class QuizQuestion:
    """Multiple-choice question with lettered options ("A. ...", "B. ...")."""

    question: str
    options: list[str]
    answer: str  # Correct option letter, e.g. "B"
    difficulty: str
    marks: float


@dataclass(slots=True)
class Quiz:
    """A persisted quiz as handed out by the quiz repository."""

    id: int | str
    quiz_code: str
    topic: str
    difficulty: str
    timer_minutes: int
    questions: list[QuizQuestion]
    total_marks: float
    created_at: str
    is_archived: bool = False
    instructor_id: int | str | None = None


@dataclass(slots=True)
class QuizCreateRequest:
    """Quiz content without identity, used to create a new quiz.

    ``source_code`` and ``source_id`` carry the identity of the quiz a request
    was copied from (for example a decoded share token). They are hints only;
    the repository always assigns its own id and join code.
    """

    topic: str
    difficulty: str
    timer_minutes: int
    questions: list[QuizQuestion] = field(default_factory=list)
    total_marks: float | None = None
    source_code: str | None = None
    source_id: int | str | None = None


@dataclass(slots=True)
class ShareLink:
    """Payload for the share dialog: link, raw code, and the quiz topic."""

    url: str
    code: str
    topic: str

"""Utilities for importing quizzes from a pasted share code or share link.

Accepted input:

    * the raw share code shown in the instructor's share dialog, or
    * a full share link such as ``https://host/?share=<code>``.

Chat clients and form posts sometimes turn ``+`` into spaces; the codec puts
them back, so both forms survive that kind of mangling.

Architecture note:
    Decoded identity fields (id, join code, owner) are kept only as hints on
    the create request. The repository assigns fresh ones so an imported quiz
    never collides with, or takes over, the quiz it was shared from.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from urllib.parse import parse_qs, urlsplit

from quiz_share.constants.quiz_constants import SHARE_QUERY_PARAM
from quiz_share.core.models import Quiz, QuizCreateRequest
from quiz_share.core.share_codec import try_decode_quiz

logger = logging.getLogger(__name__)

INVALID_CODE_MESSAGE = "Invalid or corrupted share code. Please check the code and try again."


class QuizImportError(Exception):
    """Raised when a share code or link cannot be turned into a quiz."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for a decoded quiz and the code it came from."""

    token: str
    quiz: Quiz

    def to_create_request(self) -> QuizCreateRequest:
        return QuizCreateRequest(
            topic=self.quiz.topic,
            difficulty=self.quiz.difficulty,
            timer_minutes=self.quiz.timer_minutes,
            questions=[replace(q, options=list(q.options)) for q in self.quiz.questions],
            total_marks=self.quiz.total_marks,
            source_code=self.quiz.quiz_code,
            source_id=self.quiz.id,
        )


def load_quiz_from_token(raw: str) -> ImportedQuiz:
    token = extract_share_token(raw)
    result = try_decode_quiz(token)
    if result.quiz is None:
        logger.info("Rejected share code: %s", result.error)
        raise QuizImportError(INVALID_CODE_MESSAGE)
    if not result.quiz.questions:
        raise QuizImportError("Shared quiz does not contain any questions.")
    return ImportedQuiz(token=token, quiz=result.quiz)


def extract_share_token(raw: str) -> str:
    """Return the share code from a bare code or a link carrying one."""

    text = (raw or "").strip()
    if not text:
        raise QuizImportError("Please paste a share code or link.")
    if "://" not in text and "?" not in text:
        return text

    params = parse_qs(urlsplit(text).query)
    values = params.get(SHARE_QUERY_PARAM)
    if not values or not values[0].strip():
        raise QuizImportError(f"Link does not contain a '{SHARE_QUERY_PARAM}' parameter.")
    return values[0]

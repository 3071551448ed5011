"""Share-code codec: turns a whole quiz into a copy/paste friendly token.

Pipeline::

    Quiz -> JSON -> LZW compress -> URI-component escape -> Base64 -> token

Decoding runs the same steps backwards. Tokens carry no version marker, so a
change to the serialized layout makes older tokens undecodable.

Both directions report failure as ordinary return values: ``encode_quiz``
returns an empty string and ``try_decode_quiz`` returns a ``DecodeResult``
without a quiz. Nothing raised inside the pipeline reaches the caller.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
import json
import logging
from typing import Any
from urllib.parse import quote, unquote

from quiz_share.core import lzw_compressor
from quiz_share.core.models import Quiz, QuizQuestion

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides letters, digits and "-_.~".
_URI_COMPONENT_SAFE = "!*'()"

_QUIZ_FIELDS = (
    ("id", "id"),
    ("instructor_id", "instructorId"),
    ("topic", "topic"),
    ("difficulty", "difficulty"),
    ("timer_minutes", "timerMinutes"),
    ("questions", "questions"),
    ("quiz_code", "quizCode"),
    ("created_at", "createdAt"),
    ("total_marks", "totalMarks"),
    ("is_archived", "isArchived"),
)
_QUESTION_KEYS = ("question", "options", "answer", "difficulty", "marks")
_LINE_BREAKS = str.maketrans("", "", "\t\n\r\f")


class ShareCodecError(Exception):
    """Raised inside the codec when a quiz cannot be (de)serialized."""


@dataclass(slots=True)
class DecodeResult:
    """Outcome of decoding a share token."""

    quiz: Quiz | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.quiz is not None


def encode_quiz(quiz: Quiz) -> str:
    """Return the share token for ``quiz``, or ``""`` if encoding failed."""

    try:
        document = json.dumps(
            quiz_to_dict(quiz), ensure_ascii=True, allow_nan=False, separators=(",", ":")
        )
        compressed = lzw_compressor.compress(document)
        escaped = quote(compressed, safe=_URI_COMPONENT_SAFE, encoding="utf-8", errors="strict")
        return base64.b64encode(escaped.encode("ascii")).decode("ascii")
    except Exception:
        logger.exception("Failed to encode quiz %r", getattr(quiz, "quiz_code", None))
        return ""


def try_decode_quiz(token: str) -> DecodeResult:
    """Decode ``token`` into a quiz, reporting failures in the result."""

    if not isinstance(token, str) or not token.strip():
        return DecodeResult(error="Share code is empty.")

    # Transports that treat the token as form data turn "+" into spaces;
    # chat clients may also wrap a long code onto several lines.
    normalized = token.strip().replace(" ", "+").translate(_LINE_BREAKS)
    try:
        escaped = base64.b64decode(normalized, validate=True).decode("ascii")
        compressed = unquote(escaped, encoding="utf-8", errors="strict")
        document = lzw_compressor.decompress(compressed)
        quiz = quiz_from_dict(json.loads(document, parse_constant=_reject_constant))
    except (binascii.Error, UnicodeError, ValueError, ShareCodecError) as exc:
        logger.warning("Failed to decode share code: %s", exc)
        return DecodeResult(error=str(exc) or exc.__class__.__name__)
    except Exception as exc:  # e.g. RecursionError from pathologically nested JSON
        logger.warning("Unexpected error while decoding share code: %r", exc)
        return DecodeResult(error=exc.__class__.__name__)
    return DecodeResult(quiz=quiz)


def decode_quiz(token: str) -> Quiz | None:
    """Decode ``token``; ``None`` means the code was invalid or corrupted."""

    return try_decode_quiz(token).quiz


def quiz_to_dict(quiz: Quiz) -> dict[str, Any]:
    """Serialize a quiz into the JSON-ready share layout.

    The same checks as :func:`quiz_from_dict` run here, so any quiz that
    serializes also decodes back to an equal quiz.
    """

    missing = [
        attribute
        for attribute, _ in _QUIZ_FIELDS
        if attribute != "instructor_id" and getattr(quiz, attribute) is None
    ]
    if missing:
        raise ShareCodecError(f"Quiz is missing required fields: {', '.join(missing)}.")

    values = {attribute: getattr(quiz, attribute) for attribute, _ in _QUIZ_FIELDS}
    if not isinstance(values["questions"], list):
        raise ShareCodecError("Quiz questions must be a list.")
    _check_quiz(values)

    payload: dict[str, Any] = {}
    for attribute, key in _QUIZ_FIELDS:
        value = values[attribute]
        if attribute == "questions":
            value = [_question_to_dict(question) for question in value]
        payload[key] = value
    return payload


def quiz_from_dict(payload: Any) -> Quiz:
    """Rebuild a quiz from the share layout, rejecting incomplete data."""

    if not isinstance(payload, dict):
        raise ShareCodecError("Share payload is not an object.")
    missing = [key for _, key in _QUIZ_FIELDS if key not in payload]
    if missing:
        raise ShareCodecError(f"Share payload is missing: {', '.join(missing)}.")

    raw_questions = payload["questions"]
    if not isinstance(raw_questions, list):
        raise ShareCodecError("Share payload questions must be a list.")

    values = {attribute: payload[key] for attribute, key in _QUIZ_FIELDS}
    values["questions"] = [_question_from_dict(item) for item in raw_questions]
    _check_quiz(values)
    return Quiz(**values)


def _question_to_dict(question: QuizQuestion) -> dict[str, Any]:
    values = {key: getattr(question, key) for key in _QUESTION_KEYS}
    _check_question(values)
    values["options"] = list(values["options"])
    return values


def _question_from_dict(payload: Any) -> QuizQuestion:
    if not isinstance(payload, dict):
        raise ShareCodecError("Question entry is not an object.")
    missing = [key for key in _QUESTION_KEYS if key not in payload]
    if missing:
        raise ShareCodecError(f"Question entry is missing: {', '.join(missing)}.")

    values = {key: payload[key] for key in _QUESTION_KEYS}
    _check_question(values)
    return QuizQuestion(**values)


def _check_quiz(values: dict[str, Any]) -> None:
    _require(values, "id", (int, str))
    _require(values, "quiz_code", str)
    _require(values, "topic", str)
    _require(values, "difficulty", str)
    _require(values, "timer_minutes", int)
    _require(values, "total_marks", (int, float))
    _require(values, "created_at", str)
    _require(values, "is_archived", bool)
    if values["instructor_id"] is not None:
        _require(values, "instructor_id", (int, str))


def _check_question(values: dict[str, Any]) -> None:
    options = values["options"]
    if not isinstance(options, list) or not all(isinstance(option, str) for option in options):
        raise ShareCodecError("Question options must be a list of strings.")
    _require(values, "question", str)
    _require(values, "answer", str)
    _require(values, "difficulty", str)
    _require(values, "marks", (int, float))


def _require(values: dict[str, Any], name: str, expected: type | tuple[type, ...]) -> None:
    value = values[name]
    # bool is an int subclass; only accept it where a bool is asked for.
    if isinstance(value, bool) and expected is not bool:
        raise ShareCodecError(f"Field '{name}' has an invalid type.")
    if not isinstance(value, expected):
        raise ShareCodecError(f"Field '{name}' has an invalid type.")


def _reject_constant(name: str) -> Any:
    raise ShareCodecError(f"Share payload contains non-JSON number {name}.")

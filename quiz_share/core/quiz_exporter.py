"""Utilities for exporting quizzes as share codes and share links."""

from __future__ import annotations

import logging
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from quiz_share.constants.quiz_constants import SHARE_QUERY_PARAM
from quiz_share.core.models import Quiz, ShareLink
from quiz_share.core.share_codec import encode_quiz

logger = logging.getLogger(__name__)


class QuizShareError(Exception):
    """Raised when a share code cannot be generated for a quiz."""


def build_share_link(quiz: Quiz, base_url: str) -> ShareLink:
    """Encode ``quiz`` and return the link plus raw code shown to the instructor."""

    token = encode_quiz(quiz)
    if not token:
        raise QuizShareError("Couldn't generate share code.")
    logger.info("Generated share code for quiz %s (%d chars)", quiz.quiz_code, len(token))
    return ShareLink(url=build_share_url(base_url, token), code=token, topic=quiz.topic)


def build_share_url(base_url: str, token: str) -> str:
    """Attach ``token`` to ``base_url`` as the share query parameter."""

    parts = urlsplit(base_url)
    query = [(key, value) for key, value in parse_qsl(parts.query) if key != SHARE_QUERY_PARAM]
    query.append((SHARE_QUERY_PARAM, token))
    return urlunsplit(parts._replace(query=urlencode(query)))

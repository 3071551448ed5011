"""Business logic for quiz sharing shared between the API and the app."""

from __future__ import annotations

import logging
from threading import Lock

from quiz_share.core.models import Quiz, QuizCreateRequest, ShareLink
from quiz_share.core.quiz_exporter import build_share_link
from quiz_share.core.quiz_importer import load_quiz_from_token
from quiz_share.core.services.quiz_repository import QuizRepository

logger = logging.getLogger(__name__)


class QuizManager:
    """Facade over the quiz repository and the share code exporter/importer."""

    def __init__(self, repository: QuizRepository | None = None) -> None:
        self._lock = Lock()
        self._repository = repository or QuizRepository()

    # --- Quiz Repository Delegation ---

    def create_quiz(self, instructor_id: int | str, request: QuizCreateRequest) -> Quiz:
        with self._lock:
            return self._repository.create_quiz(instructor_id, request)

    def get_quiz_by_code(self, code: str) -> Quiz | None:
        with self._lock:
            return self._repository.get_by_code(code)

    def list_instructor_quizzes(self, instructor_id: int | str) -> list[Quiz]:
        with self._lock:
            return self._repository.list_by_instructor(instructor_id)

    def archive_quiz(self, quiz_id: int, archived: bool = True) -> Quiz:
        with self._lock:
            return self._repository.set_archived(quiz_id, archived)

    def duplicate_quiz(self, quiz_id: int) -> Quiz:
        with self._lock:
            return self._repository.duplicate_quiz(quiz_id)

    # --- Sharing ---

    def share_quiz(self, code: str, base_url: str) -> ShareLink:
        with self._lock:
            quiz = self._repository.get_by_code(code)
        if quiz is None:
            raise KeyError(f"No quiz with code {code!r}")
        return build_share_link(quiz, base_url)

    def preview_shared_quiz(self, raw: str) -> Quiz:
        """Decode a pasted code or link without storing anything."""
        return load_quiz_from_token(raw).quiz

    def import_shared_quiz(self, raw: str, instructor_id: int | str) -> Quiz:
        """Create a new quiz owned by ``instructor_id`` from a share code or link."""
        imported = load_quiz_from_token(raw)
        with self._lock:
            quiz = self._repository.create_quiz(instructor_id, imported.to_create_request())
        logger.info(
            "Imported shared quiz %s as %s for instructor %s",
            imported.quiz.quiz_code,
            quiz.quiz_code,
            instructor_id,
        )
        return quiz

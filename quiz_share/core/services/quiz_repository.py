"""Service for storing quizzes and assigning their identity."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from quiz_share.constants.quiz_constants import MIN_OPTION_COUNT, OPTION_LETTERS
from quiz_share.core.code_generator import QuizCodeGenerator
from quiz_share.core.models import Quiz, QuizCreateRequest, QuizQuestion


class QuizRepository:
    """In-memory quiz store keyed by id and join code."""

    def __init__(self, code_generator: QuizCodeGenerator | None = None) -> None:
        self._quizzes: dict[int, Quiz] = {}
        self._ids_by_code: dict[str, int] = {}
        self._quiz_counter: int = 0
        self._code_generator = code_generator or QuizCodeGenerator()

    def create_quiz(self, instructor_id: int | str, request: QuizCreateRequest) -> Quiz:
        """Validate ``request`` and store it as a new quiz owned by ``instructor_id``."""
        topic = request.topic.strip()
        if not topic:
            raise ValueError("Quiz topic must not be empty.")
        if request.timer_minutes <= 0:
            raise ValueError("Timer must be a positive number of minutes.")
        if not request.questions:
            raise ValueError("Quiz must contain at least one question.")

        questions = [self._prepare_question(q) for q in request.questions]
        quiz = Quiz(
            id=self._next_quiz_id(),
            quiz_code=self._code_generator.next_code(self._ids_by_code),
            topic=topic,
            difficulty=request.difficulty,
            timer_minutes=request.timer_minutes,
            questions=questions,
            total_marks=round(sum(q.marks for q in questions), 2),
            created_at=datetime.now(timezone.utc).isoformat(),
            is_archived=False,
            instructor_id=instructor_id,
        )
        self._store(quiz)
        return quiz

    def get_by_code(self, code: str) -> Quiz | None:
        quiz_id = self._ids_by_code.get(code.strip().upper())
        if quiz_id is None:
            return None
        return self._quizzes[quiz_id]

    def get_by_id(self, quiz_id: int) -> Quiz:
        try:
            return self._quizzes[quiz_id]
        except KeyError:
            raise KeyError(f"Quiz {quiz_id} does not exist") from None

    def list_by_instructor(self, instructor_id: int | str) -> list[Quiz]:
        return [quiz for quiz in self._quizzes.values() if quiz.instructor_id == instructor_id]

    def set_archived(self, quiz_id: int, archived: bool) -> Quiz:
        updated = replace(self.get_by_id(quiz_id), is_archived=archived)
        self._quizzes[quiz_id] = updated
        return updated

    def duplicate_quiz(self, quiz_id: int) -> Quiz:
        """Copy an existing quiz under a new id and code for the same owner."""
        source = self.get_by_id(quiz_id)
        request = QuizCreateRequest(
            topic=f"{source.topic} (Copy)",
            difficulty=source.difficulty,
            timer_minutes=source.timer_minutes,
            questions=[replace(q, options=list(q.options)) for q in source.questions],
            source_code=source.quiz_code,
            source_id=source.id,
        )
        return self.create_quiz(source.instructor_id, request)

    def __len__(self) -> int:
        return len(self._quizzes)

    def _store(self, quiz: Quiz) -> None:
        self._quizzes[quiz.id] = quiz
        self._ids_by_code[quiz.quiz_code] = quiz.id

    def _next_quiz_id(self) -> int:
        self._quiz_counter += 1
        return self._quiz_counter

    def _prepare_question(self, question: QuizQuestion) -> QuizQuestion:
        """Validate and normalize a question before storage."""
        cleaned_text = question.question.strip()
        if not cleaned_text:
            raise ValueError("Question text must not be empty.")

        options = self._validate_options(question.options)
        answer = question.answer.strip().upper()
        if answer not in OPTION_LETTERS[: len(options)]:
            raise ValueError(f"Answer '{question.answer}' does not match any option.")

        if isinstance(question.marks, bool) or not isinstance(question.marks, (int, float)):
            raise ValueError("Marks must be a number.")
        if question.marks < 0:
            raise ValueError("Marks must not be negative.")

        return QuizQuestion(
            question=cleaned_text,
            options=options,
            answer=answer,
            difficulty=question.difficulty,
            marks=round(question.marks, 2),
        )

    @staticmethod
    def _validate_options(options: list[str]) -> list[str]:
        if not MIN_OPTION_COUNT <= len(options) <= len(OPTION_LETTERS):
            raise ValueError(
                f"Each question must have between {MIN_OPTION_COUNT} and {len(OPTION_LETTERS)} options."
            )
        cleaned = [option.strip() for option in options]
        if any(not option for option in cleaned):
            raise ValueError("Option text cannot be empty.")
        return cleaned

"""FastAPI server that exposes quiz sharing endpoints."""

from __future__ import annotations

from html import escape
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field
import uvicorn

from quiz_share.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION
from quiz_share.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT, PUBLIC_BASE_URL
from quiz_share.constants.quiz_constants import DEFAULT_QUIZ_DIFFICULTY, SHARE_QUERY_PARAM
from quiz_share.core.markdown_math_renderer import renderer
from quiz_share.core.models import Quiz, QuizCreateRequest, QuizQuestion
from quiz_share.core.quiz_exporter import QuizShareError
from quiz_share.core.quiz_importer import QuizImportError
from quiz_share.core.quiz_manager import QuizManager


class QuestionPayload(BaseModel):
    """Payload schema for a single multiple-choice question."""

    question: str
    options: list[str]
    answer: str
    difficulty: str = "Medium"
    marks: float = Field(default=1, ge=0)


class QuizPayload(BaseModel):
    """Payload schema for creating a quiz."""

    instructor_id: int | str
    topic: str
    difficulty: str = DEFAULT_QUIZ_DIFFICULTY
    timer_minutes: int = Field(gt=0)
    questions: list[QuestionPayload]


class ImportPayload(BaseModel):
    """Payload schema for importing a pasted share code or link."""

    share: str
    instructor_id: int | str


def _quiz_to_response(quiz: Quiz, include_html: bool = False) -> dict[str, object]:
    questions: list[dict[str, object]] = []
    for number, question in enumerate(quiz.questions, start=1):
        entry: dict[str, object] = {
            "question": question.question,
            "options": list(question.options),
            "answer": question.answer,
            "difficulty": question.difficulty,
            "marks": question.marks,
        }
        if include_html:
            entry["question_html"] = renderer.render_question(number, question)
        questions.append(entry)
    return {
        "id": quiz.id,
        "instructor_id": quiz.instructor_id,
        "quiz_code": quiz.quiz_code,
        "topic": quiz.topic,
        "difficulty": quiz.difficulty,
        "timer_minutes": quiz.timer_minutes,
        "total_marks": quiz.total_marks,
        "created_at": quiz.created_at,
        "is_archived": quiz.is_archived,
        "questions": questions,
    }


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: QuizManager, base_url: str = PUBLIC_BASE_URL) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""

    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.get("/", response_class=HTMLResponse)
    def serve_landing_page(
        share: str | None = Query(default=None, alias=SHARE_QUERY_PARAM),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> str:
        if share is None:
            body = f"<h1>{APP_NAME}</h1><p>{escape(APP_ABOUT_TEXT)}</p>"
            return renderer.wrap_with_mathjax(body, title=APP_NAME)
        try:
            quiz = manager.preview_shared_quiz(share)
        except QuizImportError as exc:
            body = f'<h1>{APP_NAME}</h1><p class="error">{escape(str(exc))}</p>'
            return renderer.wrap_with_mathjax(body, title=APP_NAME)
        return renderer.wrap_with_mathjax(renderer.render_quiz_preview(quiz), title=quiz.topic)

    @app.post("/api/quizzes", status_code=201)
    def create_quiz(
        payload: QuizPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        request = QuizCreateRequest(
            topic=payload.topic,
            difficulty=payload.difficulty,
            timer_minutes=payload.timer_minutes,
            questions=[QuizQuestion(**question.model_dump()) for question in payload.questions],
        )
        try:
            quiz = manager.create_quiz(payload.instructor_id, request)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _quiz_to_response(quiz)

    @app.get("/api/quizzes/code/{code}")
    def get_quiz_by_code(
        code: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        quiz = manager.get_quiz_by_code(code)
        if quiz is None:
            raise HTTPException(status_code=404, detail="Quiz not found.")
        return _quiz_to_response(quiz)

    @app.get("/api/quizzes/instructor/{instructor_id}")
    def list_instructor_quizzes(
        instructor_id: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[dict[str, object]]:
        quizzes = manager.list_instructor_quizzes(instructor_id)
        if not quizzes and instructor_id.isdigit():
            quizzes = manager.list_instructor_quizzes(int(instructor_id))
        return [_quiz_to_response(quiz) for quiz in quizzes]

    @app.post("/api/quizzes/{quiz_id}/archive")
    def archive_quiz(
        quiz_id: int,
        archived: bool = True,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            quiz = manager.archive_quiz(quiz_id, archived)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Quiz not found.") from exc
        return _quiz_to_response(quiz)

    @app.post("/api/quizzes/{quiz_id}/duplicate", status_code=201)
    def duplicate_quiz(
        quiz_id: int,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            quiz = manager.duplicate_quiz(quiz_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Quiz not found.") from exc
        return _quiz_to_response(quiz)

    @app.get("/api/quizzes/code/{code}/share")
    def share_quiz(
        code: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            link = manager.share_quiz(code, base_url)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Quiz not found.") from exc
        except QuizShareError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return {"url": link.url, "code": link.code, "topic": link.topic}

    @app.get("/api/share/preview")
    def preview_shared_quiz(
        share: str = Query(alias=SHARE_QUERY_PARAM),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            quiz = manager.preview_shared_quiz(share)
        except QuizImportError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _quiz_to_response(quiz, include_html=True)

    @app.post("/api/share/import", status_code=201)
    def import_shared_quiz(
        payload: ImportPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            quiz = manager.import_shared_quiz(payload.share, payload.instructor_id)
        except QuizImportError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _quiz_to_response(quiz)

    return app


def start_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    base_url: str = PUBLIC_BASE_URL,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""

    server = _build_server(quiz_manager, host, port, base_url)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizShareApiServer", daemon=True)
    thread.start()
    return thread


def run_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    base_url: str = PUBLIC_BASE_URL,
) -> None:
    """Run the FastAPI server in the current thread until it is stopped."""

    _build_server(quiz_manager, host, port, base_url).run()


def _build_server(quiz_manager: QuizManager, host: str, port: int, base_url: str) -> uvicorn.Server:
    app = create_api_app(quiz_manager, base_url=base_url)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    return uvicorn.Server(config)

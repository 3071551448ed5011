"""
Pytest fixtures shared by the quiz sharing tests.
"""
import pytest
from fastapi.testclient import TestClient

from quiz_share.core.code_generator import QuizCodeGenerator
from quiz_share.core.models import Quiz, QuizCreateRequest, QuizQuestion
from quiz_share.core.quiz_manager import QuizManager
from quiz_share.core.services.quiz_repository import QuizRepository
from quiz_share.server.api_server import create_api_app

BASE_URL = "http://quiz.example/"


@pytest.fixture
def cell_biology_quiz():
    """The single-question quiz used throughout the sharing scenarios."""
    return Quiz(
        id=42,
        quiz_code="AB12CD",
        topic="Cell Biology",
        difficulty="Mixed",
        timer_minutes=10,
        questions=[
            QuizQuestion(
                question="What is the powerhouse of the cell?",
                options=["A. Nucleus", "B. Mitochondria", "C. Ribosome", "D. Golgi"],
                answer="B",
                difficulty="Easy",
                marks=20,
            )
        ],
        total_marks=20,
        created_at="2024-05-01T09:30:00+00:00",
        is_archived=False,
        instructor_id=7,
    )


@pytest.fixture
def multi_question_quiz():
    """A longer quiz with fractional marks and repeated wording."""
    questions = [
        QuizQuestion(
            question=f"Question {n}: which organelle matches clue #{n}?",
            options=[
                f"A. Option {n}-a",
                f"B. Option {n}-b",
                f"C. Option {n}-c",
                f"D. Option {n}-d",
            ],
            answer="ABCD"[n % 4],
            difficulty=("Easy", "Medium", "Hard")[n % 3],
            marks=1.33,
        )
        for n in range(1, 16)
    ]
    return Quiz(
        id="quiz-9",
        quiz_code="ZZ99XY",
        topic="Organelles review",
        difficulty="Mixed",
        timer_minutes=25,
        questions=questions,
        total_marks=19.95,
        created_at="2024-06-12T14:00:00.000Z",
        is_archived=True,
        instructor_id=None,
    )


@pytest.fixture
def create_request():
    return QuizCreateRequest(
        topic="Photosynthesis",
        difficulty="Mixed",
        timer_minutes=5,
        questions=[
            QuizQuestion(
                question="Where does photosynthesis happen?",
                options=["A. Chloroplast", "B. Nucleus", "C. Vacuole", "D. Cell wall"],
                answer="A",
                difficulty="Easy",
                marks=2.5,
            ),
            QuizQuestion(
                question="Which gas is released?",
                options=["A. CO2", "B. O2", "C. N2", "D. H2"],
                answer="b",
                difficulty="Medium",
                marks=2.5,
            ),
        ],
    )


@pytest.fixture
def repository():
    return QuizRepository(code_generator=QuizCodeGenerator(seed=1234))


@pytest.fixture
def manager(repository):
    return QuizManager(repository=repository)


@pytest.fixture
def client(manager):
    return TestClient(create_api_app(manager, base_url=BASE_URL))

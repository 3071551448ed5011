"""Static metadata describing QuizShare."""

APP_NAME = "QuizShare"
APP_VERSION = "0.1"
APP_ABOUT_TEXT = (
    "QuizShare is a classroom quiz service. Instructors share whole quizzes as a "
    "compact code or link, and students import them on any device."
)

"""Markdown + LaTeX rendering for previews of shared quizzes.

Question and option text is stored as markdown that may contain ``$...$``
math. The renderer only produces HTML; MathJax typesets the math in the
browser, so previews look the same as the quiz-taking page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from markdown_it import MarkdownIt

from quiz_share.core.models import Quiz, QuizQuestion

_MATHJAX_SCRIPT = (
    "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"
)


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments or full documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line (an option label) without a wrapping paragraph."""

        return self._markdown.renderInline(markdown_text.strip())

    def render_question(self, number: int, question: QuizQuestion) -> str:
        options = "".join(f"<li>{self.render_inline(option)}</li>" for option in question.options)
        return (
            f'<section class="question"><h3>Question {number}</h3>'
            f"{self.render_fragment(question.question)}"
            f'<ul class="options">{options}</ul>'
            f'<p class="meta">{escape(question.difficulty)} &middot; {question.marks:g} marks</p>'
            "</section>"
        )

    def render_quiz_preview(self, quiz: Quiz) -> str:
        """Render the body of a preview page; correct answers are not shown."""

        questions = "".join(
            self.render_question(index, question)
            for index, question in enumerate(quiz.questions, start=1)
        )
        return (
            f"<h2>{escape(quiz.topic)}</h2>"
            f'<p class="meta">{len(quiz.questions)} questions &middot; '
            f"{quiz.timer_minutes} minutes &middot; {quiz.total_marks:g} marks</p>"
            f"{questions}"
        )

    def wrap_with_mathjax(self, body_html: str, title: str = "QuizShare") -> str:
        """Wrap a fragment inside a minimal HTML document that loads MathJax."""

        return f"""<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>{escape(title)}</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1.5rem; background: #0b1120; color: #f5f7ff; }}
      .question {{ background: #111a30; border-radius: 0.75rem; padding: 1rem 1.5rem; margin-bottom: 1rem; }}
      .meta {{ color: #94a3b8; font-size: 0.95rem; }}
      .error {{ color: #f87171; }}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }}, svg: {{ fontCache: 'global' }} }};
    </script>
    <script defer src=\"{_MATHJAX_SCRIPT}\"></script>
  </head>
  <body>
    {body_html}
  </body>
</html>"""


renderer = MarkdownMathRenderer()
# Shared instance; MarkdownIt is safe to reuse for read-only renders.

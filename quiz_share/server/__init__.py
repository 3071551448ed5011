"""HTTP surface for sharing and importing quizzes."""

from .api_server import create_api_app, run_api_server, start_api_server

__all__ = ["create_api_app", "run_api_server", "start_api_server"]

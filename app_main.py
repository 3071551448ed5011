"""Application entry point for the QuizShare service."""

from __future__ import annotations

import socket

from quiz_share.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quiz_share.core.quiz_manager import QuizManager
from quiz_share.server.api_server import run_api_server
from quiz_share.utils.logging_config import configure_logging


def _determine_public_url(port: int) -> str:
    """Best-effort determination of the local IP for share links."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Initialize logging and serve the sharing API until interrupted."""
    logger = configure_logging()
    public_url = _determine_public_url(DEFAULT_PORT)
    logger.info("Starting QuizShare; share links will point at %s", public_url)

    run_api_server(
        quiz_manager=QuizManager(),
        host=DEFAULT_HOST,
        port=DEFAULT_PORT,
        base_url=public_url,
    )


if __name__ == "__main__":
    main()

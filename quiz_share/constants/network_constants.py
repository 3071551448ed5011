"""Network configuration constants for the quiz sharing service."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
PUBLIC_BASE_URL: str = f"http://localhost:{DEFAULT_PORT}/"

"""Network configuration constants for the quiz web bridge."""

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000
SESSION_COOKIE_NAME: str = "swipequiz_session"
SESSION_COOKIE_MAX_AGE_SECONDS: int = 60 * 60 * 2

"""Static metadata describing SwipeQuiz."""

APP_NAME = "SwipeQuiz"
APP_VERSION = "0.1"
APP_ABOUT_TEXT = (
    "SwipeQuiz asks a short series of yes/no questions and ranks the "
    "programming languages that best match your answers."
)

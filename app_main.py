"""Application entry point for SwipeQuiz."""

from __future__ import annotations

import sys

from swipe_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from swipe_quiz.constants.quiz_constants import DEFAULT_CATALOG_PATH
from swipe_quiz.core.catalog_importer import CatalogImportError, load_catalog_from_file
from swipe_quiz.core.quiz_engine import QuizEngine
from swipe_quiz.server.api_server import start_api_server
from swipe_quiz.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, load the catalog and serve the quiz page."""
    logger = configure_logging()
    logger.info("Starting SwipeQuiz…")

    try:
        imported = load_catalog_from_file(DEFAULT_CATALOG_PATH)
    except CatalogImportError as exc:
        logger.error("Unable to load catalog: %s", exc)
        sys.exit(1)

    engine = QuizEngine(catalog=imported.repository)
    server_thread = start_api_server(engine=engine, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("Quiz page available at http://%s:%d/", DEFAULT_HOST, DEFAULT_PORT)

    try:
        server_thread.join()
    except KeyboardInterrupt:
        logger.info("Shutting down SwipeQuiz.")


if __name__ == "__main__":
    main()

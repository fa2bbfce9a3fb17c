"""FastAPI server that exposes the swipe quiz to a browser."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel
import uvicorn

from swipe_quiz.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION
from swipe_quiz.constants.network_constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    SESSION_COOKIE_MAX_AGE_SECONDS,
    SESSION_COOKIE_NAME,
)
from swipe_quiz.core.markdown_renderer import renderer
from swipe_quiz.core.models import Language, Question, RankedMatch
from swipe_quiz.core.quiz_engine import QuizEngine, UnknownSessionError
from swipe_quiz.core.services.quiz_session import IncompleteSessionError, QuizSessionError

_QUIZ_PAGE_HTML = """<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>SwipeQuiz</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #0b1120; color: #f5f7ff; }
      body { margin: 0; padding: 1.5rem; display: flex; flex-direction: column; gap: 1rem; align-items: center; }
      .card { background: linear-gradient(135deg, #2c3e50, #4ca1af); border-radius: 1rem; padding: 2rem; width: min(28rem, 100%); min-height: 12rem; box-shadow: 0 0.5rem 1.5rem rgba(0, 0, 0, 0.4); }
      .hidden { display: none; }
      .actions { display: flex; gap: 1rem; }
      .swipe-button { border: none; border-radius: 999px; width: 4rem; height: 4rem; font-size: 1.5rem; color: #fff; cursor: pointer; }
      .swipe-button:disabled { opacity: 0.5; cursor: not-allowed; }
      #no-button { background: #dc143c; }
      #star-button { background: #f5b301; }
      #yes-button { background: #1f9aa5; }
      #progress { color: #94a3b8; }
      .match { padding: 0.5rem 0; border-bottom: 1px solid rgba(255, 255, 255, 0.15); }
      .match-header { display: flex; justify-content: space-between; }
      .match-description { color: #cbd5e1; font-size: 0.9rem; }
      .match a { color: #f5f7ff; }
      .primary-button { border: none; border-radius: 0.75rem; padding: 0.85rem 1.5rem; font-size: 1rem; background: #1f9aa5; color: #fff; cursor: pointer; }
    </style>
  </head>
  <body>
    <p id=\"progress\"></p>
    <section class=\"card\" id=\"question-card\"><div id=\"question-container\">Loading…</div></section>
    <div class=\"actions\" id=\"actions\">
      <button id=\"no-button\" class=\"swipe-button\" title=\"No\">✗</button>
      <button id=\"star-button\" class=\"swipe-button\" title=\"Love it\">★</button>
      <button id=\"yes-button\" class=\"swipe-button\" title=\"Yes\">✓</button>
    </div>
    <section class=\"card hidden\" id=\"results-card\">
      <h2 id=\"results-title\"></h2>
      <div id=\"results-container\"></div>
      <button id=\"retry-button\" class=\"primary-button\">Try again</button>
    </section>
    <script>
      const questionContainer = document.getElementById('question-container');
      const questionCard = document.getElementById('question-card');
      const actions = document.getElementById('actions');
      const progressEl = document.getElementById('progress');
      const resultsCard = document.getElementById('results-card');
      const resultsTitle = document.getElementById('results-title');
      const resultsContainer = document.getElementById('results-container');
      const buttons = document.querySelectorAll('.swipe-button');
      let currentQuestionId = null;

      function setVisibility(element, isVisible) {
        if (isVisible) {
          element.classList.remove('hidden');
        } else {
          element.classList.add('hidden');
        }
      }

      function setButtonsEnabled(enabled) {
        buttons.forEach(btn => (btn.disabled = !enabled));
      }

      function showCard(payload) {
        progressEl.textContent = `${payload.answered} / ${payload.total}`;
        if (!payload.question) {
          currentQuestionId = null;
          questionContainer.textContent = 'Calculating your matches…';
          return false;
        }
        currentQuestionId = payload.question.id;
        questionContainer.innerHTML = payload.question.text_html;
        setButtonsEnabled(true);
        return true;
      }

      async function startQuiz() {
        setVisibility(resultsCard, false);
        setVisibility(questionCard, true);
        setVisibility(actions, true);
        const response = await fetch('/quiz', { method: 'POST', headers: { 'Content-Type': 'application/json' }, body: '{}' });
        showCard(await response.json());
      }

      function describeError(body) {
        const detail = body && body.detail;
        if (!detail) return 'Something went wrong.';
        return typeof detail === 'string' ? detail : detail.message || 'Something went wrong.';
      }

      async function swipe(direction) {
        if (currentQuestionId === null) return;
        setButtonsEnabled(false);
        const response = await fetch('/quiz/swipe', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ direction, question_id: currentQuestionId })
        });
        const body = await response.json().catch(() => ({}));
        if (!response.ok) {
          questionContainer.textContent = describeError(body);
          setButtonsEnabled(true);
          return;
        }
        if (!showCard(body)) {
          await finishQuiz();
        }
      }

      async function finishQuiz() {
        const finishResponse = await fetch('/quiz/finish', { method: 'POST' });
        if (!finishResponse.ok) {
          const finishBody = await finishResponse.json().catch(() => ({}));
          questionContainer.textContent = describeError(finishBody);
          return;
        }
        const response = await fetch('/quiz/results');
        const body = await response.json().catch(() => ({}));
        if (!response.ok) {
          questionContainer.textContent = describeError(body);
          return;
        }
        setVisibility(questionCard, false);
        setVisibility(actions, false);
        setVisibility(resultsCard, true);
        resultsContainer.innerHTML = '';
        if (body.matches.length === 0) {
          resultsTitle.textContent = 'No match found. Try answering differently!';
        } else {
          resultsTitle.textContent = `Your top ${body.matches.length} matches:`;
        }
        body.matches.forEach(match => {
          const row = document.createElement('div');
          row.className = 'match';
          const header = document.createElement('div');
          header.className = 'match-header';
          const link = document.createElement('a');
          link.href = match.url;
          link.target = '_blank';
          link.textContent = match.name;
          const score = document.createElement('span');
          score.textContent = `${match.percentage}%`;
          header.appendChild(link);
          header.appendChild(score);
          const description = document.createElement('div');
          description.className = 'match-description';
          description.innerHTML = match.description_html;
          row.appendChild(header);
          row.appendChild(description);
          resultsContainer.appendChild(row);
        });
      }

      document.getElementById('no-button').addEventListener('click', () => swipe('reject'));
      document.getElementById('star-button').addEventListener('click', () => swipe('star'));
      document.getElementById('yes-button').addEventListener('click', () => swipe('accept'));
      document.getElementById('retry-button').addEventListener('click', startQuiz);
      startQuiz();
    </script>
  </body>
</html>
"""


class StartPayload(BaseModel):
    """Payload schema for starting a quiz."""

    seed: int | None = None


class SwipePayload(BaseModel):
    """Payload schema for a single swipe."""

    direction: str
    question_id: int | None = None


def _get_engine_dependency(engine: QuizEngine):
    def dependency() -> QuizEngine:
        return engine

    return dependency


def _require_session_id(request: Request, engine: QuizEngine) -> str:
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    if not engine.has_session(session_id):
        raise HTTPException(status_code=404, detail="No active quiz session. Start a new quiz.")
    return session_id


def _serialize_question(question: Question | None, engine: QuizEngine) -> dict[str, object] | None:
    if question is None:
        return None
    return {
        "id": question.id,
        "text": question.text,
        "text_html": renderer.render_prompt(question.text),
        "trait": question.trait,
        "trait_label": engine.get_catalog().trait_label(question.trait),
        "icon": question.icon_name,
    }


def _serialize_language(language: Language) -> dict[str, object]:
    return {
        "id": language.id,
        "name": language.name,
        "description": language.description,
        "description_html": renderer.render_description(language.description),
        "url": language.url,
        "traits": dict(language.traits),
    }


def _serialize_matches(matches: list[RankedMatch]) -> list[dict[str, object]]:
    return [{"language_id": match.language_id, "percentage": match.percentage} for match in matches]


def _card_payload(session_id: str, engine: QuizEngine) -> dict[str, object]:
    progress = engine.get_progress(session_id)
    return {
        "question": _serialize_question(engine.get_current_question(session_id), engine),
        "answered": progress.answered,
        "total": progress.total,
        "state": progress.state.name.lower(),
    }


def create_api_app(engine: QuizEngine) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz engine."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION, description=APP_ABOUT_TEXT)
    engine_dep = _get_engine_dependency(engine)

    @app.get("/", response_class=HTMLResponse)
    def serve_quiz_page() -> str:
        return _QUIZ_PAGE_HTML

    @app.post("/quiz", status_code=201)
    def start_quiz(
        response: Response,
        request: Request,
        payload: StartPayload | None = None,
        manager: QuizEngine = Depends(engine_dep),
    ) -> dict[str, object]:
        previous = request.cookies.get(SESSION_COOKIE_NAME)
        if previous:
            manager.abandon_quiz(previous)
        session_id = manager.start_quiz(seed=payload.seed if payload else None)
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value=session_id,
            max_age=SESSION_COOKIE_MAX_AGE_SECONDS,
            samesite="lax",
            httponly=True,
        )
        return {"session_id": session_id, **_card_payload(session_id, manager)}

    @app.get("/quiz/card")
    def get_card(request: Request, manager: QuizEngine = Depends(engine_dep)) -> dict[str, object]:
        session_id = _require_session_id(request, manager)
        return _card_payload(session_id, manager)

    @app.post("/quiz/swipe")
    def swipe(
        payload: SwipePayload,
        request: Request,
        manager: QuizEngine = Depends(engine_dep),
    ) -> dict[str, object]:
        session_id = _require_session_id(request, manager)
        try:
            manager.record_swipe(session_id, payload.direction, payload.question_id)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except QuizSessionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _card_payload(session_id, manager)

    @app.post("/quiz/finish")
    def finish(request: Request, manager: QuizEngine = Depends(engine_dep)) -> dict[str, object]:
        session_id = _require_session_id(request, manager)
        try:
            results = manager.finish(session_id)
        except IncompleteSessionError as exc:
            raise HTTPException(
                status_code=409,
                detail={"message": str(exc), "answered": exc.answered, "total": exc.total},
            ) from exc
        except QuizSessionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {"results": _serialize_matches(results)}

    @app.get("/quiz/results")
    def get_results(request: Request, manager: QuizEngine = Depends(engine_dep)) -> dict[str, object]:
        session_id = _require_session_id(request, manager)
        if manager.get_results(session_id) is None:
            raise HTTPException(status_code=409, detail="Quiz has not been finished yet.")
        matches = manager.get_display_results(session_id)
        return {
            "matches": [
                {**_serialize_language(match.language), "percentage": match.percentage}
                for match in matches
            ]
        }

    @app.delete("/quiz", status_code=204)
    def abandon_quiz(request: Request, response: Response, manager: QuizEngine = Depends(engine_dep)) -> None:
        session_id = request.cookies.get(SESSION_COOKIE_NAME)
        if session_id:
            manager.abandon_quiz(session_id)
        response.delete_cookie(SESSION_COOKIE_NAME)

    @app.get("/languages/{language_id}")
    def get_language(language_id: str, manager: QuizEngine = Depends(engine_dep)) -> dict[str, object]:
        try:
            language = manager.get_language(language_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"Unknown language: {language_id}") from exc
        return _serialize_language(language)

    @app.exception_handler(UnknownSessionError)
    def handle_unknown_session(request: Request, exc: UnknownSessionError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.args[0] if exc.args else "Unknown session"})

    return app


def start_api_server(
    engine: QuizEngine,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(engine)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="SwipeQuizApiServer", daemon=True)
    thread.start()
    return thread

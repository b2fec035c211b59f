import logging
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import daily
from .leaderboard import compute_leaderboard
from .models import (
    ErrorResponse,
    GuessRequest,
    GuessResponse,
    LeaderboardResponse,
    MaskedArticleResponse,
)
from .puzzle import build_masked_article, check_guess

logger = logging.getLogger(__name__)

# Pydantic error types meaning "no usable word field at all"
_MISSING_WORD_ERRORS = {
    "missing",
    "string_type",
    "string_too_short",
    "model_attributes_type",
    "dict_type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Warm today's document so the first player does not wait on Wikipedia
    try:
        document = await daily.get_daily_document()
        logger.info("[api] Today's article ready (%s).", document.date.isoformat())
    except daily.DocumentUnavailable as exc:
        logger.warning("[api] Could not preload today's article (%s).", exc)
    yield


app = FastAPI(lifespan=lifespan)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(RequestValidationError)
async def _on_validation_error(request: Request, exc: RequestValidationError):
    types = {err.get("type") for err in exc.errors()}
    if "json_invalid" in types:
        return _error(400, "Requête invalide")
    if types & _MISSING_WORD_ERRORS:
        return _error(400, "Mot manquant")
    return _error(400, "Mot invalide")


@app.exception_handler(daily.DocumentUnavailable)
async def _on_document_unavailable(request: Request, exc: daily.DocumentUnavailable):
    logger.error("[api] %s %s failed: %s", request.method, request.url.path, exc)
    return _error(500, str(exc))


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.get("/api/game", response_model=MaskedArticleResponse)
async def get_game():
    """Return the masked structure of today's article. No letters are sent."""
    document = await daily.get_daily_document()
    return MaskedArticleResponse.model_validate(asdict(build_masked_article(document)))


@app.post("/api/game/guess", response_model=GuessResponse)
async def post_guess(body: GuessRequest):
    document = await daily.get_daily_document()
    return GuessResponse.model_validate(asdict(check_guess(body.word, document)))


@app.get("/api/leaderboard", response_model=LeaderboardResponse)
def get_leaderboard():
    try:
        rows = daily.load_result_rows()
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.error("[api] Could not load results: %s", exc)
        return _error(500, "Erreur lors du calcul du classement")
    categories = [asdict(category) for category in compute_leaderboard(rows)]
    return LeaderboardResponse.model_validate({"categories": categories})

# curiosity_service/main.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from curiosity_service.config import settings
from curiosity_service.errors import CuriosityError, ValidationError
from curiosity_service.graphs.vector_graph import run_vector_pipeline
from curiosity_service.logging import setup_logging
from curiosity_service.models.discovery import (
    DiscoveryRecord,
    GenerateVectorsRequest,
    GenerateVectorsResponse,
    Mode,
)

# Initialize logging early
setup_logging()
logger = logging.getLogger("curiosity_service.main")

WEB = Path(__file__).resolve().parent / "web"
# autoescape is on for .html: model text never reaches the page unescaped
templates = Jinja2Templates(directory=str(WEB / "templates"))

app = FastAPI(title=settings.SERVICE_NAME, version="0.1.0")
app.mount("/static", StaticFiles(directory=str(WEB / "static")), name="static")

MODE_LABELS = {
    Mode.STANDARD: "Standard",
    Mode.STRANGER_DANGER: "Stranger Danger",
    Mode.COLLISION: "Collision",
}


def _resolve_api_key(header_key: Optional[str]) -> str:
    key = (header_key or "").strip() or (settings.GEMINI_API_KEY or "").strip()
    if not key:
        raise ValidationError("Please configure your Gemini API Key in Settings first.")
    return key


async def _generate(req: GenerateVectorsRequest, x_api_key: Optional[str]) -> GenerateVectorsResponse:
    api_key = _resolve_api_key(x_api_key)
    vectors = await run_vector_pipeline(req.input, req.mode, api_key=api_key)
    return GenerateVectorsResponse(
        mode=Mode.coerce(req.mode),
        model_id=settings.GEMINI_MODEL_ID,
        vectors=vectors,
    )


@app.exception_handler(CuriosityError)
async def curiosity_error_handler(request: Request, exc: CuriosityError):
    if isinstance(exc, ValidationError):
        logger.warning("vectors.request.invalid", extra={"error_message": exc.message})
    else:
        logger.error(
            "vectors.generate.failed",
            extra={"error_type": type(exc).__name__, "error_message": exc.message},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"type": type(exc).__name__, "message": exc.message}},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies answer in the same envelope as ValidationError."""
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    message = ("Invalid request: " + "; ".join(problems)) if problems else "Invalid request"
    return await curiosity_error_handler(request, ValidationError(message))


@app.get("/healthz")
async def health():
    return {"status": "ok", "service": settings.SERVICE_NAME}


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {"modes": MODE_LABELS, "has_default_key": bool(settings.GEMINI_API_KEY)},
    )


@app.post("/vectors", response_model=GenerateVectorsResponse)
async def generate_vectors(req: GenerateVectorsRequest, x_api_key: Optional[str] = Header(default=None)):
    return await _generate(req, x_api_key)


@app.post("/vectors/cards", response_class=HTMLResponse)
async def generate_vector_cards(
    request: Request,
    req: GenerateVectorsRequest,
    x_api_key: Optional[str] = Header(default=None),
):
    """Same as POST /vectors, rendered as the card grid fragment the page swaps in."""
    result = await _generate(req, x_api_key)
    return render_cards(request, result.vectors)


def render_cards(request: Request, vectors: list[DiscoveryRecord]):
    return templates.TemplateResponse(request, "_vectors.html", {"vectors": vectors})


if __name__ == "__main__":
    uvicorn.run(
        "curiosity_service.main:app",
        host="127.0.0.1",
        port=int(settings.SERVICE_PORT),
        log_level=settings.LOG_LEVEL.lower(),
    )

"""FastAPI relay in front of the Gemini text generation API.

Endpoints:
- GET /health
- POST /api/generate  { "message": "...", "conversationHistory": [{"role": "...", "content": "..."}] }
"""
from __future__ import annotations
import logging
import time

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from component_relay.common.config import Settings
from component_relay.common.sanitize import strip_code_fences
from component_relay.common.schema import (
    ErrorResponse,
    GenerationRequest,
    GenerationResponse,
    HealthResponse,
)
from component_relay.common.templates import render_prompt
from component_relay.serve.gemini_client import GeminiClient, TextGenerator

LOGGER = logging.getLogger("component_relay.serve.app")

MESSAGE_REQUIRED = "Message is required"
GENERATION_FAILED = "Failed to generate code"
INVALID_HISTORY = "Invalid conversation history"


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map body validation errors to a 400 ErrorResponse."""
    errs = exc.errors()
    for err in errs:
        loc = tuple(err.get("loc", ()))
        if loc[1:2] != ("conversationHistory",):
            return _error(400, MESSAGE_REQUIRED)
    details = errs[0].get("msg") if errs else None
    return _error(400, INVALID_HISTORY, details)


def get_generator(request: Request) -> TextGenerator:
    return request.app.state.generator


def create_app(settings: Settings | None = None, generator: TextGenerator | None = None) -> FastAPI:
    """
    Build the relay application.

    Args:
        settings: Runtime settings; read from the environment when omitted.
        generator: Backend used for generation; a GeminiClient built from
            settings when omitted.
    """
    settings = settings or Settings.from_env()
    app = FastAPI(title="component-relay")
    app.state.generator = generator or GeminiClient.from_settings(settings)
    app.add_exception_handler(RequestValidationError, _request_validation_error)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _log_requests(request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        LOGGER.info(
            "%s %s -> %s (%sms)",
            request.method,
            request.url.path,
            response.status_code,
            int((time.time() - start) * 1000),
        )
        return response

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse()

    @app.post(
        "/api/generate",
        response_model=GenerationResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def generate(
        body: GenerationRequest | None = None,
        generator: TextGenerator = Depends(get_generator),
    ):
        if body is None or not body.message:
            return _error(400, MESSAGE_REQUIRED)

        prompt = render_prompt(body.message, body.conversationHistory)
        LOGGER.info(
            "Generating | history_turns=%s prompt_chars=%s",
            len(body.conversationHistory),
            len(prompt),
        )
        try:
            raw = generator.generate(prompt)
        except Exception as e:
            LOGGER.exception("Generation failed: %s", e)
            return _error(500, GENERATION_FAILED, str(e))

        return GenerationResponse(code=strip_code_fences(raw))

    return app

# legal_assistant/main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.concurrency import run_in_threadpool

from .config import Settings
from .errors import (
    INTERNAL_ERROR_MESSAGE,
    AssistantError,
    MissingField,
    UnsupportedInput,
    UpstreamFailure,
)
from .generator import Generator
from .render import render_markdown
from .schemas import AskRequest, AskResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_generator(request: Request) -> Generator:
    return request.app.state.generator


@router.get("/", include_in_schema=False)
def index(settings: Settings = Depends(get_settings)):
    return FileResponse(settings.index_html_path, media_type="text/html")


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post(
    "/ask",
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ask(req: AskRequest, generator: Generator = Depends(get_generator)):
    # Картинки не поддерживаются; проверка идёт раньше проверки вопроса
    if req.image_url:
        raise UnsupportedInput()
    if not req.question:
        raise MissingField()

    try:
        raw_answer = await run_in_threadpool(generator.ask, req.question)
        answer = render_markdown(raw_answer)
    except Exception as e:
        logger.exception("Error calling the completion API")
        raise UpstreamFailure() from e

    return AskResponse(answer=answer)


# обработчики ошибок #

async def _assistant_error(request: Request, exc: AssistantError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Тело не читается как AskRequest: вопроса нет. imageUrl по-прежнему важнее.
    body = exc.body
    err = UnsupportedInput() if isinstance(body, dict) and body.get("imageUrl") else MissingField()
    return await _assistant_error(request, err)


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("An unexpected error occurred", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


async def _catch_unhandled(request: Request, call_next):
    # Ответ 500 собирается внутри CORSMiddleware, чтобы браузер получил CORS-заголовки
    try:
        return await call_next(request)
    except Exception as exc:
        return await _unhandled_error(request, exc)


def create_app(settings: Optional[Settings] = None, generator: Optional[Generator] = None) -> FastAPI:
    """
    Собирает приложение. Клиент Groq создаётся здесь один раз и передаётся
    в обработчики через app.state; без GROQ_API_KEY падаем с ConfigurationError.
    """
    settings = settings or Settings()
    if generator is None:
        generator = Generator(
            url=settings.groq_api_url,
            key=settings.require_api_key(),
            model=settings.groq_model,
            timeout=settings.request_timeout_sec,
        )

    app = FastAPI(title="Legal AI Assistant", version="1.0")
    app.state.settings = settings
    app.state.generator = generator

    # Порядок важен: добавленный позже middleware оборачивает предыдущий
    app.middleware("http")(_catch_unhandled)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AssistantError, _assistant_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unhandled_error)

    app.include_router(router)
    return app

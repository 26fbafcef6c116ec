# errors.py
from __future__ import annotations

INTERNAL_ERROR_MESSAGE = "An internal server error occurred."


class AssistantError(Exception):
    """Ошибка уровня запроса: отдаётся клиенту как {"error": message}."""

    status_code: int = 500
    message: str = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingField(AssistantError):
    status_code = 400
    message = "A question is required."


class UnsupportedInput(AssistantError):
    status_code = 400
    message = "Image processing is not supported."


class UpstreamFailure(AssistantError):
    # Причина логируется на сервере, наружу уходит только общий текст
    status_code = 500
    message = "Failed to get a response from the AI."


class CompletionError(Exception):
    """Ответ API chat completions нельзя использовать (HTTP-ошибка, кривой JSON)."""


class ConfigurationError(RuntimeError):
    """Фатальная ошибка конфигурации при старте."""

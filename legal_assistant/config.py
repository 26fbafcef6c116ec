# config.py
# Совместимо с Python 3.10+ и Pydantic v2 / pydantic-settings v2

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

DEFAULT_INDEX_HTML = Path(__file__).resolve().parent / "static" / "index.html"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    """
    Единая конфигурация приложения.
    - Значения читаются из переменных окружения и файла .env (если он есть).
    - Объект можно создать без GROQ_API_KEY (например, в тестах), но сервер
      без ключа не стартует: см. require_api_key().
    """

    # Ключ Groq. Обязателен для запуска сервера.
    # Переменная окружения: GROQ_API_KEY
    groq_api_key: Optional[str] = None

    # OpenAI-совместимый эндпоинт chat completions
    # Переменная окружения: GROQ_API_URL
    groq_api_url: str = Field(
        default="https://api.groq.com/openai/v1/chat/completions"
    )

    # Быстрая модель Llama 3.1
    # Переменная окружения: GROQ_MODEL
    groq_model: str = Field(default="llama-3.1-8b-instant")

    # Таймаут HTTP-запроса к Groq (сек). None — без явного таймаута.
    # Переменная окружения: REQUEST_TIMEOUT_SEC
    request_timeout_sec: Optional[float] = None

    # === Сервисные параметры ===
    # Переменные окружения: HOST, PORT, LOG_LEVEL
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: LogLevel = Field(default="INFO")

    # Переменная окружения: CORS_ORIGINS (JSON-список)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Страница фронтенда, отдаётся на GET /
    # Переменная окружения: INDEX_HTML_PATH
    index_html_path: Path = Field(default=DEFAULT_INDEX_HTML)

    # Настройки загрузки из .env, игнор лишних переменных
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        # LOG_LEVEL=debug тоже допустим
        return v.upper() if isinstance(v, str) else v

    def require_api_key(self) -> str:
        """Ключ обязателен: без него сервер не должен принимать запросы."""
        key = (self.groq_api_key or "").strip()
        if not key:
            raise ConfigurationError(
                "FATAL ERROR: GROQ_API_KEY environment variable is not set."
            )
        return key

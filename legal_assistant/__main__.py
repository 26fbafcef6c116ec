# legal_assistant/__main__.py
# Запуск: python -m legal_assistant  (или консольная команда legal-assistant)
from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from pydantic import ValidationError

from .config import Settings
from .errors import ConfigurationError
from .main import create_app

logger = logging.getLogger("legal_assistant")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main(settings: Optional[Settings] = None) -> None:
    if settings is None:
        try:
            settings = Settings()
        except ValidationError as e:
            # Кривые переменные окружения (PORT, LOG_LEVEL, ...) — тоже фатально
            logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
            logger.critical("FATAL ERROR: invalid configuration:\n%s", e)
            sys.exit(1)

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    # Проверка до старта: без ключа порт не открываем
    try:
        app = create_app(settings)
    except ConfigurationError as e:
        logger.critical("%s", e)
        sys.exit(1)

    logger.info("Server is running on http://localhost:%s", settings.port)
    logger.info("Your Legal AI Assistant is ready!")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()

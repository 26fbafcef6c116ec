# legal_assistant/generator.py
from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional

import requests

from .errors import CompletionError

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a helpful legal assistant. Provide clear, concise, and accurate "
    "information. Your answers should be in the same language as the user's "
    "question (English, French, or Arabic)."
)


def build_messages(question: str) -> List[Dict[str, str]]:
    """Ровно два сообщения: персона + вопрос пользователя как есть. Истории нет."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": question},
    ]


def _extract_content(data: object) -> str:
    """OpenAI-подобный формат: {"choices":[{"message":{"content":"..."}}]}"""
    if not isinstance(data, dict):
        raise CompletionError("response is not a JSON object")
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise CompletionError("response has no choices")
    first = choices[0]
    msg = first.get("message") if isinstance(first, dict) else None
    content = msg.get("content") if isinstance(msg, dict) else None
    if not isinstance(content, str):
        raise CompletionError("first choice has no text content")
    return content


# основной генератор #

class Generator:
    def __init__(self, url: str, key: str, model: str, timeout: Optional[float] = None):
        self.url = url
        self.key = key
        self.model = model
        self.timeout = timeout

    def ask(self, question: str) -> str:
        """
        Один вызов chat completions без ретраев.
        Возвращает сырой markdown первого варианта ответа.
        """
        payload = {
            "model": self.model,
            "messages": build_messages(question),
        }
        return self._call_api(payload)

    # низкоуровневый вызов Groq #
    def _call_api(self, payload: dict) -> str:
        t0 = time.time()
        # Сетевые исключения requests пробрасываем как есть
        resp = requests.post(
            self.url,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                "Authorization": f"Bearer {self.key}",
            },
            json=payload,
            timeout=self.timeout,
        )
        logger.debug("chat completion model=%s status=%s latency=%.2fs",
                     self.model, resp.status_code, time.time() - t0)

        if resp.status_code != 200:
            raise CompletionError(f"HTTP {resp.status_code}: {resp.text}")

        try:
            data = resp.json()
        except ValueError as e:
            raise CompletionError(f"parse error: {e}") from e

        return _extract_content(data)

# tests/conftest.py
from __future__ import annotations

import csv
import json
import time
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest
from fastapi.testclient import TestClient

from legal_assistant.config import Settings
from legal_assistant.main import create_app


RESULTS_DIR = Path("results")
RESULTS_DIR.mkdir(parents=True, exist_ok=True)

JSONL_PATH = RESULTS_DIR / "test_results.jsonl"
CSV_PATH   = RESULTS_DIR / "test_results.csv"


def _append_jsonl(record: Dict[str, Any]) -> None:
    with JSONL_PATH.open("a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")


def _append_csv(record: Dict[str, Any]) -> None:
    exists = CSV_PATH.exists()
    # Жёсткий и стабильный порядок колонок
    fieldnames = [
        "ts", "nodeid", "case", "status", "duration_sec",
        "question", "status_code", "answer", "error",
    ]
    with CSV_PATH.open("a", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        if not exists:
            w.writeheader()
        row = {k: record.get(k) for k in fieldnames}
        w.writerow(row)


@pytest.fixture(scope="session", autouse=True)
def _clean_results_dir() -> None:
    # Очищаем старые результаты в начале сессии
    for p in (JSONL_PATH, CSV_PATH):
        if p.exists():
            p.unlink()


@pytest.fixture
def record_result(request) -> Callable[..., None]:
    """
    Фикстура возвращает функцию, которой можно передать
    произвольные поля для записи в JSONL/CSV.
    """
    nodeid = request.node.nodeid

    def _record(
        *,
        case: str,
        status: str,
        duration_sec: float,
        question: str = "",
        status_code: int | None = None,
        answer: str = "",
        error: str = "",
        extra: Dict[str, Any] | None = None,
    ) -> None:
        ts = time.strftime("%Y-%m-%d %H:%M:%S")
        rec = {
            "ts": ts,
            "nodeid": nodeid,
            "case": case,
            "status": status,
            "duration_sec": round(float(duration_sec), 3),
            "question": question,
            "status_code": status_code,
            "answer": answer,
            "error": error,
        }
        if extra:
            rec.update(extra)
        _append_jsonl(rec)
        _append_csv(rec)

    return _record


class FakeGenerator:
    """Подмена Groq: запоминает вопросы, отдаёт заготовленный markdown или падает."""

    def __init__(self, reply: str = "stub answer", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.questions: List[str] = []

    def ask(self, question: str) -> str:
        self.questions.append(question)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, groq_api_key="test-key")


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def client(settings, fake_generator) -> TestClient:
    # raise_server_exceptions=False: нужен ответ catch-all, а не исключение в тесте
    app = create_app(settings, generator=fake_generator)
    return TestClient(app, raise_server_exceptions=False)

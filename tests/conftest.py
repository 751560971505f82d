"""
Pytest configuration file for Manu-shop testing.

This file contains shared fixtures: environment settings, a recording fake
of the Supabase query builder, a mocked OpenAI client and Faker-built rows.
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Tuple
from unittest.mock import MagicMock

import pytest
from faker import Faker

# Ensure src is in sys.path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from manu_shop.core.config import reset_settings  # noqa: E402
from manu_shop.db import client as db_client  # noqa: E402

faker = Faker()


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "ui: tests that render Streamlit pages with streamlit mocked")


# --- Environment ---

@pytest.fixture(autouse=True)
def app_env(monkeypatch):
    """Deterministic settings for every test."""
    monkeypatch.setenv("SUPABASE_URL", "https://test-project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "test-anon-key")
    monkeypatch.setenv("OPENROUTER_API_KEY", "test-openrouter-key")
    monkeypatch.setenv("AI_MODEL", "test/model")
    for name in ("SENTRY_DSN", "OPENROUTER_BASE_URL", "AI_TEMPERATURE", "AI_TIMEOUT_SECONDS", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("LOW_STOCK_THRESHOLD", raising=False)
    monkeypatch.delenv("DASHBOARD_LIVE_HISTORY", raising=False)
    reset_settings()
    db_client.get_supabase_client.cache_clear()
    yield
    reset_settings()
    db_client.get_supabase_client.cache_clear()


# --- Fake Supabase client ---

class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Records the builder chain; ``execute`` asks the owning client for data."""

    OPERATIONS = ("select", "insert", "update", "delete")

    def __init__(self, client: "FakeSupabase", table: str):
        self.client = client
        self.table = table
        self.calls: List[Tuple[str, tuple, dict]] = []

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    @property
    def operation(self) -> str:
        return next(name for name, _, _ in self.calls if name in self.OPERATIONS)

    @property
    def payload(self) -> Any:
        for name, args, _ in self.calls:
            if name in ("insert", "update"):
                return args[0]
        return None

    @property
    def filters(self) -> Dict[str, Tuple[str, Any]]:
        return {args[0]: (name, args[1]) for name, args, _ in self.calls
                if name in ("eq", "gt", "lt", "gte", "lte")}

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)

    def execute(self):
        self.client.executed.append(self)
        return self.client.respond(self)


class FakeSupabase:
    """In-memory stand-in for ``supabase.Client`` that records every executed query."""

    def __init__(self):
        self.executed: List[FakeQuery] = []
        self.responses: Dict[Tuple[str, str], Any] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def on(self, table: str, operation: str, data: Any) -> None:
        """Data (or a callable taking the query) returned for ``operation`` on ``table``."""
        self.responses[(table, operation)] = data

    def respond(self, query: FakeQuery) -> FakeResponse:
        data = self.responses.get((query.table, query.operation), [])
        if callable(data):
            data = data(query)
        return FakeResponse(data)

    def queries(self, table: str = None, operation: str = None) -> List[FakeQuery]:
        return [q for q in self.executed
                if (table is None or q.table == table)
                and (operation is None or q.operation == operation)]


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


def failing(exc: Exception) -> Callable:
    """Response callable that raises ``exc``."""
    def respond(query):
        raise exc
    return respond


# --- Row factories ---

def make_product_row(**overrides) -> Dict[str, Any]:
    row = {
        "id": faker.uuid4(),
        "name": faker.unique.word().capitalize(),
        "category": faker.random_element(["Cables", "Sensores", "Iluminación", "Redes"]),
        "price": round(faker.pyfloat(min_value=1, max_value=200, right_digits=2), 2),
        "stock_quantity": faker.pyint(min_value=0, max_value=50),
        "image_url": "",
        "created_at": faker.date_time(tzinfo=timezone.utc).isoformat(),
    }
    row.update(overrides)
    return row


def make_notification_row(**overrides) -> Dict[str, Any]:
    row = {
        "id": faker.uuid4(),
        "message": faker.sentence(),
        "created_at": datetime.now(timezone.utc).isoformat(),
        "is_read": False,
        "type": "system",
    }
    row.update(overrides)
    return row


@pytest.fixture
def product_rows():
    return [
        make_product_row(id="p-1", name="Cable UTP", price=10.0, stock_quantity=3),
        make_product_row(id="p-2", name="Router", price=45.5, stock_quantity=10),
        make_product_row(id="p-3", name="LED 5mm", price=0.25, stock_quantity=0),
    ]


@pytest.fixture
def fixed_now():
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sales_rows(fixed_now):
    return [
        {"total_amount": 100, "sale_date": fixed_now.replace(hour=9).isoformat()},
        {"total_amount": "50.5", "sale_date": fixed_now.replace(hour=1).isoformat()},
        {"total_amount": 20, "sale_date": (fixed_now - timedelta(days=1)).isoformat()},
        {"total_amount": 300, "sale_date": datetime(2024, 6, 1, tzinfo=timezone.utc).isoformat()},
        {"total_amount": 400, "sale_date": datetime(2024, 2, 10, tzinfo=timezone.utc).isoformat()},
        {"total_amount": 999, "sale_date": datetime(2023, 12, 31, 23, tzinfo=timezone.utc).isoformat()},
    ]


# --- OpenAI mock ---

def make_completion(content=None, error=None):
    """A chat-completion response object as returned by the OpenAI SDK."""
    response = MagicMock()
    response.error = error
    if content is None:
        response.choices = []
    else:
        choice = MagicMock()
        choice.message.content = content
        response.choices = [choice]
    return response


@pytest.fixture
def mock_openai():
    client = MagicMock()
    client.chat.completions.create.return_value = make_completion("Tenemos Cable UTP en stock.")
    return client


# --- Streamlit session state ---

@pytest.fixture
def session_state(monkeypatch):
    """Replace ``st.session_state`` with a plain dict."""
    state = {}
    monkeypatch.setattr("streamlit.session_state", state)
    return state

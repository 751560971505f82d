"""
Unit tests for the inventory assistant: prompt assembly, the completion
call and the chat transcript.
"""

from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from manu_shop.core.config import LLMSettings
from manu_shop.core.constants import (
    ASSISTANT_FALLBACK_REPLY,
    ASSISTANT_GREETING,
    EMPTY_INVENTORY_CONTEXT,
    FLOATING_ASSISTANT_GREETING,
)
from manu_shop.core.exceptions import LLMAPIError
from manu_shop.llm import AssistantVariant, ChatSession, InventoryAssistant
from manu_shop.llm.prompts import build_inventory_context, build_system_prompt
from manu_shop.models import ChatMessage, ChatRole

from conftest import failing, make_completion

INVENTORY = [
    {"name": "Cable UTP", "stock_quantity": 3, "price": 10.0, "category": "Cables"},
    {"name": "LED 5mm", "stock_quantity": 0, "price": 0.25, "category": "Iluminación"},
]


@pytest.fixture
def assistant(fake_supabase, mock_openai):
    fake_supabase.on("products", "select", INVENTORY)
    return InventoryAssistant(db_client=fake_supabase, llm_client=mock_openai)


@pytest.fixture(autouse=True)
def capture_exception():
    with patch("manu_shop.llm.assistant.sentry_sdk.capture_exception") as mock_capture:
        yield mock_capture


def test_inventory_context_lines():
    assert build_inventory_context(INVENTORY) == (
        "- Cable UTP (Stock: 3, Precio: $10, Categoria: Cables)\n"
        "- LED 5mm (Stock: 0, Precio: $0.25, Categoria: Iluminación)"
    )


@pytest.mark.parametrize("products", [None, []])
def test_inventory_context_empty(products):
    assert build_inventory_context(products) == EMPTY_INVENTORY_CONTEXT


def test_system_prompt_variants():
    page = build_system_prompt("- Cable", AssistantVariant.PAGE)
    floating = build_system_prompt("- Cable", "floating")

    assert "INVENTARIO ACTUAL:\n- Cable" in page
    assert "INVENTARIO ACTUAL:\n- Cable" in floating
    assert "Sé amable, conciso y profesional." in floating
    assert "Sé amable" not in page


def test_build_messages_order(assistant):
    transcript = [
        ChatMessage(id="1", role=ChatRole.ASSISTANT, content="Hola"),
        ChatMessage(role=ChatRole.USER, content="¿Tienen cable?"),
        ChatMessage(role=ChatRole.ASSISTANT, content="Sí"),
    ]

    messages = assistant.build_messages(transcript, "¿Y routers?", INVENTORY)

    assert [m["role"] for m in messages] == ["system", "assistant", "user", "assistant", "user"]
    assert "Cable UTP (Stock: 3" in messages[0]["content"]
    assert messages[-1] == {"role": "user", "content": "¿Y routers?"}


def test_ask_sends_inventory_and_model(assistant, mock_openai, fake_supabase):
    reply = assistant.ask([], "Quiero instalar cableado ethernet")

    assert reply == "Tenemos Cable UTP en stock."
    kwargs = mock_openai.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "test/model"
    assert "temperature" not in kwargs
    assert "- Cable UTP" in kwargs["messages"][0]["content"]
    assert fake_supabase.queries("products")[0].calls[0] == (
        "select", ("name, stock_quantity, price, category",), {}
    )


def test_ask_without_inventory_when_lookup_fails(assistant, mock_openai, fake_supabase):
    fake_supabase.on("products", "select", failing(RuntimeError("timeout")))

    assistant.ask([], "Hola")

    system = mock_openai.chat.completions.create.call_args.kwargs["messages"][0]["content"]
    assert EMPTY_INVENTORY_CONTEXT in system


@pytest.mark.parametrize("content", [None, ""])
def test_ask_empty_reply_falls_back(assistant, mock_openai, content):
    mock_openai.chat.completions.create.return_value = make_completion(content)
    assert assistant.ask([], "Hola") == ASSISTANT_FALLBACK_REPLY


@pytest.mark.parametrize("error,message", [
    ({"message": "Rate limit exceeded", "code": 429}, "Rate limit exceeded"),
    ("quota exhausted", "quota exhausted"),
    ({"code": 500}, "Error en la API"),
])
def test_ask_error_payload(assistant, mock_openai, error, message):
    mock_openai.chat.completions.create.return_value = make_completion(error=error)

    with pytest.raises(LLMAPIError) as exc_info:
        assistant.ask([], "Hola")

    assert exc_info.value.message == message
    assert exc_info.value.model == "test/model"


def test_ask_wraps_client_errors(assistant, mock_openai):
    request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
    mock_openai.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

    with pytest.raises(LLMAPIError) as exc_info:
        assistant.ask([], "Hola")

    assert isinstance(exc_info.value.original_exception, openai.APIConnectionError)


def test_missing_api_key(fake_supabase, monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY")
    assistant = InventoryAssistant(settings=LLMSettings(), db_client=fake_supabase)

    with pytest.raises(LLMAPIError, match="OPENROUTER_API_KEY"):
        assistant.ask([], "Hola")


def test_client_built_from_settings(fake_supabase):
    settings = LLMSettings(OPENROUTER_API_KEY="sk-or-test", OPENROUTER_BASE_URL="https://example.test/v1")
    assistant = InventoryAssistant(settings=settings, db_client=fake_supabase)

    with patch("manu_shop.llm.assistant.OpenAI") as mock_cls:
        assert assistant.llm_client is mock_cls.return_value

    mock_cls.assert_called_once_with(api_key="sk-or-test", base_url="https://example.test/v1",
                                     timeout=60.0)


@pytest.mark.parametrize("variant,greeting", [
    (AssistantVariant.PAGE, ASSISTANT_GREETING),
    (AssistantVariant.FLOATING, FLOATING_ASSISTANT_GREETING),
])
def test_chat_session_greeting(variant, greeting):
    chat = ChatSession(InventoryAssistant(variant=variant, db_client=MagicMock(),
                                          llm_client=MagicMock()))

    assert len(chat.messages) == 1
    assert chat.messages[0].id == "1"
    assert chat.messages[0].role == ChatRole.ASSISTANT
    assert chat.messages[0].content == greeting


def test_chat_session_send(assistant, mock_openai):
    chat = ChatSession(assistant)

    reply = chat.send("¿Tienen cable?")

    assert reply.content == "Tenemos Cable UTP en stock."
    assert [m.role for m in chat.messages] == [ChatRole.ASSISTANT, ChatRole.USER, ChatRole.ASSISTANT]
    sent = mock_openai.chat.completions.create.call_args.kwargs["messages"]
    assert [m["role"] for m in sent] == ["system", "assistant", "user"]
    assert sent[-1]["content"] == "¿Tienen cable?"
    assert len({m.id for m in chat.messages}) == 3


@pytest.mark.parametrize("text", ["", "   ", None])
def test_chat_session_ignores_blank_input(assistant, mock_openai, text):
    chat = ChatSession(assistant)

    assert chat.send(text) is None
    assert len(chat.messages) == 1
    mock_openai.chat.completions.create.assert_not_called()


def test_chat_session_shows_errors(assistant, mock_openai, capture_exception):
    mock_openai.chat.completions.create.return_value = make_completion(
        error={"message": "Invalid API key"}
    )
    chat = ChatSession(assistant)

    reply = chat.send("Hola")

    assert reply.role == ChatRole.ASSISTANT
    assert reply.content == "Error: Invalid API key. (Verifica tu API Key)"
    assert chat.messages[-1] is reply
    capture_exception.assert_called_once()


def test_chat_session_unknown_error(assistant, mock_openai):
    mock_openai.chat.completions.create.side_effect = RuntimeError()
    chat = ChatSession(assistant)

    reply = chat.send("Hola")

    assert reply.content == "Error: Error desconocido. (Verifica tu API Key)"

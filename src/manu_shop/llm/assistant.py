"""
Inventory assistant.

Single-turn prompt assembly: the current product list is rendered into the
system prompt, the visible transcript and the new question are appended,
and the request goes to an OpenAI-compatible chat-completion endpoint
(OpenRouter by default). The reply is shown as returned.
"""

import logging
from typing import Any, Dict, List, Optional

import sentry_sdk
from openai import OpenAI, OpenAIError

from ..core.config import LLMSettings, get_settings
from ..core.constants import (
    ASSISTANT_ERROR_TEMPLATE,
    ASSISTANT_FALLBACK_REPLY,
    ASSISTANT_GREETING,
    FLOATING_ASSISTANT_GREETING,
    PRODUCTS_TABLE,
    UNKNOWN_ERROR_MESSAGE,
)
from ..core.exceptions import DatabaseError, LLMAPIError
from ..db.client import execute, get_supabase_client
from ..models import ChatMessage, ChatRole
from .prompts import AssistantVariant, build_inventory_context, build_system_prompt

logger = logging.getLogger(__name__)


class InventoryAssistant:
    """Answers questions with the live inventory as context."""

    def __init__(self,
                 variant: AssistantVariant = AssistantVariant.PAGE,
                 settings: Optional[LLMSettings] = None,
                 db_client=None,
                 llm_client: Optional[OpenAI] = None):
        self.variant = AssistantVariant(variant)
        self.settings = settings or get_settings().llm
        self._db_client = db_client
        self._llm_client = llm_client

    @property
    def db_client(self):
        if self._db_client is None:
            self._db_client = get_supabase_client()
        return self._db_client

    @property
    def llm_client(self) -> OpenAI:
        if self._llm_client is None:
            if not (self.settings.api_key and self.settings.api_key.get_secret_value()):
                raise LLMAPIError("OPENROUTER_API_KEY is not set", model=self.settings.model)
            self._llm_client = OpenAI(**self.settings.get_client_config())
        return self._llm_client

    def fetch_inventory(self) -> Optional[List[Dict[str, Any]]]:
        """Product rows for the prompt; None when the lookup fails."""
        try:
            return execute(
                self.db_client.table(PRODUCTS_TABLE).select("name, stock_quantity, price, category"),
                PRODUCTS_TABLE, "select"
            )
        except DatabaseError as e:
            logger.warning(f"Answering without inventory context: {e.message}")
            return None

    def build_messages(self, transcript: List[ChatMessage], user_message: str,
                       inventory: Optional[List[Dict[str, Any]]]) -> List[Dict[str, str]]:
        system_prompt = build_system_prompt(build_inventory_context(inventory), self.variant)
        return (
            [{"role": "system", "content": system_prompt}]
            + [m.to_api() for m in transcript]
            + [{"role": "user", "content": user_message}]
        )

    def ask(self, transcript: List[ChatMessage], user_message: str) -> str:
        """
        Send one question to the model.

        Args:
            transcript: Messages shown before this question
            user_message: The new question

        Returns:
            The model's reply text, or a fixed apology when the reply is empty

        Raises:
            LLMAPIError: If the provider rejects the request or reports an error
        """
        messages = self.build_messages(transcript, user_message, self.fetch_inventory())
        client = self.llm_client

        try:
            response = client.chat.completions.create(
                messages=messages,
                **self.settings.get_completion_config()
            )
        except OpenAIError as e:
            raise LLMAPIError(str(e), original_exception=e, model=self.settings.model)

        # OpenRouter can answer 200 with an error object instead of choices
        error = getattr(response, "error", None)
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise LLMAPIError(message or "Error en la API", model=self.settings.model)

        choices = response.choices or []
        content = choices[0].message.content if choices and choices[0].message else None
        return content or ASSISTANT_FALLBACK_REPLY


class ChatSession:
    """The visible transcript of one assistant widget."""

    def __init__(self, assistant: InventoryAssistant, greeting: Optional[str] = None):
        self.assistant = assistant
        if greeting is None:
            greeting = (FLOATING_ASSISTANT_GREETING
                        if assistant.variant == AssistantVariant.FLOATING
                        else ASSISTANT_GREETING)
        self.messages: List[ChatMessage] = [
            ChatMessage(id="1", role=ChatRole.ASSISTANT, content=greeting)
        ]

    def send(self, text: str) -> Optional[ChatMessage]:
        """
        Ask the assistant and record both sides of the exchange.

        Blank input is ignored. Failures become an assistant message so the
        error is visible in the transcript.
        """
        if not text or not text.strip():
            return None

        history = list(self.messages)
        self.messages.append(ChatMessage(role=ChatRole.USER, content=text))

        try:
            reply = ChatMessage(role=ChatRole.ASSISTANT, content=self.assistant.ask(history, text))
        except Exception as e:
            logger.error(f"Assistant request failed: {e}")
            sentry_sdk.capture_exception(e)
            message = getattr(e, "message", None) or str(e) or UNKNOWN_ERROR_MESSAGE
            reply = ChatMessage(
                role=ChatRole.ASSISTANT,
                content=ASSISTANT_ERROR_TEMPLATE.format(message=message)
            )

        self.messages.append(reply)
        return reply

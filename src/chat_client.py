# src/chat_client.py
"""
AnalyticsChatClient - question in, ChatMessage out.

Pipeline:
    User Question
        ↓
    [POST question + sessionId]   ← backend analytics service
        ↓
    [Response decoding]           ← success / response / error / details
        ↓
    [Content parsing]             ← structured payloads → DisplayItems
        ↓
    ChatMessage (text + items)

Transport failures never propagate: they become an apology message, the
same way the dashboard assistant answered when its planner failed.
"""

from __future__ import annotations

import itertools
import logging
import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from config import Config
from src.message_parser import parse_display_items
from src.view_state import DisplayItem

logger = logging.getLogger(__name__)

SENDER_USER = "user"
SENDER_BOT = "bot"

WELCOME_TEXT = "Bonjour! Je suis votre assistant chatbot. Comment puis-je vous aider aujourd'hui?"
GENERIC_ERROR_TEXT = "Désolé, une erreur est survenue."
CONNECTION_ERROR_TEXT = (
    "Désolé, je ne peux pas me connecter au serveur en ce moment. "
    "Veuillez réessayer plus tard."
)

_BASE36 = string.digits + string.ascii_lowercase
_message_ids = itertools.count(1)


class ChatClientError(Exception):
    """Raised when the backend cannot be reached or answers with garbage."""


@dataclass
class MessageDetails:
    query: Optional[str] = None
    execution_time_ms: Optional[float] = None
    result_count: Optional[int] = None

    def summary(self) -> str:
        parts = []
        if self.query:
            parts.append(f"Requête: {self.query}")
        if self.execution_time_ms is not None:
            parts.append(f"Temps: {self.execution_time_ms:g}ms")
        if self.result_count is not None:
            parts.append(f"Résultats: {self.result_count}")
        return " | ".join(parts)


@dataclass
class ChatMessage:
    id: str
    text: str
    sender: str
    timestamp: str
    details: Optional[MessageDetails] = None
    items: List[DisplayItem] = field(default_factory=list)

    @property
    def is_user(self) -> bool:
        return self.sender == SENDER_USER


def generate_session_id(prefix: Optional[str] = None) -> str:
    prefix = Config.SESSION_PREFIX if prefix is None else prefix
    token = "".join(random.choice(_BASE36) for _ in range(9))
    return f"{prefix}{token}_{int(time.time() * 1000)}"


def _next_message_id() -> str:
    return f"m{next(_message_ids)}"


def _now() -> str:
    return datetime.now().strftime("%H:%M:%S")


def make_message(text: str, sender: str, **kwargs: Any) -> ChatMessage:
    return ChatMessage(id=_next_message_id(), text=text, sender=sender, timestamp=_now(), **kwargs)


def welcome_message() -> ChatMessage:
    return make_message(WELCOME_TEXT, SENDER_BOT)


class AnalyticsChatClient:
    """Thin client for the backend chat endpoint. No retries."""

    def __init__(
        self,
        session_id: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[requests.Session] = None,
    ):
        self.session_id = session_id or generate_session_id()
        self.url = url or Config.get_chat_url()
        self.timeout = Config.REQUEST_TIMEOUT if timeout is None else timeout
        self.http = http or requests.Session()

    # ─────────────────────────────────────────────────────────────
    # Transport
    # ─────────────────────────────────────────────────────────────

    def _post_question(self, question: str) -> Dict[str, Any]:
        try:
            resp = self.http.post(
                self.url,
                json={"question": question, "sessionId": self.session_id},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ChatClientError(f"Request to {self.url} failed: {e}") from e

        if not resp.ok:
            raise ChatClientError(f"HTTP error! status: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise ChatClientError("Backend did not return valid JSON.") from e

        if not isinstance(data, dict):
            raise ChatClientError("Backend response must be a JSON object.")
        return data

    # ─────────────────────────────────────────────────────────────
    # Decoding
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def _details(data: Dict[str, Any]) -> Optional[MessageDetails]:
        query = data.get("cypherQuery")
        if not query:
            return None
        rows = data.get("data")
        execution_time = data.get("executionTime")
        return MessageDetails(
            query=str(query),
            execution_time_ms=execution_time if isinstance(execution_time, (int, float)) else None,
            result_count=len(rows) if isinstance(rows, list) else 0,
        )

    def build_bot_message(self, data: Dict[str, Any]) -> ChatMessage:
        if data.get("success"):
            text = data.get("response") or ""
        else:
            text = data.get("error") or GENERIC_ERROR_TEXT

        message_id = _next_message_id()
        items = parse_display_items(
            data.get("content"), data.get("metadata"), message_id=message_id
        )
        return ChatMessage(
            id=message_id,
            text=str(text),
            sender=SENDER_BOT,
            timestamp=_now(),
            details=self._details(data),
            items=items,
        )

    # ─────────────────────────────────────────────────────────────
    # Public: get_response
    # ─────────────────────────────────────────────────────────────

    def get_response(self, question: str) -> Optional[ChatMessage]:
        q = (question or "").strip()
        if not q:
            return None

        try:
            data = self._post_question(q)
        except ChatClientError as e:
            logger.error("Error sending message: %s", e)
            return make_message(CONNECTION_ERROR_TEXT, SENDER_BOT)

        return self.build_bot_message(data)

    def send(self, question: str, history: List[ChatMessage]) -> bool:
        """
        Append the user's question and the bot's reply to `history`.

        Blank questions leave the history untouched and return False.
        """
        q = (question or "").strip()
        if not q:
            return False

        history.append(make_message(q, SENDER_USER))
        bot_message = self.get_response(q)
        if bot_message is not None:
            history.append(bot_message)
        return True

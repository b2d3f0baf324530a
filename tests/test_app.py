"""Tests for the Streamlit page (backend call patched out)."""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from src.chat_client import AnalyticsChatClient

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def page(monkeypatch):
    calls = []

    def fake_post(self, question):
        calls.append(question)
        return {"success": True, "response": f"Réponse à {question}"}

    monkeypatch.setattr(AnalyticsChatClient, "_post_question", fake_post)
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()
    return at, calls


class TestChatInput:
    """The question box sends once and comes back empty."""

    def test_submit_sends_once(self, page):
        app, calls = page
        app.chat_input[0].set_value("combien ?").run()
        assert not app.exception
        assert calls == ["combien ?"]
        assert [m.text for m in app.session_state["chat_history"][1:]] == [
            "combien ?",
            "Réponse à combien ?",
        ]

        # A rerun without typing anything must not send the question again
        app.run()
        assert calls == ["combien ?"]
        assert app.chat_input[0].value is None

    def test_clear_resets_history(self, page):
        app, _ = page
        app.chat_input[0].set_value("bonjour").run()
        app.button[0].click().run()
        assert len(app.session_state["chat_history"]) == 1

from __future__ import annotations

import os

os.environ.setdefault("RESUMEFIT_NO_LOG_FILE", "1")

import pytest

from resumefit.models import ReplyMessage, StructuredReply, TextReply

SAMPLE_RESUME = (
    "John Doe. Experience: Software Engineer at Acme. Education: BS Computer Science. "
    "Skills: java python sql. Email: john@x.com"
)


class FakeOracle:
    """Returns scripted replies in order and records every request."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls: list[dict] = []

    async def chat(self, messages, *, model, temperature=None):
        self.calls.append({"messages": list(messages), "model": model, "temperature": temperature})
        if not self.replies:
            raise AssertionError("FakeOracle ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, str):
            return TextReply(reply)
        return reply


def structured(content):
    return StructuredReply(message=ReplyMessage(content=content))


@pytest.fixture
def resume_text() -> str:
    return SAMPLE_RESUME


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "OPENAI_API_KEY", "OPENAI_BASE_URL", "RAPIDAPI_KEY", "JSEARCH_API_KEY",
        "ATS_CHECKLIST_PATH", "OPENAI_KEYWORD_MODEL", "OPENAI_VALIDATION_MODEL",
        "OPENAI_ANALYSIS_MODEL",
    ):
        monkeypatch.delenv(key, raising=False)

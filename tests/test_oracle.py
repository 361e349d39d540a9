import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import openai
import pytest

from resumefit.errors import OracleNotReady, OracleReportedError, OracleTimeout
from resumefit.models import ChatMessage, StructuredReply, TextReply
from resumefit.oracle import (
    OpenAIOracle,
    OracleGate,
    create_default_oracle,
    ensure_oracle,
    initialize_default,
    reply_text,
)

from conftest import FakeOracle, structured


def test_reply_text_variants():
    assert reply_text(TextReply("hello")) == "hello"
    assert reply_text(structured("world")) == "world"
    assert reply_text(StructuredReply()) == ""
    with pytest.raises(TypeError):
        reply_text({"message": {"content": "dict"}})


def test_gate_require_and_set_once():
    gate = OracleGate()
    assert not gate.is_ready
    with pytest.raises(OracleNotReady):
        gate.require()
    oracle = FakeOracle()
    gate.set_ready(oracle)
    assert gate.is_ready
    assert gate.require() is oracle
    assert ensure_oracle(gate) is oracle
    with pytest.raises(RuntimeError):
        gate.set_ready(FakeOracle())


def test_wait_ready_resolves_when_set():
    async def scenario():
        gate = OracleGate()
        oracle = FakeOracle()
        waiter = asyncio.create_task(gate.wait_ready(timeout=1))
        await asyncio.sleep(0)
        assert not waiter.done()
        gate.set_ready(oracle)
        return await waiter, oracle

    got, oracle = asyncio.run(scenario())
    assert got is oracle


def test_wait_ready_times_out():
    with pytest.raises(OracleNotReady):
        asyncio.run(OracleGate().wait_ready(timeout=0.01))


def test_failed_gate_wakes_waiters_with_reason():
    async def scenario():
        gate = OracleGate()
        waiter = asyncio.create_task(gate.wait_ready(timeout=1))
        await asyncio.sleep(0)
        gate.set_failed("AI service is not configured.")
        return await waiter

    with pytest.raises(OracleNotReady) as info:
        asyncio.run(scenario())
    assert info.value.message == "AI service is not configured."


def test_failed_gate_cannot_be_resolved_again():
    gate = OracleGate()
    gate.set_failed("no key")
    assert not gate.is_ready
    with pytest.raises(OracleNotReady):
        gate.require()
    with pytest.raises(RuntimeError):
        gate.set_ready(FakeOracle())


def test_initialize_default_without_key():
    gate = OracleGate()
    initialize_default(gate)
    assert not gate.is_ready
    with pytest.raises(OracleNotReady) as info:
        gate.require()
    assert "OPENAI_API_KEY" in info.value.message


def test_initialize_default_with_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    gate = OracleGate()
    initialize_default(gate)
    assert gate.is_ready
    assert isinstance(asyncio.run(gate.wait_ready(timeout=1)), OpenAIOracle)


def test_create_default_oracle_requires_key(monkeypatch):
    with pytest.raises(OracleNotReady):
        create_default_oracle()
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    assert isinstance(create_default_oracle(), OpenAIOracle)


def _oracle_with(create) -> OpenAIOracle:
    oracle = OpenAIOracle(api_key="sk-test", timeout=0.05)
    oracle.client = MagicMock()
    oracle.client.chat.completions.create = create
    return oracle


MESSAGES = [ChatMessage("system", "be brief"), ChatMessage("user", "hi")]


def test_openai_oracle_returns_structured_reply():
    completion = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content='["Java"]'))])
    create = AsyncMock(return_value=completion)
    oracle = _oracle_with(create)

    reply = asyncio.run(oracle.chat(MESSAGES, model="gpt-4o", temperature=0.3))
    assert reply_text(reply) == '["Java"]'
    create.assert_awaited_once_with(
        model="gpt-4o",
        messages=[{"role": "system", "content": "be brief"}, {"role": "user", "content": "hi"}],
        temperature=0.3,
    )


def test_openai_oracle_timeout():
    async def slow(**kwargs):
        await asyncio.sleep(1)

    with pytest.raises(OracleTimeout):
        asyncio.run(_oracle_with(slow).chat(MESSAGES, model="gpt-4o"))


def test_openai_oracle_api_error():
    create = AsyncMock(side_effect=openai.OpenAIError("quota exceeded"))
    with pytest.raises(OracleReportedError) as info:
        asyncio.run(_oracle_with(create).chat(MESSAGES, model="gpt-4o"))
    assert "quota exceeded" in info.value.message

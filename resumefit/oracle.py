"""Chat-completion oracle: reply union, readiness gate and OpenAI-backed client."""
from __future__ import annotations

import asyncio
from typing import Protocol, Sequence, Union

from resumefit.config import get_env, oracle_timeout
from resumefit.errors import OracleNotReady, OracleReportedError, OracleTimeout
from resumefit.log import get_logger
from resumefit.models import ChatMessage, OracleReply, ReplyMessage, StructuredReply, TextReply

log = get_logger(__name__)


class Oracle(Protocol):
    async def chat(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: str,
        temperature: float | None = None,
    ) -> OracleReply:
        ...


def reply_text(reply: OracleReply) -> str:
    if isinstance(reply, TextReply):
        return reply.text
    if isinstance(reply, StructuredReply):
        return reply.message.content or ""
    raise TypeError(f"Unknown oracle reply type: {type(reply).__name__}")


class OracleGate:
    """Readiness of the oracle, resolved once by whoever initializes it.

    Resolution is either an oracle (``set_ready``) or a reason it will never
    arrive (``set_failed``). Callers either ``await wait_ready()`` or call
    ``require()`` which fails fast with OracleNotReady.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._oracle: Oracle | None = None
        self._failure: str | None = None

    @property
    def is_ready(self) -> bool:
        return self._oracle is not None

    def set_ready(self, oracle: Oracle) -> None:
        self._resolve()
        self._oracle = oracle
        log.info("Oracle ready: %s", oracle.__class__.__name__)

    def set_failed(self, reason: str) -> None:
        self._resolve()
        self._failure = reason
        log.warning("Oracle unavailable: %s", reason)

    def _resolve(self) -> None:
        if self._event.is_set():
            raise RuntimeError("Oracle gate already resolved")
        self._event.set()

    def require(self) -> Oracle:
        if self._oracle is None:
            raise OracleNotReady(self._failure)
        return self._oracle

    async def wait_ready(self, timeout: float | None = None) -> Oracle:
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError as exc:
            raise OracleNotReady() from exc
        return self.require()


OracleSource = Union[Oracle, OracleGate, None]


def ensure_oracle(source: OracleSource) -> Oracle:
    """Resolve a gate or a bare oracle; None means the capability is absent."""
    if source is None:
        raise OracleNotReady()
    if isinstance(source, OracleGate):
        return source.require()
    return source


class OpenAIOracle:
    """Oracle over any OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        from openai import AsyncOpenAI

        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url or None)
        self.timeout = timeout if timeout is not None else oracle_timeout()

    async def chat(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: str,
        temperature: float | None = None,
    ) -> OracleReply:
        import openai

        kwargs: dict = {
            "model": model,
            "messages": [m.as_dict() for m in messages],
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            r = await asyncio.wait_for(
                self.client.chat.completions.create(**kwargs), self.timeout
            )
        except asyncio.TimeoutError as exc:
            log.warning("Oracle call to %s timed out after %.0fs", model, self.timeout)
            raise OracleTimeout() from exc
        except openai.OpenAIError as exc:
            log.error("Oracle call to %s failed: %s", model, exc)
            raise OracleReportedError(str(exc)) from exc

        if not r.choices:
            return StructuredReply()
        return StructuredReply(message=ReplyMessage(content=r.choices[0].message.content))


def create_default_oracle() -> OpenAIOracle:
    api_key = get_env("OPENAI_API_KEY")
    if not api_key:
        raise OracleNotReady("AI service is not configured. Set OPENAI_API_KEY in .env.")
    return OpenAIOracle(api_key, base_url=get_env("OPENAI_BASE_URL") or None)


def initialize_default(gate: OracleGate) -> None:
    """Resolve ``gate`` with the configured OpenAI oracle, or mark it failed."""
    try:
        oracle = create_default_oracle()
    except OracleNotReady as exc:
        gate.set_failed(exc.message)
        return
    gate.set_ready(oracle)

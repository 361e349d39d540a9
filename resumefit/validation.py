"""Decide whether a document is a resume before spending oracle calls on it."""
from __future__ import annotations

from resumefit.config import validation_model
from resumefit.errors import InputTooShort, NotAResume, ResumeFitError
from resumefit.keywords import MIN_RESUME_CHARS
from resumefit.log import get_logger
from resumefit.models import ChatMessage, ResumeValidation
from resumefit.oracle import OracleSource, ensure_oracle, reply_text
from resumefit.parsing import parse_json_object

log = get_logger(__name__)

RESUME_VOCABULARY: tuple[str, ...] = (
    "experience",
    "education",
    "skills",
    "summary",
    "work",
    "employment",
    "position",
    "company",
    "degree",
    "university",
    "college",
    "email",
    "phone",
    "contact",
)
MIN_VOCABULARY_HITS = 3
MAX_CLASSIFY_CHARS = 2_000

_CLASSIFY_PROMPT = """\
Analyze this document and determine if it is a resume/CV. Look for:
- Professional experience, work history, or employment information
- Education background, degrees, or academic information
- Skills, qualifications, or professional competencies
- Contact information and personal details

Respond with ONLY a JSON object in this format:
{{
  "isResume": true or false,
  "reason": "brief explanation"
}}

Document text:
\"\"\"{document}\"\"\"
"""


def resume_vocabulary_hits(text: str) -> list[str]:
    low = (text or "").lower()
    return [w for w in RESUME_VOCABULARY if w in low]


def looks_like_resume(text: str) -> bool:
    return len(resume_vocabulary_hits(text)) >= MIN_VOCABULARY_HITS


async def classify_document(text: str, oracle: OracleSource) -> ResumeValidation | None:
    """Oracle verdict on *text*; None when the reply carries no JSON object."""
    chat = ensure_oracle(oracle)
    reply = await chat.chat(
        [ChatMessage(role="user", content=_CLASSIFY_PROMPT.format(document=text[:MAX_CLASSIFY_CHARS]))],
        model=validation_model(),
    )
    data = parse_json_object(reply_text(reply))
    if data is None:
        return None
    return ResumeValidation(
        is_resume=bool(data.get("isResume")),
        reason=str(data.get("reason") or ""),
    )


async def validate_resume(text: str, oracle: OracleSource) -> None:
    """Raise NotAResume when the gate or the oracle rejects *text*.

    Only an explicit negative verdict is fatal; any other trouble in the
    classification step is logged and the document is accepted.
    """
    ensure_oracle(oracle)

    if not text or len(text.strip()) < MIN_RESUME_CHARS:
        raise InputTooShort()

    hits = resume_vocabulary_hits(text)
    if len(hits) < MIN_VOCABULARY_HITS:
        log.info("Resume gate rejected document (matched: %s)", ", ".join(hits) or "none")
        raise NotAResume()

    try:
        verdict = await classify_document(text, oracle)
    except ResumeFitError as exc:
        log.warning("Resume validation warning: %s", exc)
        return

    if verdict is None:
        log.warning("Resume validation warning: no verdict in AI response")
        return
    if not verdict.is_resume:
        # An explicit negative verdict is final, whatever reason the oracle gives.
        raise NotAResume(verdict.reason or None)
    log.debug("Oracle confirmed resume: %s", verdict.reason)

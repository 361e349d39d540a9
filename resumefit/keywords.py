"""Ask the oracle for the professional keywords of a resume."""
from __future__ import annotations

from resumefit.config import keyword_model
from resumefit.errors import InputTooShort, MalformedOracleResponse, OracleReportedError
from resumefit.log import get_logger
from resumefit.models import ChatMessage
from resumefit.oracle import OracleSource, ensure_oracle, reply_text
from resumefit.parsing import find_error_message, parse_keyword_array

log = get_logger(__name__)

MIN_RESUME_CHARS = 50
MAX_PROMPT_CHARS = 10_000

_SYSTEM_PROMPT = (
    "You are an expert career advisor and job matching specialist with extensive "
    "experience in resume analysis and job recommendations. Extract relevant "
    "keywords accurately and efficiently."
)

_KEYWORD_PROMPT = """\
Read the resume below and list the professional keywords a recruiter would
search for: job titles, core technologies, tools, domains and certifications.
Put the most important keyword first.

Return ONLY a JSON array of 5 to 15 strings, for example:
["Software Engineer", "Python", "AWS"]

If the text is not a resume, return ONLY:
{{"error": "This document does not appear to be a resume."}}

Resume text:
\"\"\"{resume_text}\"\"\"
"""


def build_keyword_messages(resume_text: str) -> list[ChatMessage]:
    prompt = _KEYWORD_PROMPT.format(resume_text=resume_text[:MAX_PROMPT_CHARS])
    return [
        ChatMessage(role="system", content=_SYSTEM_PROMPT),
        ChatMessage(role="user", content=prompt),
    ]


async def extract_keywords(resume_text: str, oracle: OracleSource) -> list[str]:
    chat = ensure_oracle(oracle)

    if not resume_text or len(resume_text.strip()) < MIN_RESUME_CHARS:
        raise InputTooShort(
            "Resume text is too short. Please upload a complete resume with sufficient content."
        )

    reply = await chat.chat(
        build_keyword_messages(resume_text),
        model=keyword_model(),
        temperature=0.3,
    )
    content = reply_text(reply)
    if not content.strip():
        raise MalformedOracleResponse("Empty response from AI service. Please try again.")

    error = find_error_message(content)
    if error:
        raise OracleReportedError(error)

    keywords = parse_keyword_array(content)
    log.info("Extracted %d keywords: %s", len(keywords), ", ".join(keywords[:5]))
    return keywords

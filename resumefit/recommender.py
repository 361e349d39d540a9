"""
Job recommendation pipeline.

Runs: validate → extract keywords (oracle) → job search (HTTP) → rank.
"""
from __future__ import annotations

import asyncio
from pathlib import Path

from resumefit.keywords import extract_keywords
from resumefit.log import get_logger
from resumefit.models import ScoredJobPosting
from resumefit.oracle import OracleSource
from resumefit.resume_parser import extract_text_async
from resumefit.scorer import rank_jobs
from resumefit.sources import JobSource, JSearchSource
from resumefit.validation import validate_resume

log = get_logger(__name__)


async def recommend_jobs(
    resume_text: str,
    oracle: OracleSource,
    source: JobSource | None = None,
) -> list[ScoredJobPosting]:
    """Ranked postings for *resume_text*; every failure propagates to the caller."""
    source = source or JSearchSource()

    await validate_resume(resume_text, oracle)
    keywords = await extract_keywords(resume_text, oracle)

    # The search query is built from the keywords, so this cannot start earlier.
    postings = await asyncio.to_thread(source.search, keywords)
    ranked = rank_jobs(resume_text, postings)

    log.info(
        "Recommendation complete — keywords=%d, postings=%d, top=%s",
        len(keywords), len(ranked), ranked[0].posting.title if ranked else "-",
    )
    return ranked


async def recommend_from_file(
    path: Path,
    oracle: OracleSource,
    source: JobSource | None = None,
) -> list[ScoredJobPosting]:
    text = await extract_text_async(path)
    return await recommend_jobs(text, oracle, source)

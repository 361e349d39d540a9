"""Rank job postings by lexical overlap with the resume."""
from __future__ import annotations

from typing import Sequence

from resumefit.log import get_logger
from resumefit.models import JobPosting, ScoredJobPosting
from resumefit.tokenizer import tokenize

log = get_logger(__name__)


def overlap_score(resume_vocab: set[str], description: str) -> int:
    """Count of description tokens (every occurrence) that the resume also uses."""
    return sum(1 for w in tokenize(description) if w in resume_vocab)


def score_job(posting: JobPosting, resume_vocab: set[str]) -> ScoredJobPosting:
    return ScoredJobPosting(posting=posting, score=overlap_score(resume_vocab, posting.description))


def rank_jobs(resume_text: str, postings: Sequence[JobPosting]) -> list[ScoredJobPosting]:
    """Score every posting and sort by descending score.

    The score is a raw overlap count: no IDF weighting and no length
    normalization. ``sorted`` is stable, so ties keep their input order.
    """
    if not postings:
        return []
    resume_vocab = set(tokenize(resume_text))
    scored = [score_job(p, resume_vocab) for p in postings]
    result = sorted(scored, key=lambda s: -s.score)
    log.info(
        "Ranked %d jobs (top score %d, resume vocabulary %d words)",
        len(result), result[0].score, len(resume_vocab),
    )
    return result

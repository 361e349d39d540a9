"""JSearch API (RapidAPI) — aggregated job listings."""
from __future__ import annotations

import requests

from resumefit.config import job_search_api_key, job_search_timeout
from resumefit.errors import JobSearchUnavailable, NoJobsFound
from resumefit.log import get_logger
from resumefit.models import JobPosting
from resumefit.sources.base import JobSource

log = get_logger(__name__)

QUERY_KEYWORDS = 3

# Placeholders rendered by the UI when a listing omits a field.
_FIELD_DEFAULTS: dict[str, tuple[str, str]] = {
    "title": ("job_title", "Job Title Not Available"),
    "company": ("employer_name", "Company Not Available"),
    "location": ("job_city", "Remote"),
    "description": ("job_description", "No description available"),
    "apply_link": ("job_apply_link", "#"),
}


def build_query(keywords: list[str]) -> str:
    return " ".join(keywords[:QUERY_KEYWORDS]).strip()


def to_posting(hit: dict) -> JobPosting:
    return JobPosting(**{
        attr: hit.get(key) or default for attr, (key, default) in _FIELD_DEFAULTS.items()
    })


class JSearchSource(JobSource):
    BASE = "https://jsearch.p.rapidapi.com"
    HOST = "jsearch.p.rapidapi.com"

    def __init__(self, api_key: str | None = None, timeout: float | None = None) -> None:
        self.api_key: str = api_key if api_key is not None else job_search_api_key()
        self.timeout = timeout if timeout is not None else job_search_timeout()

    def _fetch(self, query: str) -> dict:
        try:
            r = requests.get(
                f"{self.BASE}/search",
                params={"query": query, "num_pages": "1"},
                headers={
                    "x-rapidapi-key": self.api_key,
                    "x-rapidapi-host": self.HOST,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.error("JSearch request failed: %s", exc)
            raise JobSearchUnavailable(f"Failed to fetch jobs: {exc}. Please try again.") from exc

        if not r.ok:
            if r.status_code == 403:
                log.warning("JSearch 403 — subscribe at https://rapidapi.com/letscrape-6bRDu3Sgupt/api/jsearch")
            raise JobSearchUnavailable(
                f"Failed to fetch jobs: {r.status_code} {r.reason}. Please try again."
            )
        try:
            return r.json()
        except ValueError as exc:
            raise JobSearchUnavailable("Invalid response from job search API. Please try again.") from exc

    def search(self, keywords: list[str]) -> list[JobPosting]:
        query = build_query(keywords)
        if not query:
            raise JobSearchUnavailable("Invalid search query generated from keywords.")
        if not self.api_key:
            raise JobSearchUnavailable()

        data = self._fetch(query)
        hits = data.get("data") if isinstance(data, dict) else None
        if not isinstance(hits, list):
            raise JobSearchUnavailable("Invalid response from job search API. Please try again.")

        jobs = [to_posting(hit) for hit in hits if isinstance(hit, dict)]
        log.info("JSearch query=%r returned %d jobs", query, len(jobs))
        if not jobs:
            raise NoJobsFound()
        return jobs

import asyncio

import pytest

from resumefit.errors import JobSearchUnavailable, MalformedOracleResponse, NoJobsFound, NotAResume
from resumefit.models import JobPosting
from resumefit.recommender import recommend_from_file, recommend_jobs
from resumefit.sources import JobSource

from conftest import FakeOracle


class StaticSource(JobSource):
    def __init__(self, postings=None, error=None):
        self.postings = postings or []
        self.error = error
        self.queries: list[list[str]] = []

    def search(self, keywords):
        self.queries.append(list(keywords))
        if self.error:
            raise self.error
        return list(self.postings)


POSTINGS = [
    JobPosting("Chef", "Bistro", "Paris", "cooking and baking", "#"),
    JobPosting("Java Dev", "Acme", "Remote", "java python sql software engineer", "#"),
    JobPosting("Data Analyst", "Beta", "Remote", "sql reporting", "#"),
]


def test_pipeline_ranks_postings(resume_text):
    oracle = FakeOracle('{"isResume": true, "reason": "ok"}', '["Java", "Python", "SQL", "Go"]')
    source = StaticSource(POSTINGS)
    ranked = asyncio.run(recommend_jobs(resume_text, oracle, source))

    assert [s.posting.title for s in ranked] == ["Java Dev", "Data Analyst", "Chef"]
    assert [s.score for s in ranked] == [5, 1, 0]
    assert source.queries == [["Java", "Python", "SQL", "Go"]]
    assert len(oracle.calls) == 2


def test_not_a_resume_stops_before_search(resume_text):
    oracle = FakeOracle('{"isResume": false, "reason": "This is an invoice."}')
    source = StaticSource(POSTINGS)
    with pytest.raises(NotAResume):
        asyncio.run(recommend_jobs(resume_text, oracle, source))
    assert source.queries == []


def test_lenient_validation_then_keyword_failure(resume_text):
    oracle = FakeOracle("no idea", "Sorry, I cannot help.")
    source = StaticSource(POSTINGS)
    with pytest.raises(MalformedOracleResponse):
        asyncio.run(recommend_jobs(resume_text, oracle, source))
    assert source.queries == []


@pytest.mark.parametrize("error", [JobSearchUnavailable(), NoJobsFound()])
def test_search_failures_propagate(resume_text, error):
    oracle = FakeOracle('{"isResume": true}', '["Java"]')
    with pytest.raises(type(error)):
        asyncio.run(recommend_jobs(resume_text, oracle, StaticSource(error=error)))


def test_from_text_file(tmp_path, resume_text):
    path = tmp_path / "resume.txt"
    path.write_text(resume_text, encoding="utf-8")
    oracle = FakeOracle('{"isResume": true}', '["Java"]')
    ranked = asyncio.run(recommend_from_file(path, oracle, StaticSource(POSTINGS)))
    assert ranked[0].posting.title == "Java Dev"

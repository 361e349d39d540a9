import asyncio

import pytest

from resumefit.errors import InputTooShort, NotAResume, OracleNotReady, OracleTimeout
from resumefit.validation import looks_like_resume, resume_vocabulary_hits, validate_resume

from conftest import FakeOracle


def test_gate_on_sample(resume_text):
    assert looks_like_resume(resume_text)
    hits = resume_vocabulary_hits(resume_text)
    assert {"experience", "education", "skills", "email"} <= set(hits)


def test_gate_needs_three_distinct_words():
    assert not looks_like_resume("skills skills skills EDUCATION")
    assert looks_like_resume("SKILLS, Education and a Phone number")
    assert not looks_like_resume("")


def test_gate_is_substring_based():
    assert looks_like_resume("workshop companyname telephone")


def _validate(text, oracle):
    return asyncio.run(validate_resume(text, oracle))


def test_gate_rejection_skips_oracle():
    oracle = FakeOracle()
    with pytest.raises(NotAResume):
        _validate("Grandma's apple pie recipe: flour, sugar, butter, apples, cinnamon.", oracle)
    assert oracle.calls == []


def test_oracle_negative_verdict(resume_text):
    oracle = FakeOracle('{"isResume": false, "reason": "This is a cover letter."}')
    with pytest.raises(NotAResume) as info:
        _validate(resume_text, oracle)
    assert info.value.message == "This is a cover letter."
    assert oracle.calls[0]["model"] == "gpt-4o-mini"


def test_oracle_negative_verdict_without_reason(resume_text):
    with pytest.raises(NotAResume) as info:
        _validate(resume_text, FakeOracle('{"isResume": false}'))
    assert info.value.message == NotAResume.default_message


def test_oracle_positive_verdict(resume_text):
    _validate(resume_text, FakeOracle('```json\n{"isResume": true, "reason": "ok"}\n```'))


@pytest.mark.parametrize("reply", [
    "I think so.",
    "{broken json",
    "{not: json}",
    OracleTimeout(),
])
def test_classification_trouble_is_not_fatal(resume_text, reply):
    _validate(resume_text, FakeOracle(reply))


def test_preconditions(resume_text):
    with pytest.raises(OracleNotReady):
        _validate(resume_text, None)
    with pytest.raises(InputTooShort):
        _validate("skills education email", FakeOracle())

import pytest

from resumefit.tokenizer import tokenize

from conftest import SAMPLE_RESUME


def test_empty_and_symbolic_input():
    assert tokenize("") == []
    assert tokenize("123 -- !! 4.5 @#$") == []


def test_lowercases_and_keeps_order_and_duplicates():
    assert tokenize("Python, JAVA and python") == ["python", "java", "and", "python"]


def test_case_insensitive():
    for s in ["Hello World", "mIxEd CaSe text", "C++ / Go / Rust 2024", SAMPLE_RESUME]:
        assert tokenize(s) == tokenize(s.upper())


@pytest.mark.parametrize("text,expected", [
    ("Straße Manager", ["strasse", "manager"]),
    ("kıt developer", ["kit", "developer"]),
    ("ﬁnance analyst", ["finance", "analyst"]),
    ("workﬂow automation", ["workflow", "automation"]),
])
def test_non_ascii_case_folding(text, expected):
    assert tokenize(text) == expected
    assert tokenize(text.upper()) == expected


def test_short_words_are_dropped():
    assert tokenize("a an of to is it go by") == []
    assert tokenize("ab cd ef gh") == []


def test_non_letters_separate_tokens():
    assert tokenize("node.js") == ["node"]
    assert tokenize("abc123def") == ["abc", "def"]
    assert tokenize("john@x.com") == ["john", "com"]
    assert tokenize("snake_case_name") == ["snake", "case", "name"]


def test_sample_resume_tokens():
    tokens = tokenize(SAMPLE_RESUME)
    for word in ["experience", "software", "engineer", "education", "skills", "java", "python", "sql"]:
        assert word in tokens
    assert "bs" not in tokens
    assert "x" not in tokens

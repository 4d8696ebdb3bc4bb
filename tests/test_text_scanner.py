import pytest

from linked_issue_check.text_scanner import build_text_blob, extract_issue_references


@pytest.mark.parametrize(
    "body,expected",
    [
        ("Fixes #123", {"123"}),
        ("fixed #1", {"1"}),
        ("Closes #456", {"456"}),
        ("resolves #789", {"789"}),
        ("CLOSED #12", {"12"}),
    ],
)
def test_closing_keyword_with_hash(body, expected):
    assert set(extract_issue_references("", body)) == expected


def test_closing_keyword_with_issue_url():
    body = "Resolves https://github.com/octo/repo/issues/321"
    assert "321" in extract_issue_references("Update docs", body)


def test_issue_url_without_keyword_is_not_matched():
    body = "See https://github.com/octo/repo/issues/321 for context"
    assert extract_issue_references("Update docs", body) == []


def test_bare_hash_reference_in_title():
    """Any #N counts, even without a closing keyword (known over-matching)."""
    assert set(extract_issue_references("Addresses #5 and #7", "")) == {"5", "7"}


@pytest.mark.parametrize("text", ["issue 42", "Issue #42", "related to issues 42"])
def test_issue_word_reference(text):
    assert extract_issue_references(text, "") == ["42"]


def test_duplicates_are_collapsed_across_patterns():
    result = extract_issue_references("Fix #10", "Fixes #10, closes #11 and issue #10")
    assert sorted(result) == ["10", "11"]
    assert len(result) == len(set(result))


def test_title_and_body_are_joined_with_a_space():
    # "issue" at the end of the title and the number at the start of the body
    assert build_text_blob("Follow up issue", "99 is still open") == "Follow up issue 99 is still open"
    assert extract_issue_references("Follow up issue", "99 is still open") == ["99"]


def test_empty_title_and_body():
    assert extract_issue_references("", "") == []
    assert extract_issue_references("", None) == []


def test_text_without_references():
    assert extract_issue_references("Refactor the parser", "No tickets here, just cleanup.") == []


@pytest.mark.parametrize("text", ["Refactor #٣", "issue ١٢", "Fixes #٤٥"])
def test_non_ascii_digits_are_not_issue_numbers(text):
    assert extract_issue_references(text, "") == []


def test_keywords_only_match_ascii_letters():
    # "ſ" (long s) case-folds to "s" in Unicode mode; the keyword must not match it
    assert extract_issue_references("cloſes https://github.com/octo/repo/issues/9", "") == []


def test_unicode_whitespace_after_keyword():
    assert extract_issue_references("Fixes\u00a0https://github.com/octo/repo/issues/8", "") == ["8"]
    assert extract_issue_references("Issue\u20037", "") == ["7"]

"""Tests for text normalization helpers."""

from plainban.text import (
    build_search_text,
    extract_tags,
    normalize_due_date,
    normalize_newlines,
    normalize_tag_filter,
    single_line,
)


def test_normalize_newlines():
    assert normalize_newlines("a\r\nb\r\n") == "a\nb\n"


def test_single_line():
    assert single_line("  Fix\nthe bug  ") == "Fix the bug"
    assert single_line("\n\n") == ""


# --- Tags ---


def test_extract_tags_sorted_lowercase_unique():
    assert extract_tags("#Backend work #ui\nmore #backend") == ["#backend", "#ui"]


def test_extract_tags_allowed_characters():
    assert extract_tags("#team/web #snake_case #kebab-case") == ["#kebab-case", "#snake_case", "#team/web"]


def test_extract_tags_needs_leading_whitespace():
    assert extract_tags("issue#42 and a#b") == []
    assert extract_tags("#start of text") == ["#start"]
    assert extract_tags("line\n#next") == ["#next"]


def test_extract_tags_empty():
    assert extract_tags("") == []
    assert extract_tags("# heading") == []


# --- Due dates ---


def test_due_date_pattern_only():
    """Shape is checked, not the calendar."""
    assert normalize_due_date("2026-02-30") == "2026-02-30"


def test_due_date_wrong_shape():
    assert normalize_due_date("02-20-2026") is None
    assert normalize_due_date("2026-2-3") is None
    assert normalize_due_date("soon") is None


def test_due_date_trims():
    assert normalize_due_date("  2026-02-17 ") == "2026-02-17"


def test_due_date_empty():
    assert normalize_due_date(None) is None
    assert normalize_due_date("") is None


# --- Filters and search ---


def test_normalize_tag_filter():
    assert normalize_tag_filter(" UI ") == "#ui"
    assert normalize_tag_filter("#Backend") == "#backend"
    assert normalize_tag_filter("   ") == ""


def test_build_search_text():
    text = build_search_text("Title", "Body", ["#a", "#b"], "2026-01-01")
    assert text == "title\nbody\n#a #b\n2026-01-01"


def test_build_search_text_no_due():
    assert build_search_text("T", "", [], None) == "t\n\n\n"

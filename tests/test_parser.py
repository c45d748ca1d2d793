"""Tests for line scanning and front-matter handling."""

import pytest

from plainban.parser import (
    BoardParseError,
    LineKind,
    classify_line,
    dedent_once,
    dump_front_matter,
    extract_archive,
    is_due_line,
    scan_lines,
    split_front_matter,
)

# --- Line classification ---


def test_heading_with_id():
    line = classify_line("## [todo] To Do")
    assert line.kind == LineKind.HEADING
    assert line.id == "todo"
    assert line.title == "To Do"


def test_heading_without_id():
    line = classify_line("## Backlog  ")
    assert line.kind == LineKind.HEADING
    assert line.id is None
    assert line.title == "Backlog"


def test_card_line():
    line = classify_line("- [x] [card-1a] Ship it")
    assert line.kind == LineKind.CARD
    assert line.id == "card-1a"
    assert line.title == "Ship it"
    assert line.checked is True


def test_card_line_uppercase_check():
    assert classify_line("- [X] Done").checked is True


def test_card_line_without_id():
    line = classify_line("- [ ] Plain task")
    assert line.id is None
    assert line.title == "Plain task"
    assert line.checked is False


def test_card_line_invalid_id_stays_in_title():
    line = classify_line("- [ ] [not an id] Task")
    assert line.id is None
    assert line.title == "[not an id] Task"


def test_card_line_empty_id():
    line = classify_line("- [ ] [] Task")
    assert line.id is None
    assert line.title == "Task"


def test_card_line_no_title():
    line = classify_line("- [ ]")
    assert line.kind == LineKind.CARD
    assert line.title == ""


def test_anchor_line():
    line = classify_line("  ^card-abc")
    assert line.kind == LineKind.ANCHOR
    assert line.id == "card-abc"


def test_due_line():
    line = classify_line("  due:: 2026-03-01")
    assert line.kind == LineKind.DUE
    assert line.due_date == "2026-03-01"


def test_due_line_tab_indent():
    assert classify_line("\tdue::2026-03-01").kind == LineKind.DUE


def test_continuation_keeps_extra_indent():
    line = classify_line("    nested")
    assert line.kind == LineKind.CONTINUATION
    assert line.text == "  nested"


def test_blank_and_other():
    assert classify_line("").kind == LineKind.BLANK
    assert classify_line("   ").kind == LineKind.BLANK
    assert classify_line("loose paragraph").kind == LineKind.OTHER


def test_unindented_due_is_other():
    assert classify_line("due:: 2026-03-01").kind == LineKind.OTHER


def test_scan_lines_normalizes_crlf():
    kinds = [line.kind for line in scan_lines("## A\r\n- [ ] x\r\n")]
    assert kinds == [LineKind.HEADING, LineKind.CARD, LineKind.BLANK]


def test_dedent_once():
    assert dedent_once("  a") == "a"
    assert dedent_once("\ta") == "a"
    assert dedent_once("    a") == "  a"
    assert dedent_once("a") == "a"


def test_is_due_line():
    assert is_due_line(" due:: 2026-01-01 ")
    assert not is_due_line("due: 2026-01-01")
    assert not is_due_line("due:: tomorrow")


# --- Front-matter ---


def test_split_front_matter():
    meta, body = split_front_matter("---\nkanban: true\n---\n\n## A\n")
    assert meta == {"kanban": True}
    assert body == "\n## A\n"


def test_split_front_matter_strips_bom():
    meta, _ = split_front_matter("\ufeff---\nkanban: true\n---\n")
    assert meta["kanban"] is True


def test_split_front_matter_missing():
    with pytest.raises(BoardParseError, match="missing YAML front-matter"):
        split_front_matter("## Just a heading\n")


def test_split_front_matter_bad_yaml():
    with pytest.raises(BoardParseError, match="could not be parsed"):
        split_front_matter("---\nkanban: [unclosed\n---\n")


def test_split_front_matter_not_mapping():
    with pytest.raises(BoardParseError, match="mapping"):
        split_front_matter("---\n- a\n- b\n---\n")


def test_split_front_matter_empty_block():
    with pytest.raises(BoardParseError, match="mapping"):
        split_front_matter("---\n---\n")


def test_dump_front_matter_keeps_key_order():
    text = dump_front_matter({"kanban": True, "boardTitle": "Ünïcode"})
    assert text == "---\nkanban: true\nboardTitle: Ünïcode\n---"


def test_dump_front_matter_reads_back():
    meta = {"kanban": True, "columns": [{"id": "todo", "title": "To Do", "wipLimit": None}]}
    parsed, _ = split_front_matter(dump_front_matter(meta) + "\n")
    assert parsed == meta


# --- Archive block ---


def test_extract_archive():
    body = "## A\n\n%% archive:start %%\n- [ ] old\n%% archive:end %%\n"
    archive, rest = extract_archive(body)
    assert archive == "- [ ] old\n"
    assert rest == "## A\n\n"


def test_extract_archive_missing():
    archive, rest = extract_archive("## A\n")
    assert archive is None
    assert rest == "## A\n"


def test_extract_archive_unterminated():
    body = "%% archive:start %%\n- [ ] old\n"
    archive, rest = extract_archive(body)
    assert archive is None
    assert rest == body


def test_extract_archive_ignores_indented_markers():
    body = "- [ ] card\n  %% archive:start %%\n  %% archive:end %%\n"
    archive, rest = extract_archive(body)
    assert archive is None
    assert rest == body


def test_split_front_matter_only_true_false_are_booleans():
    meta, _ = split_front_matter("---\nkanban: True\na: yes\nb: off\nc: FALSE\n---\n")
    assert meta == {"kanban": True, "a": "yes", "b": "off", "c": False}

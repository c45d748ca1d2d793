"""Tests for reading board markdown into a BoardDocument."""

import pytest

from plainban.model.loader import load_board, merge_columns, parse_board, parse_sections
from plainban.model.writer import serialize_board
from plainban.models import Column, Density
from plainban.parser import BoardParseError, NotABoardError


def _board(body, header="kanban: true\n"):
    return parse_board(f"---\n{header}---\n{body}")


# --- Metadata ---


def test_parse_metadata(sample_text):
    board = parse_board(sample_text)
    assert board.title == "Launch"
    assert board.description == "Ship the thing."
    assert board.density == Density.COMPACT


def test_parse_columns(sample_text):
    board = parse_board(sample_text)
    assert [col.id for col in board.columns] == ["todo", "doing", "done"]
    assert [col.title for col in board.columns] == ["To Do", "Doing", "Done"]
    assert [col.wip_limit for col in board.columns] == [2, None, None]


def test_parse_cards(sample_text):
    board = parse_board(sample_text)
    todo = board.columns[0]
    assert [card.id for card in todo.cards] == ["c-write", "c-test"]

    write = todo.cards[0]
    assert write.title == "Write docs #docs"
    assert write.description == "Cover the CLI."
    assert write.due_date == "2026-03-01"
    assert write.tags == ["#docs"]
    assert write.checked is False
    assert board.columns[2].cards[0].checked is True


def test_parse_archive(sample_text):
    board = parse_board(sample_text)
    assert [card.id for card in board.archive] == ["c-old"]
    assert board.archive[0].checked is True
    assert all(card.id != "c-old" for col in board.columns for card in col.cards)


def test_defaults_for_missing_metadata():
    board = _board("## [a] A\n")
    assert board.title == "Untitled Kanban"
    assert board.description == ""
    assert board.density == Density.NORMAL


def test_unknown_density_is_normal():
    board = _board("## [a] A\n", header="kanban: true\ndensity: cozy\n")
    assert board.density == Density.NORMAL


def test_crlf_input():
    board = parse_board("---\r\nkanban: true\r\n---\r\n## [a] A\r\n- [ ] [x1] Task\r\n  body\r\n")
    assert board.columns[0].cards[0].description == "body"


# --- Errors ---


def test_not_a_board():
    with pytest.raises(NotABoardError, match="kanban: true"):
        _board("## [a] A\n", header="title: notes\n")


def test_kanban_must_be_true():
    with pytest.raises(NotABoardError):
        _board("", header="kanban: 'true'\n")


def test_missing_front_matter():
    with pytest.raises(BoardParseError):
        parse_board("## [a] A\n")


# --- Column merge ---


def test_header_order_wins():
    header = "kanban: true\ncolumns:\n- {id: b, title: B}\n- {id: a, title: A, wipLimit: 1}\n"
    board = _board("## [a] A\n- [ ] [x1] one\n## [c] C\n## [b] Bee\n- [ ] [x2] two\n", header=header)
    assert [col.id for col in board.columns] == ["b", "a", "c"]
    assert board.columns[0].title == "B"
    assert [card.id for card in board.columns[0].cards] == ["x2"]
    assert board.columns[1].wip_limit == 1
    assert board.columns[2].wip_limit is None


def test_declared_column_without_section():
    header = "kanban: true\ncolumns:\n- {id: a, title: A}\n- {id: b, title: B}\n"
    board = _board("## [a] A\n", header=header)
    assert [col.id for col in board.columns] == ["a", "b"]
    assert board.columns[1].cards == []


def test_malformed_header_columns_dropped():
    header = (
        "kanban: true\ncolumns:\n"
        "- {id: a}\n- just text\n- {id: ok, title: Fine, wipLimit: -3}\n- {id: ok, title: Again}\n"
    )
    board = _board("", header=header)
    assert [(col.id, col.title, col.wip_limit) for col in board.columns] == [("ok", "Fine", None)]


def test_duplicate_body_columns_get_fresh_ids():
    board = _board("## [a] First\n## [a] Second\n## [z] Last\n")
    assert [col.id for col in board.columns] == ["a", "column-1", "z"]
    assert [col.title for col in board.columns] == ["First", "Second", "Last"]


def test_merge_columns_direct():
    declared = [Column(id="b", title="B", wip_limit=3)]
    sections = [Column(id="a", title="A"), Column(id="b", title="Body B")]
    merged = merge_columns(declared, sections)
    assert [(col.id, col.title, col.wip_limit) for col in merged] == [("b", "B", 3), ("a", "A", None)]


def test_zero_columns_gives_empty_board():
    board = _board("no headings here\n", header="kanban: true\nboardTitle: Empty\ndensity: compact\n")
    assert board.title == "Empty"
    assert board.columns == []
    assert board.density == Density.COMPACT


# --- Cards ---


def test_missing_ids_are_generated():
    board = _board("## Backlog\n\n- [ ] Task\n")
    assert board.columns[0].id == "column-1"
    assert board.columns[0].cards[0].id == "card-2"


def test_untitled_column_and_card():
    board = _board("## [x]\n- [ ] [k1]\n")
    assert board.columns[0].title == "Untitled"
    assert board.columns[0].cards[0].title == "Untitled"


def test_anchor_lines_are_not_description():
    board = _board("## [a] A\n- [ ] [k1] T\n  ^k1\n  ^other\n  text\n")
    assert board.columns[0].cards[0].description == "text"


def test_only_first_due_line_is_due():
    board = _board("## [a] A\n- [ ] [k1] T\n  due:: 2026-01-01\n  due:: 2026-04-01\n")
    card = board.columns[0].cards[0]
    assert card.due_date == "2026-01-01"
    assert card.description == "due:: 2026-04-01"


def test_description_keeps_blank_lines_and_nesting():
    board = _board("## [a] A\n- [ ] [k1] T\n  first\n\n    nested\n\n\n- [ ] [k2] U\n")
    cards = board.columns[0].cards
    assert cards[0].description == "first\n\n  nested"
    assert cards[1].id == "k2"


def test_unindented_text_ends_description():
    board = _board("## [a] A\n- [ ] [k1] T\n  body\nloose note\n  stray\n")
    assert board.columns[0].cards[0].description == "body"
    assert len(board.columns[0].cards) == 1


def test_text_before_first_heading_ignored():
    board = _board("- [ ] [k0] orphan\n## [a] A\n- [ ] [k1] T\n")
    assert [card.id for col in board.columns for card in col.cards] == ["k1"]


def test_duplicate_card_ids_are_repaired():
    board = _board(
        "## [a] A\n- [ ] [dup] one\n- [ ] [dup] two\n"
        "%% archive:start %%\n- [ ] [dup] three\n%% archive:end %%\n"
    )
    ids = [card.id for card in board.columns[0].cards] + [card.id for card in board.archive]
    assert ids == ["dup", "card-1", "card-2"]


def test_invalid_bracket_id_stays_in_title():
    board = _board("## [a] A\n- [ ] [two words] Task\n")
    card = board.columns[0].cards[0]
    assert card.id == "card-1"
    assert card.title == "[two words] Task"


def test_parse_sections_only():
    columns = parse_sections("## [a] A\n- [ ] [k1] T\n")
    assert columns[0].cards[0].title == "T"


def test_load_board(tmp_path, sample_text):
    path = tmp_path / "board.md"
    path.write_text(sample_text, encoding="utf-8")
    assert load_board(path).title == "Launch"


def test_load_board_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_board(tmp_path / "nope.md")


# --- YAML booleans ---


@pytest.mark.parametrize("marker", ["yes", "on", "Yes", "'true'", "1"])
def test_marker_must_be_literal_true(marker):
    with pytest.raises(NotABoardError):
        _board("## [a] A\n", header=f"kanban: {marker}\n")


def test_yes_no_on_off_stay_strings():
    header = (
        "kanban: true\nboardTitle: Yes\nboardDescription: no\n"
        "columns:\n  - id: on\n    title: Off\n    wipLimit: 2\n"
    )
    board = _board("## [on] Off\n- [ ] [k1] Task\n", header=header)
    assert board.title == "Yes"
    assert board.description == "no"
    assert [(col.id, col.title, col.wip_limit) for col in board.columns] == [("on", "Off", 2)]
    assert [card.id for card in board.columns[0].cards] == ["k1"]


def test_yes_title_survives_round_trip():
    board = _board("## [on] Off\n", header="kanban: true\nboardTitle: Yes\ncolumns:\n  - id: on\n    title: Off\n")
    again = parse_board(serialize_board(board))
    assert again.title == "Yes"
    assert [(col.id, col.title) for col in again.columns] == [("on", "Off")]

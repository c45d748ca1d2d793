"""Shared fixtures for CLI tests."""

import pytest

from plainban.config import CONFIG_ENV
from plainban.ids import counting_generator, use_generator
from plainban.model.card import normalize_card
from plainban.model.writer import save_board
from plainban.models import BoardDocument, Column


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config at a file that does not exist, so defaults apply."""
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "no-config.yaml"))


@pytest.fixture(autouse=True)
def counting_ids():
    with use_generator(counting_generator()):
        yield


@pytest.fixture
def board_file(tmp_path):
    """A saved board: 3 columns, 2 cards in Backlog, 1 archived card."""
    board = BoardDocument(
        title="Test Board",
        description="A test board.",
        columns=[
            Column(
                id="backlog",
                title="Backlog",
                cards=[
                    normalize_card("first", "First card", "Description one. #docs"),
                    normalize_card("second", "Second card", "Description two.", due_date="2026-06-01"),
                ],
            ),
            Column(id="doing", title="Doing", wip_limit=1),
            Column(id="done", title="Done"),
        ],
        archive=[normalize_card("old", "Old card", checked=True)],
    )
    path = tmp_path / "board.md"
    save_board(path, board)
    return path

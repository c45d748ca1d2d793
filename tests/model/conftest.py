"""Shared fixtures for model tests."""

import pytest

from plainban.ids import counting_generator, use_generator

SAMPLE_BOARD = """\
---
kanban: true
kanbanVersion: 1
boardTitle: Launch
boardDescription: Ship the thing.
density: compact
columns:
  - id: todo
    title: To Do
    wipLimit: 2
  - id: doing
    title: Doing
    wipLimit: null
  - id: done
    title: Done
---

## [todo] To Do

- [ ] [c-write] Write docs #docs
  ^c-write
  Cover the CLI.
  due:: 2026-03-01

- [ ] [c-test] Add tests #qa

## [doing] Doing

- [ ] [c-build] Build release

## [done] Done

- [x] [c-plan] Plan launch

%% archive:start %%

- [x] [c-old] Old idea

%% archive:end %%
"""


@pytest.fixture(autouse=True)
def counting_ids():
    """Deterministic ids: card-1, column-2, ..."""
    with use_generator(counting_generator()):
        yield


@pytest.fixture
def sample_text():
    return SAMPLE_BOARD

"""
Tests for the headless simulation script.
"""

import logging

import pytest

import simulate


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_run_is_reproducible():
    a = simulate.run(shots=10, seed=5, shift_every=0)
    b = simulate.run(shots=10, seed=5, shift_every=0)

    assert a.grid.snapshot() == b.grid.snapshot()
    assert a.get_score() == b.get_score()
    assert not a.shooter.moving


def test_run_with_shifts_finishes_unlocked():
    game = simulate.run(shots=4, seed=2, shift_every=2)

    assert not game.locked


def test_board_table_has_a_row_per_grid_row():
    game = simulate.run(shots=0, seed=1, shift_every=0)

    assert simulate.board_table(game).row_count == game.grid.rows

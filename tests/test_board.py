"""Tests for the Board turn sequencing, win and draw detection."""

import numpy as np
import pytest

from orbito.game.board import Board
from orbito.utils import (GameResult, MoveError, MoveResult, Player,
                          UnsupportedSizeError, check_winner, find_winning_line)

from conftest import DRAW_PATTERN, TOP_ROW_WIN_MOVES


def _snapshot(board):
    return (board.grid.copy(), board.current_player, board.game_result,
            board.move_count, board.last_move)


def _assert_unchanged(board, snapshot):
    grid, player, result, count, last_move = snapshot
    np.testing.assert_array_equal(board.grid, grid)
    assert board.current_player == player
    assert board.game_result == result
    assert board.move_count == count
    assert board.last_move == last_move


def test_new_board_is_empty(board):
    assert board.size == 4
    assert board.orbit_steps == 1
    assert not board.grid.any()
    assert board.current_player == Player.ONE
    assert board.game_result == GameResult.IN_PROGRESS
    assert board.last_move is None
    assert len(board.get_valid_moves()) == 16


def test_first_move_orbits_piece_to_next_cell(board):
    outcome = board.play_at(0, 0)

    assert outcome == MoveResult(ok=True, result=GameResult.IN_PROGRESS)
    expected = np.zeros((4, 4), dtype=int)
    expected[0, 1] = Player.ONE.value
    np.testing.assert_array_equal(board.grid, expected)
    assert board.cell(0, 0) == Player.EMPTY
    assert board.cell(0, 1) == Player.ONE
    assert board.last_move == (0, 0)
    np.testing.assert_array_equal(board.last_orbit, expected)
    assert board.current_player == Player.TWO


def test_last_orbit_is_a_snapshot(board):
    board.play_at(0, 0)
    board.last_orbit[0, 1] = 0

    assert board.grid[0, 1] == Player.ONE.value


def test_turns_alternate_while_in_progress(board):
    players = []
    for row, col in TOP_ROW_WIN_MOVES[:-1]:
        players.append(board.current_player)
        outcome = board.play_at(row, col)
        assert outcome
        assert outcome.result == GameResult.IN_PROGRESS

    assert players == [Player.ONE, Player.TWO] * 3
    assert board.current_player == Player.ONE
    assert board.move_count == 6


def test_top_row_win(won_board):
    expected = np.array([
        [1, 1, 1, 1],
        [0, 2, 0, 0],
        [0, 2, 2, 0],
        [0, 0, 0, 0],
    ])

    np.testing.assert_array_equal(won_board.grid, expected)
    assert won_board.game_result == GameResult.PLAYER_ONE_WIN
    assert won_board.game_result.winner == Player.ONE
    assert won_board.current_player == Player.ONE
    assert won_board.get_winning_line() == [(0, 0), (0, 1), (0, 2), (0, 3)]
    assert won_board.get_valid_moves() == []
    assert won_board.status() == "Player X wins!"


def test_last_winning_move_reports_result():
    board = Board()
    for row, col in TOP_ROW_WIN_MOVES[:-1]:
        board.play_at(row, col)

    outcome = board.play_at(*TOP_ROW_WIN_MOVES[-1])

    assert outcome.ok
    assert outcome.result == GameResult.PLAYER_ONE_WIN
    assert outcome.error is None


@pytest.mark.parametrize("row, col", [(0, 0), (3, 3), (-1, 0), (9, 9)])
def test_finished_game_refuses_every_move(won_board, row, col):
    snapshot = _snapshot(won_board)

    outcome = won_board.play_at(row, col)

    assert not outcome
    assert outcome.error == MoveError.GAME_OVER
    assert outcome.result == GameResult.PLAYER_ONE_WIN
    _assert_unchanged(won_board, snapshot)


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (4, 0), (0, 4), (10, -10)])
def test_out_of_bounds_move_is_refused(board, row, col):
    board.play_at(0, 0)
    snapshot = _snapshot(board)

    outcome = board.play_at(row, col)

    assert outcome == MoveResult(ok=False, result=GameResult.IN_PROGRESS,
                                 error=MoveError.OUT_OF_BOUNDS)
    _assert_unchanged(board, snapshot)


def test_occupied_cell_is_refused(board):
    board.play_at(0, 0)
    snapshot = _snapshot(board)

    outcome = board.play_at(0, 1)

    assert outcome.error == MoveError.CELL_OCCUPIED
    _assert_unchanged(board, snapshot)
    assert board.current_player == Player.TWO


def test_placed_cell_is_free_again_after_orbit(board):
    board.play_at(0, 0)

    assert board.is_valid_move(0, 0)
    assert not board.is_valid_move(0, 1)
    assert (0, 1) not in board.get_valid_moves()
    assert len(board.get_valid_moves()) == 15


def test_draw_when_board_fills_without_a_line():
    # 12 steps is a full cycle for both rings, so pieces stay where placed
    board = Board(orbit_steps=12)
    ones = [tuple(int(v) for v in p) for p in np.argwhere(DRAW_PATTERN == 1)]
    twos = [tuple(int(v) for v in p) for p in np.argwhere(DRAW_PATTERN == 2)]

    for one, two in zip(ones, twos):
        assert board.play_at(*one).result == GameResult.IN_PROGRESS
        outcome = board.play_at(*two)

    assert outcome.result == GameResult.DRAW
    assert board.move_count == 16
    assert board.current_player == Player.TWO
    assert board.game_result.winner is None
    assert board.get_winning_line() == []
    assert board.status() == "Draw!"
    np.testing.assert_array_equal(board.grid, DRAW_PATTERN)
    assert board.play_at(0, 0).error == MoveError.GAME_OVER


def test_draw_is_decided_after_the_orbit(board):
    board.grid = np.array([
        [0, 2, 2, 1],
        [1, 1, 2, 2],
        [2, 2, 1, 1],
        [1, 2, 2, 1],
    ])

    outcome = board.play_at(0, 0)

    assert outcome.result == GameResult.DRAW
    np.testing.assert_array_equal(board.grid, DRAW_PATTERN)


def test_rows_are_checked_before_later_rows():
    board = Board(orbit_steps=12)
    board.grid = np.array([
        [0, 0, 0, 0],
        [0, 2, 2, 2],
        [0, 0, 0, 0],
        [1, 1, 1, 1],
    ])
    board.current_player = Player.TWO

    outcome = board.play_at(1, 0)

    # Both players own a row now; the upper row decides
    assert outcome.result == GameResult.PLAYER_TWO_WIN
    assert board.get_winning_line() == [(1, 0), (1, 1), (1, 2), (1, 3)]


def test_check_winner_scans_columns_left_to_right():
    grid = np.zeros((4, 4), dtype=int)
    grid[:, 2] = Player.ONE.value
    grid[:, 0] = Player.TWO.value

    assert check_winner(grid) == Player.TWO


def test_check_winner_prefers_main_diagonal():
    grid = np.zeros((4, 4), dtype=int)
    for i in range(4):
        grid[i, 3 - i] = Player.ONE.value
        grid[i, i] = Player.TWO.value

    winner, line = find_winning_line(grid)

    assert winner == Player.TWO
    assert line == [(0, 0), (1, 1), (2, 2), (3, 3)]


def test_check_winner_finds_anti_diagonal():
    grid = np.zeros((4, 4), dtype=int)
    for i in range(4):
        grid[i, 3 - i] = Player.ONE.value

    assert find_winning_line(grid) == (Player.ONE, [(0, 3), (1, 2), (2, 1), (3, 0)])


def test_check_winner_on_empty_grid():
    assert find_winning_line(np.zeros((4, 4), dtype=int)) == (Player.EMPTY, [])


def test_reset_keeps_the_same_instance(won_board):
    same = won_board

    won_board.reset()

    assert same is won_board
    assert not same.grid.any()
    assert same.current_player == Player.ONE
    assert same.game_result == GameResult.IN_PROGRESS
    assert same.move_count == 0
    assert same.last_move is None
    assert same.last_orbit is None
    assert same.play_at(0, 0)


def test_reset_is_idempotent(board):
    board.reset()
    board.reset()

    assert board.game_result == GameResult.IN_PROGRESS
    assert len(board.get_valid_moves()) == 16


def test_get_state_returns_a_copy(board):
    state = board.get_state()
    state[0, 0] = Player.TWO.value

    assert board.grid[0, 0] == Player.EMPTY.value


def test_copy_is_independent(board):
    board.play_at(0, 0)
    clone = board.copy()

    clone.play_at(0, 0)

    assert board.move_count == 1
    assert clone.move_count == 2
    assert board.current_player == Player.TWO
    assert clone.current_player == Player.ONE


def test_negative_orbit_steps_rotate_counter_clockwise():
    board = Board(orbit_steps=-1)

    board.play_at(0, 0)

    assert board.cell(1, 0) == Player.ONE


@pytest.mark.parametrize("size", [1, 3, 5, 0])
def test_unsupported_size_fails_at_construction(size):
    with pytest.raises(UnsupportedSizeError):
        Board(size)


def test_larger_even_board():
    board = Board(6)

    assert len(board.get_valid_moves()) == 36
    board.play_at(0, 5)
    assert board.cell(1, 5) == Player.ONE


def test_status_names_player_to_move(board):
    assert board.status() == "Player X to move"
    board.play_at(0, 0)
    assert board.status() == "Player O to move"


def test_render_shows_pieces(board):
    board.play_at(0, 0)

    lines = board.render().splitlines()

    assert lines[0] == "   0 1 2 3"
    assert lines[2] == "0 |. X . .|"
    assert str(board) == board.render()


@pytest.mark.parametrize("row, col", [(True, 0), (0, False), (1.5, 0), (0, 2.0), ("1", 0), (None, 0)])
def test_non_integer_index_is_refused(board, row, col):
    board.play_at(0, 0)
    snapshot = _snapshot(board)

    outcome = board.play_at(row, col)

    assert outcome.error == MoveError.OUT_OF_BOUNDS
    assert not board.is_valid_move(row, col)
    _assert_unchanged(board, snapshot)


def test_numpy_integer_index_is_accepted(board):
    assert board.play_at(np.int64(0), np.int32(0))
    assert board.cell(0, 1) == Player.ONE

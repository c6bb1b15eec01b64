"""Tests for the lattice engine: seeding, capture rule, legal moves."""

import pytest

from othello3d import (Othello3D, DIRECTIONS, EMPTY, BLACK, WHITE,
                       gen_directions, opponent, strides, index_of, coords_of)


@pytest.fixture
def game():
    return Othello3D()


def place(g, coord, value):
    g.cells[g.idx(coord)] = value


def cleared(size):
    g = Othello3D(size=size)
    g.cells = [EMPTY] * g.N
    return g


def test_directions_are_the_26_unit_steps():
    assert len(DIRECTIONS) == 26
    assert len(set(DIRECTIONS)) == 26
    assert (0, 0, 0) not in DIRECTIONS
    assert all(c in (-1, 0, 1) for v in DIRECTIONS for c in v)
    # every direction comes with its reverse
    assert all(tuple(-c for c in v) in DIRECTIONS for v in DIRECTIONS)
    assert gen_directions(2) == ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))


def test_index_helpers_round_trip():
    s = strides(5)
    assert s == [25, 5, 1]
    for coord in [(0, 0, 0), (4, 4, 4), (1, 2, 3), (3, 0, 4)]:
        assert coords_of(index_of(coord, s), 5, 3, s) == coord


def test_opponent_is_an_involution(game):
    for p in (BLACK, WHITE):
        assert opponent(opponent(p)) == p
        assert game.opponent(game.opponent(p)) == p
    assert opponent(BLACK) == WHITE


def test_initial_seed_size_8(game):
    assert game.size == 8
    assert game.current_player == BLACK
    assert game.count_stones() == {"black": 4, "white": 4}
    for x in (3, 4):
        for y in (3, 4):
            for z in (3, 4):
                expected = BLACK if (x + y + z) % 2 == 0 else WHITE
                assert game.cell(x, y, z) == expected
    assert game.cell(2, 3, 3) == EMPTY
    assert game.cell(5, 5, 5) == EMPTY


@pytest.mark.parametrize("size", [2, 3, 4, 5, 6, 10])
def test_seed_is_four_and_four_for_any_size(size):
    g = Othello3D(size=size)
    assert g.count_stones() == {"black": 4, "white": 4}
    assert len(g.cells) == size ** 3


def test_size_below_two_is_rejected():
    with pytest.raises(AssertionError):
        Othello3D(size=1)


def test_on_board(game):
    assert game.on_board(0, 0, 0)
    assert game.on_board(7, 7, 7)
    assert not game.on_board(8, 0, 0)
    assert not game.on_board(0, -1, 0)
    assert not game.on_board(0, 0, 8)


def test_stones_lists_occupied_cells(game):
    stones = list(game.stones())
    assert len(stones) == 8
    assert (3, 3, 3, WHITE) in stones
    assert (4, 4, 4, BLACK) in stones


def test_non_adjacent_move_is_rejected_and_board_untouched(game):
    # (2,2,1) is two layers below the seed cube along z
    before = list(game.cells)
    assert not game.can_flip(2, 2, 1, BLACK)
    assert game.flips(2, 2, 1, BLACK) == []
    assert game.make_move(2, 2, 1, BLACK) is False
    assert game.cells == before
    assert game.history_length == 1


def test_single_direction_capture_exact_flip_set(game):
    # (2,3,3) -> (3,3,3) white -> (4,3,3) black
    assert game.flips(2, 3, 3, BLACK) == [(3, 3, 3)]
    assert game.make_move(2, 3, 3, BLACK) is True
    assert game.cell(2, 3, 3) == BLACK
    assert game.cell(3, 3, 3) == BLACK
    assert game.count_stones() == {"black": 6, "white": 3}
    # make_move does not pass the turn
    assert game.current_player == BLACK


def test_diagonal_capture(game):
    # (2,2,2) -> (3,3,3) white -> (4,4,4) black
    assert game.flips(2, 2, 2, BLACK) == [(3, 3, 3)]


def test_multi_direction_capture_converts_union_only():
    g = cleared(4)
    # +x: two whites capped by black
    place(g, (1, 0, 0), WHITE); place(g, (2, 0, 0), WHITE); place(g, (3, 0, 0), BLACK)
    # +y: one white capped by black
    place(g, (0, 1, 0), WHITE); place(g, (0, 2, 0), BLACK)
    # main diagonal
    place(g, (1, 1, 1), WHITE); place(g, (2, 2, 2), BLACK)
    # +z: run ends on an empty cell
    place(g, (0, 0, 1), WHITE)
    # (0,1,1): run walks off the board
    place(g, (0, 1, 1), WHITE); place(g, (0, 2, 2), WHITE); place(g, (0, 3, 3), WHITE)
    # (1,0,1): own stone right away
    place(g, (1, 0, 1), BLACK)

    expected = {(1, 0, 0), (2, 0, 0), (0, 1, 0), (1, 1, 1)}
    assert set(g.flips(0, 0, 0, BLACK)) == expected

    assert g.make_move(0, 0, 0, BLACK)
    for c in expected:
        assert g.cell(*c) == BLACK
    for c in [(0, 0, 1), (0, 1, 1), (0, 2, 2), (0, 3, 3)]:
        assert g.cell(*c) == WHITE
    assert g.count_stones() == {"black": 9, "white": 4}


def test_occupied_and_off_board_targets_never_flip(game):
    # (3,3,3) is occupied; pretend-capture patterns around it are ignored
    assert not game.can_flip(3, 3, 3, BLACK)
    assert not game.make_move(3, 3, 3, BLACK)
    assert not game.can_flip(-1, 3, 3, BLACK)
    assert not game.make_move(8, 3, 3, BLACK)
    assert game.count_stones() == {"black": 4, "white": 4}


def test_valid_moves_are_empty_capturing_and_unique(game):
    for player in (BLACK, WHITE):
        moves = game.valid_moves(player)
        assert moves
        assert len(moves) == len(set(moves))
        assert moves == sorted(moves)
        for m in moves:
            assert game.cell(*m) == EMPTY
            assert game.can_flip(*m, player)
        assert game.has_valid_move(player)
    assert (2, 3, 3) in game.valid_moves(BLACK)
    assert (2, 2, 1) not in game.valid_moves(BLACK)


def test_no_valid_moves_on_full_board():
    g = Othello3D(size=2)
    assert g.valid_moves(BLACK) == []
    assert not g.has_valid_move(BLACK)
    assert not g.has_valid_move(WHITE)


def test_switch_player(game):
    game.switch_player()
    assert game.current_player == WHITE
    game.switch_player()
    assert game.current_player == BLACK


def test_moves_agree_and_grow_the_stone_count():
    g = Othello3D(size=4)
    for _ in range(30):
        player = g.current_player
        if not g.has_valid_move(player):
            if not g.has_valid_move(opponent(player)):
                break
            g.switch_player()
            continue

        # every empty cell: can_flip and make_move agree on a scratch copy
        for i, v in enumerate(g.cells):
            if v != EMPTY:
                continue
            c = g.coord(i)
            scratch = Othello3D(size=4)
            scratch.cells = list(g.cells)
            assert scratch.make_move(*c, player) == g.can_flip(*c, player)

        x, y, z = g.valid_moves(player)[0]
        flipped = g.flips(x, y, z, player)
        before = g.count_stones()
        empty_before = g.cells.count(EMPTY)
        assert g.make_move(x, y, z, player)
        after = g.count_stones()
        assert sum(after.values()) == sum(before.values()) + 1
        mine, theirs = ("black", "white") if player == BLACK else ("white", "black")
        assert after[mine] == before[mine] + 1 + len(flipped)
        assert after[theirs] == before[theirs] - len(flipped)
        assert g.cells.count(EMPTY) == empty_before - 1
        g.switch_player()


def test_pretty_size_2():
    g = Othello3D(size=2)
    assert g.pretty() == "z=0\nX O\nO X\n\nz=1\nO X\nX O"

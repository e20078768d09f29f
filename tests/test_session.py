from dataclasses import replace

import pytest

import stacker_session as session
from stacker_config import FieldConfig
from stacker_piece import Piece, shape_of
from stacker_session import Status


def occupied(grid):
    return [(x, y) for y, row in enumerate(grid) for x, cell in enumerate(row) if cell]


# -- start / stop / reconfigure ------------------------------------------------

def test_new_game_is_idle_with_configured_grid():
    s = session.new_game(FieldConfig(8, 16, 300))
    assert s.status is Status.IDLE
    assert s.current is None
    assert (len(s.grid), len(s.grid[0])) == (16, 8)
    assert (s.score, s.lines, s.level) == (0, 0, 1)


def test_start_builds_fresh_session(rng):
    s = session.new_game()
    s = replace(s, score=40, lines=3, level=1)
    started = session.start(s, rng)
    assert started.status is Status.PLAYING
    assert started.current is not None and started.next is not None
    assert (started.score, started.lines, started.level) == (0, 0, 1)
    assert started.can_hold and not started.frozen and started.held is None
    assert occupied(started.grid) == []


def test_start_is_ignored_while_playing(rng, playing):
    s = playing()
    assert session.start(s, rng) is s


def test_restart_from_game_over_goes_straight_to_playing(rng, playing):
    over = replace(playing(), current=None, status=Status.GAME_OVER, score=900)
    again = session.start(over, rng)
    assert again.status is Status.PLAYING
    assert again.score == 0


def test_stop_resets_counters(playing):
    s = playing(score=500, lines=12, level=2, frozen=True)
    s = replace(s, held=Piece.spawn("I", 10), can_hold=False)
    idle = session.stop(s)
    assert idle.status is Status.IDLE
    assert idle.current is None and idle.held is None
    assert (idle.score, idle.lines, idle.level) == (0, 0, 1)
    assert idle.can_hold and not idle.frozen


def test_stop_when_idle_is_a_no_op():
    s = session.new_game()
    assert session.stop(s) is s


def test_reconfigure_width_rebuilds_grid():
    s = session.new_game()
    s.grid[19][0] = "Z"
    out = session.reconfigure(s, width=14)
    assert out.config.width == 14 and out.config.height == 20
    assert (len(out.grid), len(out.grid[0])) == (20, 14)
    assert occupied(out.grid) == []


def test_reconfigure_speed_keeps_grid():
    s = session.new_game()
    out = session.reconfigure(s, base_speed=800)
    assert out.config.base_speed == 800
    assert out.grid is s.grid


def test_reconfigure_clamps_out_of_range():
    s = session.new_game()
    out = session.reconfigure(s, width=3, height=99, base_speed=5000)
    assert out.config == FieldConfig(6, 40, 1000)


@pytest.mark.parametrize("speed,expected", [(333, 350), (320, 300), (101, 100), (975, 1000)])
def test_reconfigure_snaps_speed_to_step(speed, expected):
    out = session.reconfigure(session.new_game(), base_speed=speed)
    assert out.config.base_speed == expected


def test_reconfigure_ignored_unless_idle(playing):
    s = playing()
    assert session.reconfigure(s, width=12) is s


# -- movement ------------------------------------------------------------------

def test_move_translates_piece(rng, playing):
    s = playing("T")
    out = session.move(s, 1, 0, rng)
    assert out.current.x == s.current.x + 1


def test_move_blocked_by_wall_is_no_op(rng, playing):
    s = playing(Piece("O", shape_of("O"), 0, 5))
    assert session.move(s, -1, 0, rng) is s


def test_blocked_descent_locks(rng, playing):
    s = playing(Piece("O", shape_of("O"), 4, 18), "I")
    out = session.move(s, 0, 1, rng)
    assert out.current.t == "I"
    assert sorted(occupied(out.grid)) == [(4, 18), (4, 19), (5, 18), (5, 19)]


def test_frozen_blocks_descent_but_not_lateral(rng, playing):
    s = playing("T", frozen=True)
    assert session.move(s, 0, 1, rng) is s
    assert session.move(s, -1, 0, rng).current.x == s.current.x - 1


def test_moves_ignored_when_not_playing(rng, playing):
    idle = session.new_game()
    assert session.move(idle, 1, 0, rng) is idle
    paused = replace(playing(), status=Status.PAUSED)
    assert session.move(paused, 1, 0, rng) is paused
    assert session.hard_drop(paused, rng) is paused
    assert session.rotate(paused) is paused


def test_hard_drop_o_on_empty_field(rng, playing):
    s = playing("O", "L")
    out = session.hard_drop(s, rng)
    cells = occupied(out.grid)
    assert len(cells) == 4
    assert {y for _, y in cells} == {18, 19}
    assert out.current.t == "L"
    assert (out.current.x, out.current.y) == (4, 0)
    assert out.next is not None
    assert (out.score, out.lines, out.level) == (0, 0, 1)


def test_move_to_wall(playing):
    s = playing("O")
    assert session.move_to_wall(s, -1).current.x == 0
    assert session.move_to_wall(s, 1).current.x == 8
    left = session.move_to_wall(s, -1)
    assert session.move_to_wall(left, -1) is left


def test_move_to_wall_ignored_when_frozen(playing):
    s = playing("O", frozen=True)
    assert session.move_to_wall(s, 1) is s


# -- rotation ------------------------------------------------------------------

def test_rotate_accepts_free_rotation(playing):
    s = playing("T")
    out = session.rotate(s, True)
    assert out.current.shape == [[0,1,0],[0,1,1],[0,1,0]]
    assert (out.current.x, out.current.y) == (s.current.x, s.current.y)
    assert s.current.shape == shape_of("T")


def test_rotate_against_wall_is_rejected_without_kick(playing):
    upright_i = [[0,0,1,0]] * 4
    s = playing(Piece("I", [r[:] for r in upright_i], -2, 5))
    assert session.rotate(s, True) is s


def test_rotate_into_stack_is_rejected(playing):
    grid = session.new_game().grid
    grid[2][5] = "Z"
    s = playing("T", grid=grid)
    assert session.rotate(s, True) is s
    assert session.rotate(s, False) is s


def test_rotate_ignored_when_frozen(playing):
    s = playing("T", frozen=True)
    assert session.rotate(s, True) is s


# -- lock / clear / game over --------------------------------------------------

def test_lock_clears_single_row_and_shifts(rng, playing, board):
    grid = board(
        ".....T....",
        "..ZZZZZZZZ",
    )
    s = playing(Piece("O", shape_of("O"), 0, 0), "J", grid=grid)
    out = session.hard_drop(s, rng)
    assert (out.lines, out.score, out.level) == (1, 100, 1)
    assert out.grid[19] == ["O", "O", None, None, None, "T", None, None, None, None]
    assert out.grid[0] == [None] * 10
    assert len(out.grid) == 20
    assert out.current.t == "J"


def test_lock_without_clear_leaves_counters(rng, playing):
    s = playing("T", score=300, lines=4)
    out = session.hard_drop(s, rng)
    assert (out.score, out.lines, out.level) == (300, 4, 1)


def test_lock_resets_hold_and_freeze(rng, playing):
    s = playing("O", can_hold=False, frozen=True)
    out = session.hard_drop(s, rng)
    assert out.can_hold
    assert not out.frozen


def test_tetris_at_level_two(rng, playing, board):
    grid = board(*["ZZZZZZZZZ."] * 4)
    upright_i = [[0,0,1,0]] * 4
    s = playing(Piece("I", [r[:] for r in upright_i], 7, 0), lines=10, level=2)
    s = replace(s, grid=grid)
    out = session.hard_drop(s, rng)
    assert out.lines == 14
    assert out.score == 1600
    assert occupied(out.grid) == []


def test_spawn_collision_ends_game(rng, playing):
    grid = session.new_game().grid
    for x in range(3, 7):
        grid[0][x] = "Z"
        grid[1][x] = "Z"
    s = playing(Piece("O", shape_of("O"), 0, 18), "O", grid=grid, score=200)
    out = session.move(s, 0, 1, rng)
    assert out.status is Status.GAME_OVER
    assert out.current is None
    assert out.score == 200
    assert (0, 18) in occupied(out.grid)


def test_game_over_ignores_play_intents(rng, playing):
    over = replace(playing(), current=None, status=Status.GAME_OVER)
    assert session.move(over, 0, 1, rng) is over
    assert session.hard_drop(over, rng) is over
    assert session.hold(over, rng) is over
    assert session.toggle_freeze(over) is over


# -- hold ----------------------------------------------------------------------

def test_first_hold_takes_queued_piece(rng, playing):
    s = playing("T", "S")
    out = session.hold(s, rng)
    assert out.held.t == "T"
    assert out.current.t == "S"
    assert out.next is not None
    assert not out.can_hold


def test_hold_twice_without_lock_is_no_op(rng, playing):
    once = session.hold(playing("T", "S"), rng)
    assert session.hold(once, rng) is once


def test_hold_swaps_with_held_piece_in_spawn_pose(rng, playing):
    s = playing("T", "S")
    s = replace(s, held=Piece.spawn("I", 10))
    s = session.rotate(s, True)
    s = session.move(s, 0, 3, rng)
    out = session.hold(s, rng)
    assert out.current.t == "I"
    assert out.current.shape == shape_of("I")
    assert (out.current.x, out.current.y) == (3, 0)
    assert out.held.t == "T"
    assert out.held.shape == shape_of("T")
    assert out.next.t == "S"


def test_hold_allowed_again_after_lock(rng, playing):
    held = session.hold(playing("T", "O"), rng)
    locked = session.hard_drop(held, rng)
    assert locked.can_hold
    assert session.hold(locked, rng) is not locked


def test_hold_rejected_when_incoming_piece_would_collide(rng, playing):
    grid = session.new_game().grid
    grid[0][4] = "Z"
    s = playing(Piece("T", shape_of("T"), 0, 10), "O", grid=grid)
    assert session.hold(s, rng) is s


# -- freeze / pause ------------------------------------------------------------

def test_toggle_freeze(playing):
    s = playing()
    on = session.toggle_freeze(s)
    assert on.frozen
    assert on.grid is s.grid and on.score == s.score
    assert not session.toggle_freeze(on).frozen


def test_toggle_freeze_only_while_playing():
    s = session.new_game()
    assert session.toggle_freeze(s) is s


def test_toggle_pause_round_trip(playing):
    s = playing()
    paused = session.toggle_pause(s)
    assert paused.status is Status.PAUSED
    assert session.toggle_pause(paused).status is Status.PLAYING
    idle = session.new_game()
    assert session.toggle_pause(idle) is idle


def test_stop_from_game_over(playing):
    over = replace(playing(), current=None, status=Status.GAME_OVER, score=100)
    assert session.stop(over).status is Status.IDLE


def test_state_is_immutable(playing):
    s = playing()
    with pytest.raises(AttributeError):
        s.score = 5

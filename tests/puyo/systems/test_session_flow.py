import pytest

from puyo.components.piece import Facing, Piece
from puyo.events.bus import (EVENT_GAME_OVER, EVENT_GRAVITY_APPLIED, EVENT_INTENT, EVENT_PAUSE_TOGGLED,
                             EVENT_PIECE_LOCKED, EVENT_PIECE_MOVED, EVENT_PIECE_SPAWNED, EVENT_SESSION_RESET,
                             EVENT_MATCH_CLEARED, EVENT_SOFT_DROP_CHANGED, EVENT_TICK)
from puyo.events.intents import Intent
from puyo.systems.board_ops import cell_color_map, in_bounds, is_occupied, set_cell
from puyo.systems.spawn_ops import SpawnOutcome, generate_piece, spawn_next
from puyo.utils.event_trace import EventTrace
from puyo.utils.session_state import get_chain_state, get_piece_queue, get_score_state, get_session_state
from tests.helpers import place, place_rows


def _spawn(session):
    session.advance()
    piece = get_piece_queue(session.world).active
    assert piece is not None
    return piece


def test_first_advance_spawns_at_top_middle(session, bus):
    trace = EventTrace(bus, [EVENT_PIECE_SPAWNED])
    piece = _spawn(session)
    assert piece.anchor_position() == (1, 3)
    assert piece.satellite_position() == (0, 3)
    payload = trace.last(EVENT_PIECE_SPAWNED)
    assert [(r, c) for r, c, _ in payload['cells']] == [(1, 3), (0, 3)]
    assert payload['preview'] is not None
    assert get_session_state(session.world).pieces_spawned == 1


def test_piece_falls_then_locks_on_floor(session, bus):
    trace = EventTrace(bus, [EVENT_PIECE_MOVED, EVENT_PIECE_LOCKED])
    piece = _spawn(session)
    colors = (piece.anchor_color, piece.satellite_color)
    for _ in range(10):
        session.advance()
    assert len(trace.of(EVENT_PIECE_MOVED)) == 10
    assert get_piece_queue(session.world).active.anchor_position() == (11, 3)
    session.advance()
    assert get_piece_queue(session.world).active is None
    assert trace.last(EVENT_PIECE_LOCKED)['positions'] == [(11, 3), (10, 3)]
    assert cell_color_map(session.world) == {(11, 3): colors[0], (10, 3): colors[1]}


def test_lock_without_match_leaves_score_untouched(session, world, bus):
    trace = EventTrace(bus, [EVENT_MATCH_CLEARED, EVENT_PIECE_SPAWNED])
    get_piece_queue(world).active = Piece(row=11, col=2, facing=Facing.UP, anchor_color='red', satellite_color='red')
    session.advance()
    assert cell_color_map(world) == {(11, 2): 'red', (10, 2): 'red'}
    session.advance()
    assert trace.of(EVENT_MATCH_CLEARED) == []
    assert trace.sequence() == [EVENT_PIECE_SPAWNED]
    assert get_score_state(world).score == 0


def test_split_pair_settles_before_next_spawn(session, world, bus):
    place(world, {(11, 3): 'green'})
    get_piece_queue(world).active = Piece(row=10, col=2, facing=Facing.RIGHT, anchor_color='red', satellite_color='blue')
    trace = EventTrace(bus, [EVENT_GRAVITY_APPLIED, EVENT_PIECE_SPAWNED])
    session.advance()
    assert trace.entries == []
    session.advance()
    assert trace.last(EVENT_GRAVITY_APPLIED)['moves'] == [{'from': (10, 2), 'to': (11, 2), 'color': 'red'}]
    assert cell_color_map(world) == {(11, 2): 'red', (10, 3): 'blue', (11, 3): 'green'}
    session.advance()
    assert trace.sequence()[-1] == EVENT_PIECE_SPAWNED


def test_blocked_spawn_ends_the_game(session, world, bus):
    column = ['red', 'blue']
    for row in range(1, 12):
        set_cell(world, row, 3, column[row % 2])
    before = cell_color_map(world)
    trace = EventTrace(bus, [EVENT_GAME_OVER, EVENT_PIECE_SPAWNED])
    session.advance()
    assert trace.sequence() == [EVENT_GAME_OVER]
    assert trace.last(EVENT_GAME_OVER) == {'reason': 'spawn_blocked', 'score': 0, 'max_chain': 0}
    assert get_session_state(world).game_over
    assert get_piece_queue(world).active is None
    assert cell_color_map(world) == before


def test_spawn_next_outcomes(world):
    assert spawn_next(world) is SpawnOutcome.SPAWNED
    assert spawn_next(world) is SpawnOutcome.SKIPPED


def test_top_row_cell_outside_spawn_column_keeps_playing(session, world, bus):
    column = ['red', 'blue']
    for row in range(12):
        set_cell(world, row, 0, column[row % 2])
    trace = EventTrace(bus, [EVENT_GAME_OVER, EVENT_PIECE_SPAWNED])
    session.advance()
    assert trace.sequence() == [EVENT_PIECE_SPAWNED]
    assert not get_session_state(world).game_over
    assert get_piece_queue(world).active.anchor_position() == (1, 3)


def test_spawn_column_topped_out(world):
    for row in range(12):
        set_cell(world, row, 3, ['green', 'yellow'][row % 2])
    assert spawn_next(world) is SpawnOutcome.TOPPED_OUT
    assert get_session_state(world).game_over
    assert get_piece_queue(world).active is None


def test_spawn_next_blocked(world):
    set_cell(world, 1, 3, 'yellow')
    assert spawn_next(world) is SpawnOutcome.BLOCKED
    assert get_piece_queue(world).active is None


def test_spawned_piece_is_independent_of_preview(world):
    queue = get_piece_queue(world)
    queue.preview = preview = generate_piece(world)
    assert spawn_next(world) is SpawnOutcome.SPAWNED
    assert queue.active is not preview
    assert (queue.active.anchor_color, queue.active.satellite_color) == (preview.anchor_color, preview.satellite_color)
    queue.active.row += 3
    assert preview.row == 1
    assert queue.preview is not preview


def test_pause_suspends_everything_but_pause_and_reset(session, world, bus):
    trace = EventTrace(bus, [EVENT_PAUSE_TOGGLED])
    piece = _spawn(session)
    assert session.handle_intent(Intent.TOGGLE_PAUSE)
    assert trace.last(EVENT_PAUSE_TOGGLED) == {'paused': True}
    assert not session.handle_intent(Intent.MOVE_LEFT)
    assert not session.handle_intent(Intent.ADVANCE)
    session.tick(5.0)
    assert piece.anchor_position() == (1, 3)
    assert session.handle_intent(Intent.TOGGLE_PAUSE)
    assert session.handle_intent(Intent.MOVE_LEFT)
    assert piece.anchor_position() == (1, 2)


def test_game_over_accepts_only_reset(session, world, bus):
    get_session_state(world).game_over = True
    for intent in (Intent.MOVE_LEFT, Intent.ROTATE_CW, Intent.ADVANCE, Intent.TOGGLE_PAUSE, Intent.SOFT_DROP_ON):
        assert not session.handle_intent(intent)
    assert not get_session_state(world).paused
    trace = EventTrace(bus, [EVENT_SESSION_RESET])
    assert session.handle_intent(Intent.RESET)
    assert trace.sequence() == [EVENT_SESSION_RESET]
    assert not get_session_state(world).game_over


def test_reset_restores_initial_state(session, world):
    place_rows(world, ['RBGY..'])
    _spawn(session)
    score = get_score_state(world)
    score.score, score.max_chain = 500, 3
    get_chain_state(world).depth = 2
    get_session_state(world).paused = True
    session.handle_intent(Intent.RESET)
    snap = session.snapshot()
    assert cell_color_map(world) == {}
    assert snap.active_cells is None
    assert snap.preview_colors is not None
    assert (snap.score, snap.max_chain, snap.current_chain) == (0, 0, 0)
    assert not snap.paused and not snap.game_over
    session.advance()
    assert get_piece_queue(world).active is not None


def test_soft_drop_uses_fast_interval(session, world, bus):
    trace = EventTrace(bus, [EVENT_SOFT_DROP_CHANGED, EVENT_PIECE_MOVED])
    piece = _spawn(session)
    assert session.handle_intent(Intent.SOFT_DROP_ON)
    assert not session.handle_intent(Intent.SOFT_DROP_ON)
    session.tick(0.05)
    assert piece.anchor_position() == (2, 3)
    assert session.handle_intent(Intent.SOFT_DROP_OFF)
    assert [p['active'] for p in trace.of(EVENT_SOFT_DROP_CHANGED)] == [True, False]


def test_normal_fall_waits_full_interval(session, bus):
    piece = _spawn(session)
    session.tick(0.5)
    assert piece.anchor_position() == (1, 3)
    bus.emit(EVENT_TICK, dt=0.5)
    assert piece.anchor_position() == (2, 3)


def test_fall_timer_carries_leftover_time(session):
    piece = _spawn(session)
    session.tick(1.25)
    assert piece.anchor_position() == (2, 3)
    assert get_session_state(session.world).fall_elapsed == 0.25
    session.tick(0.75)
    assert piece.anchor_position() == (3, 3)


def test_settle_waits_for_delay_after_a_pop(session, world, bus):
    place_rows(world, ['.Y....', 'RRRR..'])
    session.advance()
    assert get_chain_state(world).settle_pending
    session.tick(0.1)
    assert get_chain_state(world).settle_pending
    assert cell_color_map(world) == {(10, 1): 'yellow'}
    session.tick(0.25)
    assert not get_chain_state(world).settle_pending
    assert cell_color_map(world) == {(11, 1): 'yellow'}


def test_intents_arrive_through_the_bus(session, world, bus):
    piece = _spawn(session)
    bus.emit(EVENT_INTENT, intent=Intent.MOVE_RIGHT)
    bus.emit(EVENT_INTENT, intent=Intent.ROTATE_CW)
    assert (piece.col, piece.facing) == (4, Facing.LEFT)
    bus.emit(EVENT_INTENT, intent=Intent.ADVANCE)
    assert piece.row == 2
    bus.emit(EVENT_INTENT, intent=Intent.ADVANCE, elapsed=0.4)
    assert piece.row == 2


def test_non_intent_payload_is_rejected(session, bus):
    with pytest.raises(TypeError):
        bus.emit(EVENT_INTENT, intent='left')


def test_seeded_game_runs_to_game_over(session, world, bus):
    trace = EventTrace(bus, [EVENT_GAME_OVER])
    last_score = 0
    for _ in range(5000):
        session.advance()
        snap = session.snapshot()
        assert snap.score >= last_score
        last_score = snap.score
        if snap.active_cells is not None:
            for row, col, _ in snap.active_cells:
                assert in_bounds(world, row, col)
                assert not is_occupied(world, row, col)
        if snap.game_over:
            break
    assert get_session_state(world).game_over
    assert len(trace.of(EVENT_GAME_OVER)) == 1
    assert trace.last(EVENT_GAME_OVER)['score'] == last_score

import random

from puyo.events.bus import EVENT_GRAVITY_APPLIED
from puyo.systems.board_ops import apply_gravity, cell_color_map, clear_board, compute_gravity_moves, set_cell
from puyo.systems.match_resolution import ChainResolutionSystem, ResolutionStep
from puyo.utils.event_trace import EventTrace
from tests.helpers import place

COLORS = ['red', 'blue', 'green', 'yellow', 'purple']


def _random_fill(world, rng, density=0.45):
    clear_board(world)
    for row in range(12):
        for col in range(6):
            if rng.random() < density:
                set_cell(world, row, col, rng.choice(COLORS))


def _column(colors, col, rows=12):
    return [colors[(row, col)] for row in range(rows) if (row, col) in colors]


def test_gravity_drops_floating_cells_to_the_floor(world):
    place(world, {(2, 0): 'red', (5, 0): 'blue', (11, 1): 'green'})
    moves = apply_gravity(world)
    assert cell_color_map(world) == {(10, 0): 'red', (11, 0): 'blue', (11, 1): 'green'}
    assert sorted((m.source, m.target) for m in moves) == [((2, 0), (10, 0)), ((5, 0), (11, 0))]


def test_gravity_is_idempotent_on_random_boards(world):
    rng = random.Random(99)
    for _ in range(40):
        _random_fill(world, rng)
        apply_gravity(world)
        once = cell_color_map(world)
        assert compute_gravity_moves(world) == []
        apply_gravity(world)
        assert cell_color_map(world) == once


def test_gravity_preserves_column_order_and_multiset(world):
    rng = random.Random(7)
    for _ in range(40):
        _random_fill(world, rng)
        before = cell_color_map(world)
        apply_gravity(world)
        after = cell_color_map(world)
        for col in range(6):
            column = _column(before, col)
            assert _column(after, col) == column
            # compacted against the bottom with no gaps
            occupied_rows = [row for row in range(12) if (row, col) in after]
            assert occupied_rows == list(range(12 - len(column), 12))


def test_gravity_columns_are_independent(world):
    place(world, {(0, 2): 'red', (11, 3): 'blue'})
    apply_gravity(world)
    assert cell_color_map(world) == {(11, 2): 'red', (11, 3): 'blue'}


def test_gravity_event_reports_moves(world, bus):
    trace = EventTrace(bus, [EVENT_GRAVITY_APPLIED])
    resolution = ChainResolutionSystem(world, bus)
    place(world, {(4, 5): 'yellow'})
    kind, pending = resolution.step()
    assert kind is ResolutionStep.SETTLED and pending
    assert trace.last(EVENT_GRAVITY_APPLIED)['moves'] == [{'from': (4, 5), 'to': (11, 5), 'color': 'yellow'}]

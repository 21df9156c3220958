import random

from puyo.systems.match_ops import find_groups

COLORS = ['red', 'blue', 'green', 'yellow']


def _random_colors(rng, rows=12, cols=6, density=0.7):
    return {
        (row, col): rng.choice(COLORS)
        for row in range(rows)
        for col in range(cols)
        if rng.random() < density
    }


def _component(colors, start):
    """Naive breadth-first component, used as an oracle."""
    color = colors[start]
    seen = {start}
    frontier = [start]
    while frontier:
        nxt = []
        for row, col in frontier:
            for pos in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
                if pos not in seen and colors.get(pos) == color:
                    seen.add(pos)
                    nxt.append(pos)
        frontier = nxt
    return seen


def test_single_line_of_four_is_a_group():
    colors = {(11, c): 'red' for c in range(4)}
    assert find_groups(colors) == [[(11, 0), (11, 1), (11, 2), (11, 3)]]


def test_three_cells_are_not_a_group():
    colors = {(11, 0): 'red', (11, 1): 'red', (10, 0): 'red', (10, 1): 'blue'}
    assert find_groups(colors) == []


def test_diagonal_neighbours_do_not_connect():
    colors = {(11, 0): 'red', (10, 1): 'red', (9, 2): 'red', (8, 3): 'red'}
    assert find_groups(colors) == []


def test_l_shape_and_second_color_found_separately():
    colors = {
        (9, 0): 'red', (10, 0): 'red', (11, 0): 'red', (11, 1): 'red',
        (8, 5): 'blue', (9, 5): 'blue', (10, 5): 'blue', (11, 5): 'blue',
    }
    groups = find_groups(colors)
    assert len(groups) == 2
    assert {len(g) for g in groups} == {4}


def test_min_size_threshold_is_configurable():
    colors = {(11, 0): 'green', (11, 1): 'green'}
    assert find_groups(colors, min_size=2) == [[(11, 0), (11, 1)]]
    assert find_groups(colors, min_size=3) == []


def test_groups_from_world(world):
    from tests.helpers import place_rows
    place_rows(world, ['YYYY..'])
    assert find_groups(world) == [[(11, 0), (11, 1), (11, 2), (11, 3)]]


def test_random_boards_yield_disjoint_maximal_single_color_groups():
    rng = random.Random(2024)
    for _ in range(60):
        colors = _random_colors(rng)
        groups = find_groups(colors)
        seen = set()
        for group in groups:
            cells = set(group)
            assert len(group) >= 4
            assert len(cells) == len(group)
            assert not (cells & seen)
            seen |= cells
            assert len({colors[pos] for pos in group}) == 1
            assert cells == _component(colors, group[0])
        # every component of size >= 4 was reported
        for pos in colors:
            if len(_component(colors, pos)) >= 4:
                assert pos in seen

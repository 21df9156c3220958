import sys, os
import random

import pytest

# Ensure src (and the repo root, for tests.helpers) is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from puyo.events.bus import EventBus
from puyo.world import create_world
from puyo.systems.board import BoardSystem
from puyo.systems.session import SessionSystem


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def world(bus):
    world = create_world(bus, rng=random.Random(1234))
    BoardSystem(world, bus)
    return world


@pytest.fixture
def session(world, bus):
    return SessionSystem(world, bus, fall_interval=1.0, fast_fall_interval=0.05, settle_delay=0.3)

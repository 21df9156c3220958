import sys, os
ROOT=os.path.dirname(__file__); SRC=os.path.join(ROOT,'src')
if SRC not in sys.path: sys.path.insert(0,SRC)
import random
from puyo.events.bus import (EventBus, EVENT_INTENT, EVENT_PIECE_SPAWNED, EVENT_PIECE_LOCKED,
                             EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE, EVENT_SCORE_CHANGED, EVENT_GAME_OVER)
from puyo.events.intents import Intent
from puyo.world import create_world
from puyo.systems.board import BoardSystem
from puyo.systems.board_ops import set_cell
from puyo.systems.session import SessionSystem
from puyo.utils.event_trace import EventTrace

bus=EventBus(); world=create_world(bus, rng=random.Random(7))
BoardSystem(world,bus)
session=SessionSystem(world,bus)
trace=EventTrace(bus,[EVENT_PIECE_SPAWNED,EVENT_PIECE_LOCKED,EVENT_CASCADE_STEP,EVENT_CASCADE_COMPLETE,
                      EVENT_SCORE_CHANGED,EVENT_GAME_OVER])

# two stacked groups of three: first pop drops the blues onto a fourth blue
for r in (9,10,11): set_cell(world,r,0,'red')
for r in (6,7,8): set_cell(world,r,0,'blue')
set_cell(world,11,1,'red'); set_cell(world,10,1,'blue')

for step in range(400):
    bus.emit(EVENT_INTENT, intent=Intent.ADVANCE)
    if session.snapshot().game_over: break

for name, payload in trace.entries:
    print(name, payload)
snap=session.snapshot()
print('score', snap.score, 'max_chain', snap.max_chain, 'game_over', snap.game_over)

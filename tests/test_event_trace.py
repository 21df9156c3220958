from puyo.events.bus import EventBus
from puyo.utils.event_trace import EventTrace


def test_trace_records_only_requested_events_in_order():
    bus = EventBus()
    trace = EventTrace(bus, ['a', 'b'])
    bus.emit('a', value=1)
    bus.emit('c', value=2)
    bus.emit('b', value=3)
    bus.emit('a', value=4)
    assert trace.sequence() == ['a', 'b', 'a']
    assert trace.of('a') == [{'value': 1}, {'value': 4}]
    assert trace.last('b') == {'value': 3}
    assert trace.last('c') is None
    trace.clear()
    assert trace.entries == []

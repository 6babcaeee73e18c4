"""Trace dispatcher events and Perfetto output from interpreter steps."""

from __future__ import annotations

from pathlib import Path
from typing import List

from chip8.tracing import TraceDispatcher, TraceEvent, TraceEventType, trace_dispatcher
from chip8.tracing.perfetto_tracing import PerfettoTracer, tracer


class RecordingObserver:
    def __init__(self) -> None:
        self.events: List[TraceEvent] = []

    def handle_event(self, event: TraceEvent) -> None:
        self.events.append(event)


def test_dispatcher_fans_out_to_observers() -> None:
    dispatcher = TraceDispatcher()
    observer = RecordingObserver()
    dispatcher.register(observer)
    dispatcher.register(observer)
    assert dispatcher.has_observers()
    assert len(tuple(dispatcher.observers())) == 1

    dispatcher.record_step(0x200, 0x00E0, "CLS")
    dispatcher.record_call(0x300, 0x202)
    dispatcher.record_return(0x300)
    dispatcher.record_counter("instructions", 3)

    kinds = [event.type for event in observer.events]
    assert kinds == [
        TraceEventType.STEP,
        TraceEventType.CALL,
        TraceEventType.RETURN,
        TraceEventType.COUNTER,
    ]
    assert observer.events[0].payload == {"pc": "0x200", "opcode": "0x00E0"}
    assert observer.events[1].name == "sub_300"
    assert observer.events[3].payload == {"value": 3}

    dispatcher.unregister(observer)
    assert not dispatcher.has_observers()


def test_tracer_disabled_by_default() -> None:
    assert PerfettoTracer().enabled is False


def test_steps_emit_no_events_while_tracer_disabled(make_chip) -> None:
    observer = RecordingObserver()
    trace_dispatcher.register(observer)
    try:
        chip = make_chip(0x00E0)
        chip.step()
    finally:
        trace_dispatcher.unregister(observer)
    assert observer.events == []


def test_steps_emit_cpu_display_and_call_events(make_chip, tmp_path: Path) -> None:
    observer = RecordingObserver()
    trace_path = tmp_path / "run.perfetto-trace"
    tracer.start(trace_path, step_clock=True)
    trace_dispatcher.register(observer)
    try:
        # CLS; CALL 0x206; (pad); RET
        chip = make_chip(0x00E0, 0x2206, 0x0000, 0x00EE)
        chip.set_key(0x1, True)
        for _ in range(3):
            chip.step()
    finally:
        trace_dispatcher.unregister(observer)
        tracer.stop()

    names = [(event.track, event.name) for event in observer.events]
    assert ("Input", "key_down") in names
    assert ("CPU", "CLS") in names
    assert ("Display", "redraw") in names
    assert ("CPU", "CALL 0x206") in names
    assert ("CPU", "sub_206") in names
    assert ("CPU", "RET") in names
    assert any(e.type is TraceEventType.RETURN for e in observer.events)
    call = next(e for e in observer.events if e.name == "CALL 0x206")
    assert call.payload["pc"] == "0x202"
    assert call.payload["sp"] == "0x0 -> 0x1"
    assert call.payload["stack[0]"] == "0x0 -> 0x202"
    assert trace_path.exists()
    assert trace_path.stat().st_size > 0
    assert not tracer.enabled

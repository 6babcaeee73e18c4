"""Interpreter trace events and the observer fan-out."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol


class TraceEventType(Enum):
    START = "start"
    STOP = "stop"
    STEP = "step"
    INSTANT = "instant"
    COUNTER = "counter"
    CALL = "call"
    RETURN = "return"


@dataclass(frozen=True)
class TraceEvent:
    """One trace record; ``track`` names the timeline it belongs on."""

    type: TraceEventType
    track: Optional[str] = None
    name: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)


class TraceObserver(Protocol):
    def handle_event(self, event: TraceEvent) -> None: ...


class TraceDispatcher:
    """Forwards interpreter events to every registered observer.

    The interpreter only emits through the ``record_*`` helpers, so observers
    see a small fixed vocabulary: steps on the CPU track, call/return pairs,
    and instants or counters on named tracks.
    """

    def __init__(self) -> None:
        self._observers: List[TraceObserver] = []

    def register(self, observer: TraceObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister(self, observer: TraceObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def observers(self) -> tuple[TraceObserver, ...]:
        return tuple(self._observers)

    def has_observers(self) -> bool:
        return bool(self._observers)

    def start_trace(self, output_path: Path | str) -> None:
        self._emit(TraceEvent(TraceEventType.START, payload={"path": Path(output_path)}))

    def stop_trace(self) -> None:
        self._emit(TraceEvent(TraceEventType.STOP))

    def record_step(
        self,
        pc: int,
        word: int,
        mnemonic: str,
        changes: Optional[Mapping[str, str]] = None,
    ) -> None:
        payload = {"pc": f"0x{pc:03X}", "opcode": f"0x{word:04X}"}
        payload.update(changes or {})
        self._emit(TraceEvent(TraceEventType.STEP, "CPU", mnemonic, payload))

    def record_call(self, target: int, caller: int) -> None:
        self._emit(
            TraceEvent(
                TraceEventType.CALL,
                "CPU",
                f"sub_{target:03X}",
                {"target": target, "caller": caller},
            )
        )

    def record_return(self, pc: int) -> None:
        self._emit(TraceEvent(TraceEventType.RETURN, "CPU", payload={"pc": pc}))

    def record_instant(
        self, track: str, name: str, payload: Optional[Dict[str, Any]] = None
    ) -> None:
        self._emit(TraceEvent(TraceEventType.INSTANT, track, name, payload or {}))

    def record_counter(self, name: str, value: float) -> None:
        self._emit(TraceEvent(TraceEventType.COUNTER, "CPU", name, {"value": value}))

    def _emit(self, event: TraceEvent) -> None:
        for observer in tuple(self._observers):
            observer.handle_event(event)


trace_dispatcher = TraceDispatcher()

__all__ = [
    "TraceDispatcher",
    "TraceObserver",
    "TraceEvent",
    "TraceEventType",
    "trace_dispatcher",
]

"""Perfetto trace output for interpreter runs."""

from __future__ import annotations

import atexit
import logging
import threading
import time
from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from retrobus_perfetto import PerfettoTraceBuilder

from .dispatcher import TraceEvent, TraceEventType, trace_dispatcher

logger = logging.getLogger(__name__)

DEFAULT_TRACE_PATH = "chip8.perfetto-trace"

TRACKS = ("CPU", "Display", "Input", "Sound", "Emulation")
COUNTERS = ("instructions",)


class PerfettoTracer:
    """Collects events into a ``PerfettoTraceBuilder`` and saves on stop.

    Timestamps are wall-clock nanoseconds since ``start``. With
    ``step_clock=True`` they are instead interpreter steps (advanced with
    ``tick``), which keeps traces of the same program byte-identical.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._builder: Optional[PerfettoTraceBuilder] = None
        self._path: Optional[Path] = None
        self._tracks: Dict[str, int] = {}
        self._counters: Dict[str, int] = {}
        self._open: Dict[str, List[str]] = {}
        self._origin = 0.0
        self._step_clock = False
        self._steps = 0
        self._atexit_registered = False

    @property
    def enabled(self) -> bool:
        return self._builder is not None

    def start(self, path: str | Path = DEFAULT_TRACE_PATH, *, step_clock: bool = False) -> None:
        with self._lock:
            if self._builder is not None:
                return
            self._builder = PerfettoTraceBuilder("CHIP-8 Interpreter")
            self._path = Path(path)
            self._origin = time.perf_counter()
            self._step_clock = step_clock
            self._steps = 0
            for name in TRACKS:
                self._track(name)
            for name in COUNTERS:
                self._counter_track(name)
            if not self._atexit_registered:
                atexit.register(self.safe_stop)
                self._atexit_registered = True
            logger.debug("Perfetto tracing started -> %s", self._path)

    def stop(self) -> Optional[Path]:
        """Close open slices, write the trace and return its path."""
        with self._lock:
            builder = self._builder
            if builder is None:
                return None
            now = self._now()
            for name, stack in self._open.items():
                for _ in stack:
                    builder.end_slice(self._tracks[name], now)
            path = self._path or Path(DEFAULT_TRACE_PATH)
            builder.save(str(path))
            logger.debug("Perfetto trace saved to %s", path)

            self._builder = None
            self._path = None
            self._tracks.clear()
            self._counters.clear()
            self._open.clear()
            return path

    def safe_stop(self) -> None:
        try:
            self.stop()
        except Exception:
            logger.debug("Perfetto tracer stop failed", exc_info=True)

    def tick(self, steps: int = 1) -> None:
        """Advance the step clock; ignored on the wall clock."""
        if self._step_clock and steps > 0:
            with self._lock:
                self._steps += steps

    def instant(self, track: str, name: str, args: Optional[Dict[str, Any]] = None) -> None:
        with self._lock:
            if self._builder is None:
                return
            event = self._builder.add_instant_event(self._track(track), name, self._now())
            if args:
                event.add_annotations(args)

    def counter(self, name: str, value: float) -> None:
        with self._lock:
            if self._builder is None:
                return
            self._builder.update_counter(self._counter_track(name), value, self._now())

    def begin_slice(self, track: str, name: str, args: Optional[Dict[str, Any]] = None) -> None:
        with self._lock:
            if self._builder is None:
                return
            event = self._builder.begin_slice(self._track(track), name, self._now())
            self._open.setdefault(track, []).append(name)
            if args:
                event.add_annotations(args)

    def end_slice(self, track: str) -> None:
        with self._lock:
            stack = self._open.get(track)
            # A return with nothing open (unbalanced program) is dropped.
            if self._builder is None or not stack:
                return
            stack.pop()
            self._builder.end_slice(self._track(track), self._now())

    @contextmanager
    def slice(self, track: str, name: str, args: Optional[Dict[str, Any]] = None) -> Iterator[None]:
        if self._builder is None:
            yield
            return
        self.begin_slice(track, name, args)
        try:
            yield
        finally:
            self.end_slice(track)

    def _now(self) -> int:
        if self._step_clock:
            return self._steps
        return int((time.perf_counter() - self._origin) * 1_000_000_000)

    def _track(self, name: str) -> int:
        uuid = self._tracks.get(name)
        if uuid is None:
            assert self._builder is not None
            uuid = self._builder.add_thread(name)
            self._tracks[name] = uuid
        return uuid

    def _counter_track(self, name: str) -> int:
        uuid = self._counters.get(name)
        if uuid is None:
            assert self._builder is not None
            uuid = self._builder.add_counter_track(name, "count")
            self._counters[name] = uuid
        return uuid


tracer = PerfettoTracer()


class _PerfettoObserver:
    """Writes dispatcher events into the global tracer."""

    def handle_event(self, event: TraceEvent) -> None:
        match event.type:
            case TraceEventType.START:
                tracer.start(event.payload["path"])
            case TraceEventType.STOP:
                tracer.safe_stop()
            case TraceEventType.STEP | TraceEventType.INSTANT:
                tracer.instant(event.track or "CPU", event.name or "event", event.payload)
            case TraceEventType.COUNTER:
                tracer.counter(event.name or "counter", event.payload["value"])
            case TraceEventType.CALL:
                tracer.begin_slice(event.track or "CPU", event.name or "call", event.payload)
            case TraceEventType.RETURN:
                tracer.end_slice(event.track or "CPU")


trace_dispatcher.register(_PerfettoObserver())


def perf_trace(
    track: str,
    sample_rate: int = 1,
    extract_args: Optional[Callable[..., Dict[str, Any]]] = None,
    include_op_num: bool = False,
) -> Callable:
    """Wrap a method in a Perfetto slice while the tracer is enabled.

    Args:
        track: track the slice is recorded on
        sample_rate: record every Nth call only
        extract_args: builds slice annotations from the call arguments
        include_op_num: annotate with ``self.instruction_count``
    """

    def decorator(func: Callable) -> Callable:
        calls = 0

        @wraps(func)
        def wrapper(*args, **kwargs):
            nonlocal calls
            calls += 1
            if not tracer.enabled or calls % sample_rate:
                return func(*args, **kwargs)

            annotations: Dict[str, Any] = {}
            if extract_args is not None:
                annotations.update(extract_args(*args, **kwargs))
            if include_op_num and args and hasattr(args[0], "instruction_count"):
                annotations["op_num"] = args[0].instruction_count
            with tracer.slice(track, func.__name__, annotations):
                return func(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["DEFAULT_TRACE_PATH", "PerfettoTracer", "perf_trace", "tracer"]

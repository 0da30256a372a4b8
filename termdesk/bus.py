# bus.py
from __future__ import annotations
from enum import IntEnum
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

import logging
from collections import deque

logger = logging.getLogger(__name__)


class Signal(IntEnum):
    # LIFECYCLE
    S_QUIT = 1

    # TERMINAL
    S_RESIZE = 10

    # DISPLAY
    S_REDRAW = 20


@dataclass(frozen=True)
class Packet:
    signal: Signal
    data: Any = None


Handler = Callable[[Packet], None]


class SignalBus:
    """
    Queue for signals raised outside the loop body (OS signal handlers,
    timers). Posting only appends; handlers run when the loop pumps the
    queue at an iteration boundary, never in the middle of a dispatch or a
    paint.
    """
    __slots__ = (
        "_queue",
        "_handlers",
        "_processed",
    )

    def __init__(self) -> None:
        self._queue     : deque[Packet] = deque()
        self._handlers  : Dict[Signal, List[Handler]] = {}
        self._processed : int = 0

    def subscribe(self, signal: Signal, handler: Handler) -> None:
        self._handlers.setdefault(signal, []).append(handler)

    def unsubscribe(self, signal: Signal, handler: Handler) -> None:
        handlers = self._handlers.get(signal)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def post(self, msg: Packet) -> bool:
        self._queue.append(msg)
        return True

    def emit(self, signal: Signal, data: Any = None) -> bool:
        return self.post(Packet(signal, data))

    def pending(self) -> int:
        return len(self._queue)

    def pump(self) -> int:
        if not self._queue:
            return 0

        processed = 0
        messages = list(self._queue)
        self._queue.clear()

        for msg in messages:
            logger.debug(f"[signal] {msg.signal.name} data={msg.data!r}")
            # copy, a handler may unsubscribe itself
            for handler in list(self._handlers.get(msg.signal, ())):
                self._call_handler(handler, msg)
                processed += 1

        self._processed += processed
        return processed

    @property
    def processed(self) -> int:
        return self._processed

    def _call_handler(self, handler: Handler, msg: Packet) -> None:
        try:
            handler(msg)
        except Exception:
            logger.exception(f"handler exception for signal {msg.signal.name}")

    def clear(self) -> None:
        """Clear all queued signals."""
        self._queue.clear()

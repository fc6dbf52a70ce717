"""EventQueue - deferred placement requests

UI code submits requests while it walks the tree and the windows; nothing is
mutated until the manager drains the queue once after the pass.

Properties:
- FIFO, submission order preserved
- Unbounded: no request is ever dropped
- High watermark only logs at debug
- Requests submitted while a batch is being applied go to the next batch
"""

import itertools
from collections import deque
from dataclasses import replace
from typing import Generic, TypeVar

from ..config import METRICS_ENABLED, QUEUE_HIGH_WATERMARK
from ..core.ids import PanelId, TileRef
from ..telemetry import get_logger, metrics
from .types import (
    PlacementRequest,
    RequestActivate,
    RequestClose,
    RequestDock,
    RequestDockTo,
    RequestReopen,
    RequestUndock,
)

logger = get_logger(__name__)

T = TypeVar("T")


class ActorQueue(Generic[T]):
    """FIFO queue processed by a single consumer

    Attributes:
        name: Queue name used in logs and metric labels
        high_watermark: Depth at which a debug line is logged
    """

    def __init__(self, name: str, high_watermark: int = QUEUE_HIGH_WATERMARK):
        self.name = name
        self._high_watermark = high_watermark
        self._queue: deque[T] = deque()
        self._processing = False

    def enqueue(self, item: T) -> bool:
        """Append an item

        Returns:
            Always True (the queue never drops)
        """
        self._queue.append(item)

        depth = len(self._queue)
        if METRICS_ENABLED:
            metrics.gauge("queue.depth", depth, {"queue": self.name})

        if depth == self._high_watermark:
            logger.debug(f"[Queue:{self.name}] High watermark: {depth} pending")

        return True

    def dequeue(self) -> T | None:
        """Pop the oldest item, None when empty"""
        if not self._queue:
            return None

        item = self._queue.popleft()
        if METRICS_ENABLED:
            metrics.gauge("queue.depth", len(self._queue), {"queue": self.name})
        return item

    def peek(self) -> T | None:
        if not self._queue:
            return None
        return self._queue[0]

    def clear(self) -> int:
        """Empty the queue

        Returns:
            Number of items removed
        """
        count = len(self._queue)
        self._queue.clear()
        if METRICS_ENABLED:
            metrics.gauge("queue.depth", 0, {"queue": self.name})
        return count

    # === State ===

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return len(self._queue) > 0

    @property
    def is_empty(self) -> bool:
        return len(self._queue) == 0

    @property
    def depth(self) -> int:
        return len(self._queue)

    @property
    def is_processing(self) -> bool:
        """Whether a drained batch is being applied"""
        return self._processing

    def set_processing(self, value: bool) -> None:
        self._processing = value


class EventQueue(ActorQueue[PlacementRequest]):
    """Placement request queue

    submit() stamps each request with a sequence number and the current
    frame. drain() hands the whole batch over at once.
    """

    def __init__(self, name: str = "placement", high_watermark: int = QUEUE_HIGH_WATERMARK):
        super().__init__(name, high_watermark)
        self._seq = itertools.count(1)
        self._frame = 0

    @property
    def frame(self) -> int:
        return self._frame

    def set_frame(self, frame: int) -> None:
        """Frame number stamped on subsequent submissions"""
        self._frame = frame

    # === Submission ===

    def submit(self, request: PlacementRequest) -> PlacementRequest:
        """Buffer a request

        Never touches the tree, the windows or the ledger.

        Args:
            request: Request to buffer

        Returns:
            The stamped request as it was queued
        """
        stamped = replace(request, seq=next(self._seq), frame=self._frame)
        self.enqueue(stamped)
        if METRICS_ENABLED:
            metrics.inc("queue.submitted", {"signal": stamped.signal})
        logger.debug(f"[Queue:{self.name}] Submitted {stamped.format_log()}")
        return stamped

    def submit_dock(self, panel: PanelId) -> PlacementRequest:
        return self.submit(RequestDock(panel))

    def submit_dock_to(self, panel: PanelId, container: TileRef) -> PlacementRequest:
        return self.submit(RequestDockTo(panel, container))

    def submit_undock(self, panel: PanelId, leaf: TileRef) -> PlacementRequest:
        return self.submit(RequestUndock(panel, leaf))

    def submit_close(self, panel: PanelId, leaf: TileRef | None = None) -> PlacementRequest:
        return self.submit(RequestClose(panel, leaf))

    def submit_reopen(self, panel: PanelId) -> PlacementRequest:
        return self.submit(RequestReopen(panel))

    def submit_activate(self, panel: PanelId, leaf: TileRef) -> PlacementRequest:
        return self.submit(RequestActivate(panel, leaf))

    def handle(self) -> "RequestSink":
        """Submit-only view for UI code"""
        return RequestSink(self)

    # === Draining ===

    def drain(self) -> list[PlacementRequest]:
        """Take every buffered request in submission order

        Raises:
            RuntimeError: A previously drained batch is still being applied
        """
        if self._processing:
            raise RuntimeError(f"EventQueue '{self.name}' drained while applying a batch")

        batch = list(self._queue)
        self._queue.clear()
        if METRICS_ENABLED:
            metrics.gauge("queue.depth", 0, {"queue": self.name})
        if batch:
            logger.debug(f"[Queue:{self.name}] Drained {len(batch)} request(s)")
        return batch

    def debug_snapshot(self, max_pending: int = 10) -> dict:
        pending = list(self._queue)[:max_pending]
        return {
            "depth": len(self._queue),
            "frame": self._frame,
            "is_processing": self._processing,
            "pending": [
                {
                    "signal": request.signal,
                    "panel": request.panel.value,
                    "seq": request.seq,
                    "frame": request.frame,
                }
                for request in pending
            ],
        }


class RequestSink:
    """Submit-only handle on an EventQueue

    This is all a UI pass gets to hold.
    """

    def __init__(self, queue: EventQueue):
        self._queue = queue

    def submit(self, request: PlacementRequest) -> PlacementRequest:
        return self._queue.submit(request)

    def dock(self, panel: PanelId) -> PlacementRequest:
        return self._queue.submit_dock(panel)

    def dock_to(self, panel: PanelId, container: TileRef) -> PlacementRequest:
        return self._queue.submit_dock_to(panel, container)

    def undock(self, panel: PanelId, leaf: TileRef) -> PlacementRequest:
        return self._queue.submit_undock(panel, leaf)

    def close(self, panel: PanelId, leaf: TileRef | None = None) -> PlacementRequest:
        return self._queue.submit_close(panel, leaf)

    def reopen(self, panel: PanelId) -> PlacementRequest:
        return self._queue.submit_reopen(panel)

    def activate(self, panel: PanelId, leaf: TileRef) -> PlacementRequest:
        return self._queue.submit_activate(panel, leaf)

"""
Fire-and-forget fan-out of catalog change events.

Each connected viewer owns a bounded asyncio queue bound to the event loop it
connected on. `broadcast` makes one non-blocking enqueue per viewer and never
waits on a slow link: a viewer whose queue is full (or whose loop is gone) is
dropped and must reconnect and re-fetch the catalog. Nothing is retained for
viewers that are not connected at broadcast time.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

EVENT_KINDS = frozenset({"product_added", "product_updated", "product_deleted"})

# Placed on a dropped viewer's queue so its endpoint closes the connection.
CLOSE_SENTINEL = None


@dataclass
class ViewerConnection:
    viewer_id: str
    queue: asyncio.Queue
    loop: asyncio.AbstractEventLoop
    dropped: bool = field(default=False)

    def offer(self, message: Dict[str, Any]) -> bool:
        """Non-blocking enqueue. Runs on the viewer's own loop."""
        if self.dropped:
            return False
        try:
            self.queue.put_nowait(message)
            return True
        except asyncio.QueueFull:
            self._mark_dropped()
            return False

    def _mark_dropped(self) -> None:
        self.dropped = True
        while not self.queue.empty():
            self.queue.get_nowait()
        self.queue.put_nowait(CLOSE_SENTINEL)

    async def next_message(self) -> Optional[Dict[str, Any]]:
        """Next queued event, or None once the viewer has been dropped."""
        return await self.queue.get()


class ChangeNotifier:
    def __init__(self, max_queue_size: int = 100) -> None:
        self.max_queue_size = max_queue_size
        self._lock = threading.Lock()
        self._viewers: Dict[str, ViewerConnection] = {}

    @property
    def viewer_count(self) -> int:
        with self._lock:
            return len(self._viewers)

    def connect(self) -> ViewerConnection:
        """Register a viewer. Must be called from inside a running event loop."""
        viewer = ViewerConnection(
            viewer_id=uuid.uuid4().hex,
            queue=asyncio.Queue(maxsize=self.max_queue_size),
            loop=asyncio.get_running_loop(),
        )
        with self._lock:
            self._viewers[viewer.viewer_id] = viewer
            total = len(self._viewers)
        logger.info("Viewer connected: id=%s viewers=%d", viewer.viewer_id, total)
        return viewer

    def disconnect(self, viewer_id: str) -> None:
        with self._lock:
            removed = self._viewers.pop(viewer_id, None)
            total = len(self._viewers)
        if removed is not None:
            logger.info("Viewer disconnected: id=%s viewers=%d", viewer_id, total)

    def broadcast(self, event_kind: str, payload: Dict[str, Any]) -> int:
        """
        Offer one event to every currently connected viewer.

        Args:
            event_kind: product_added, product_updated or product_deleted
            payload: full product JSON, or {"id": ...} for deletions

        Returns:
            Number of viewers the event was offered to.
        """
        if event_kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind: {event_kind}")

        message = {"type": event_kind, "data": payload}
        with self._lock:
            viewers: List[ViewerConnection] = list(self._viewers.values())

        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        offered = 0
        for viewer in viewers:
            if viewer.loop is current_loop:
                ok = viewer.offer(message)
            else:
                try:
                    viewer.loop.call_soon_threadsafe(viewer.offer, message)
                    ok = True
                except RuntimeError:
                    # Loop already closed.
                    ok = False
            if ok:
                offered += 1
            else:
                logger.warning("Dropping viewer %s: event %s could not be queued", viewer.viewer_id, event_kind)
                self.disconnect(viewer.viewer_id)

        logger.debug("Broadcast %s to %d/%d viewers", event_kind, offered, len(viewers))
        return offered

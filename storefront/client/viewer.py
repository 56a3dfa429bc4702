"""
Viewer session: the client side of the live-update contract.

A viewer fetches the full catalog once, then applies each pushed change
event to its local copy. The push channel has no replay, so whenever the
connection drops the session waits a fixed delay, reconnects and fetches the
full catalog again.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx
import websockets
from websockets.exceptions import WebSocketException

logger = logging.getLogger(__name__)


class CatalogView:
    """Local mirror of the catalog, keyed by product id."""

    def __init__(self) -> None:
        self._products: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._products)

    def load(self, products: Iterable[Dict[str, Any]]) -> None:
        self._products = {p["id"]: dict(p) for p in products}

    def get(self, product_id: str) -> Optional[Dict[str, Any]]:
        return self._products.get(product_id)

    def products(self) -> List[Dict[str, Any]]:
        """Newest first, matching GET /api/products."""
        return sorted(self._products.values(), key=lambda p: p.get("createdAt") or "", reverse=True)

    def apply(self, event: Dict[str, Any]) -> bool:
        """Apply one pushed event. Returns False for events this view ignores."""
        if not isinstance(event, dict):
            return False
        kind = event.get("type")
        data = event.get("data")
        if not isinstance(data, dict):
            return False
        product_id = data.get("id")
        if not isinstance(product_id, str) or not product_id:
            return False

        if kind in ("product_added", "product_updated"):
            self._products[product_id] = dict(data)
            return True
        if kind == "product_deleted":
            self._products.pop(product_id, None)
            return True

        logger.debug("Ignoring unknown event type %r", kind)
        return False


def _ws_url(base_url: str, path: str) -> str:
    base = base_url.rstrip("/")
    if base.startswith("https://"):
        base = "wss://" + base[len("https://"):]
    elif base.startswith("http://"):
        base = "ws://" + base[len("http://"):]
    return f"{base}{path}"


class ViewerSession:
    def __init__(
        self,
        base_url: str,
        reconnect_delay: float = 3.0,
        ws_path: str = "/ws",
        http_client: Optional[httpx.AsyncClient] = None,
        connect: Optional[Callable[[str], Any]] = None,
        on_event: Optional[Callable[[Dict[str, Any]], None]] = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.ws_url = _ws_url(self.base_url, ws_path)
        self.reconnect_delay = reconnect_delay
        self.timeout_seconds = timeout_seconds
        self.view = CatalogView()
        self._http_client = http_client
        self._connect = connect or websockets.connect
        self._on_event = on_event

    async def resync(self) -> int:
        """Replace the local view with the server's full catalog."""
        url = f"{self.base_url}/api/products"
        if self._http_client is not None:
            response = await self._http_client.get(url)
            response.raise_for_status()
            products = response.json()
        else:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(url)
                response.raise_for_status()
                products = response.json()

        self.view.load(products)
        logger.info("Catalog resynced: %d products", len(self.view))
        return len(self.view)

    async def listen_once(self) -> None:
        """
        One connection lifetime: connect, resync, then apply events until the
        server closes the channel. Connecting before the fetch means no event
        between the two is lost; applying an event twice is harmless.
        """
        async with self._connect(self.ws_url) as ws:
            await self.resync()
            async for raw in ws:
                try:
                    event = json.loads(raw)
                except json.JSONDecodeError:
                    logger.warning("Discarding malformed live update: %r", raw)
                    continue
                if self.view.apply(event) and self._on_event is not None:
                    self._on_event(event)

    async def run(self, max_reconnects: Optional[int] = None) -> None:
        """Keep the view in sync, reconnecting after `reconnect_delay` on every drop."""
        reconnects = 0
        while True:
            try:
                await self.listen_once()
                logger.info("Live update channel closed by server")
            except (OSError, WebSocketException, httpx.HTTPError) as e:
                logger.warning("Live update channel lost: %s", e)

            if max_reconnects is not None and reconnects >= max_reconnects:
                return
            reconnects += 1
            logger.info("Reconnecting in %.1fs (attempt %d)", self.reconnect_delay, reconnects)
            await asyncio.sleep(self.reconnect_delay)

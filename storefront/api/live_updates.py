"""WebSocket push channel for catalog change events."""

import asyncio
import logging

from fastapi import WebSocket, status

from storefront.notifier.broadcaster import ChangeNotifier, ViewerConnection

logger = logging.getLogger(__name__)


async def _pump_events(websocket: WebSocket, viewer: ViewerConnection) -> None:
    try:
        while True:
            message = await viewer.next_message()
            if message is None:
                # Viewer fell too far behind; the client reconnects and re-fetches.
                await websocket.close(code=status.WS_1013_TRY_AGAIN_LATER)
                return
            await websocket.send_json(message)
    except Exception as e:
        logger.info("Stopped pushing to viewer %s: %s", viewer.viewer_id, e)


async def live_updates(websocket: WebSocket) -> None:
    """
    Push channel for catalog changes.

    - Each message is {"type": "product_added"|"product_updated"|"product_deleted", "data": ...}
    - Client frames are read only to notice the disconnect.
    - No replay: a client that (re)connects must fetch GET /api/products.
    """
    notifier: ChangeNotifier = websocket.app.state.notifier
    # Register before accepting so nothing broadcast after the handshake is missed.
    viewer = notifier.connect()
    sender = None
    try:
        await websocket.accept()
        sender = asyncio.create_task(_pump_events(websocket, viewer))
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    except Exception as e:
        logger.warning("Live update connection %s ended with error: %s", viewer.viewer_id, e)
    finally:
        notifier.disconnect(viewer.viewer_id)
        if sender is not None:
            sender.cancel()

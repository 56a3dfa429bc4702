#!/usr/bin/env python3
"""
Follow a running storefront's live updates from the terminal.

Fetches the full catalog, then logs every product_added / product_updated /
product_deleted event. Reconnects and re-fetches when the connection drops.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from storefront.client.viewer import ViewerSession
from storefront.utils.config_loader import load_storefront_config

logger = logging.getLogger("watch_catalog")


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def _print_event(event: dict) -> None:
    data = event.get("data") or {}
    logger.info("%s id=%s title=%s", event.get("type"), data.get("id"), data.get("title", "-"))


def main() -> int:
    cfg = load_storefront_config()
    parser = argparse.ArgumentParser(description="Watch storefront catalog changes")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000")
    parser.add_argument("--reconnect-delay", type=float, default=cfg.live_updates.reconnect_delay_seconds)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)
    session = ViewerSession(
        args.base_url,
        reconnect_delay=args.reconnect_delay,
        ws_path=cfg.live_updates.path,
        on_event=_print_event,
    )
    try:
        asyncio.run(session.run())
    except KeyboardInterrupt:
        print(f"\nStopped. {len(session.view)} products in local view.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

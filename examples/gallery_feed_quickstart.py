#!/usr/bin/env python3
"""Quickstart for GalleryAPI: page through the feed and optionally upload an image.

Usage:
    UPFI_API_URL=http://localhost:3000 python examples/gallery_feed_quickstart.py
    python examples/gallery_feed_quickstart.py --pages 3 --upload https://cdn/x.png --title Sunset
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from upfi.feed import FeedConfig, FeedError, GalleryAPI

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Browse the gallery feed and upload images")
    p.add_argument("--pages", type=int, default=2, help="Pages to load after the first")
    p.add_argument("--upload", metavar="URL", help="Image URL to register after browsing")
    p.add_argument("--title", default="Quickstart")
    p.add_argument("--description", default="Uploaded from the quickstart script")
    p.add_argument("--debug", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    if args.debug:
        logging.getLogger("upfi").setLevel(logging.DEBUG)

    async with GalleryAPI(FeedConfig.from_env()) as api:
        api.subscribe(lambda s: logger.info(f"feed {s.status.value} | {len(s.flat_items)} images"))
        api.on_notification(lambda n: logger.info(f"[{n.status.value}] {n.title}: {n.description}"))

        state = await api.load_first()
        if state.error is not None:
            logger.error(f"Could not load the feed: {state.error}")
            return

        for _ in range(args.pages):
            if not api.feed_state.has_next_page:
                break
            state = await api.load_next()
            if state.next_error is not None:
                logger.warning(f"Load more failed: {state.next_error}")
                break

        for image in api.feed_state.flat_items:
            print(f"{image.id:<24} {image.title:<20} {image.url}")

        if args.upload:
            try:
                image = await api.submit_mutation(
                    {"title": args.title, "description": args.description, "url": args.upload},
                    refetch=True,
                )
            except FeedError as e:
                logger.error(f"Upload failed: {e}")
                return
            logger.info(f"Uploaded {image.id}; feed now shows {len(api.feed_state.flat_items)} images")


if __name__ == "__main__":
    asyncio.run(main())

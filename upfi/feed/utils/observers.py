"""Callback registry used for cache, feed and mutation notifications."""

from __future__ import annotations

import asyncio
import inspect
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Observer = Callable[[T], Awaitable[None]] | Callable[[T], None]


class ObserverSet(Generic[T]):
    """Subscription ids mapped to callbacks.

    Plain callbacks run inline so observers see transitions in order.
    Coroutine callbacks are scheduled on the running loop and never block the
    notifier. A failing observer is logged and does not affect the others.
    """

    def __init__(self, name: str = "observer") -> None:
        self._name = name
        self._callbacks: dict[str, Observer[T]] = {}
        self._tasks: set[asyncio.Task[Any]] = set()

    def subscribe(self, callback: Observer[T]) -> str:
        sub_id = uuid.uuid4().hex
        self._callbacks[sub_id] = callback
        return sub_id

    def unsubscribe(self, subscription_id: str) -> None:
        self._callbacks.pop(subscription_id, None)

    def __len__(self) -> int:
        return len(self._callbacks)

    def notify(self, payload: T) -> None:
        for cb in list(self._callbacks.values()):
            if inspect.iscoroutinefunction(cb):
                try:
                    loop = asyncio.get_running_loop()
                except RuntimeError:
                    logger.warning(
                        "No running loop for async %s callback, skipping", self._name
                    )
                    continue
                task = loop.create_task(self._run_async(cb, payload))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
                continue
            try:
                cb(payload)
            except Exception as e:
                logger.error(f"Error in {self._name} callback: {e}", exc_info=True)

    async def _run_async(self, cb: Callable[[T], Awaitable[None]], payload: T) -> None:
        try:
            await cb(payload)
        except Exception as e:
            logger.error(f"Error in {self._name} callback: {e}", exc_info=True)

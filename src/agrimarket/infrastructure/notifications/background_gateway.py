"""Fire-and-forget dispatch of notifications on a worker pool.

``notify`` returns as soon as the event is queued; the wrapped gateway
runs on a worker thread and its failures are logged there.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor

import structlog

from agrimarket.domain.model.events import OrderEvent
from agrimarket.domain.service.notification_gateway import NotificationGateway

logger = structlog.get_logger(__name__)


class BackgroundNotificationGateway(NotificationGateway):

    def __init__(self, delegate: NotificationGateway, max_workers: int = 2) -> None:
        self._delegate = delegate
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="notify"
        )

    def notify(self, event: OrderEvent) -> None:
        future = self._executor.submit(self._delegate.notify, event)
        future.add_done_callback(lambda f: self._log_failure(f, event))

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _log_failure(future: Future, event: OrderEvent) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error(
                "Background notification failed",
                event=type(event).__name__,
                order_id=event.order_id,
                error=str(exc),
            )

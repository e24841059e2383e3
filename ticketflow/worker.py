"""Queue worker — drains support ticket messages in batches.

Usage:
    python -m ticketflow.worker
    python -m ticketflow.worker --once           # one batch, exit 1 if any message failed
    python -m ticketflow.worker --batch-size 5
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from ticketflow.adapters.persistence.database import async_session_factory, engine
from ticketflow.application.use_cases.process_batch import BatchResult
from ticketflow.config import settings
from ticketflow.infrastructure.container import Container, build_container

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


async def run_batch(container: Container, batch_size: int) -> BatchResult | None:
    """Claim one batch and process it; each message is committed and acked as it finishes.

    Returns None when the queue had nothing visible.
    """
    async with async_session_factory() as session:
        messages = await container.message_queue(session).receive(batch_size)
        await session.commit()  # claim is durable before the slow part starts
        if not messages:
            return None
        return await container.process_batch(session).execute(messages)


async def run_forever(container: Container, batch_size: int) -> None:
    logger.info("Worker started (batch size %d)", batch_size)
    while True:
        try:
            result = await run_batch(container, batch_size)
        except Exception:
            # Session-level failure: claimed messages reappear after the visibility timeout.
            logger.exception("Batch aborted")
            result = None
        if result is None:
            await asyncio.sleep(settings.queue_poll_interval_seconds)


async def _main(once: bool, batch_size: int) -> int:
    container = build_container(settings)
    try:
        if once:
            result = await run_batch(container, batch_size)
            if result is None:
                logger.info("Queue is empty")
                return 0
            return 1 if result.failures else 0
        await run_forever(container, batch_size)
        return 0
    finally:
        await container.aclose()
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Process queued support tickets")
    parser.add_argument(
        "--once", action="store_true",
        help="Process a single batch and exit",
    )
    parser.add_argument(
        "--batch-size", type=int, default=settings.queue_batch_size,
        help=f"Messages per batch (default: {settings.queue_batch_size})",
    )
    args = parser.parse_args()

    try:
        code = asyncio.run(_main(args.once, args.batch_size))
    except KeyboardInterrupt:
        logger.info("Worker stopped")
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()

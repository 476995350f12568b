"""Bounded fetch loop.

Pulls messages page by page, never asking for more than the remaining budget.
Received messages are in-flight: they reappear after the visibility timeout
unless deleted.
"""

import logging
from collections.abc import Callable, Iterator

from sqsmover.core.config import MAX_BATCH
from sqsmover.core.models import QueueMessage
from sqsmover.sqs.client import SQSClient

logger = logging.getLogger(__name__)


def iter_messages(client: SQSClient, queue_url: str, limit: int | None = None) -> Iterator[QueueMessage]:
    """
    Yield messages from a queue until limit is reached or a page comes back empty.

    The page size only ever shrinks: it starts at min(MAX_BATCH, limit) and is
    cut down to the remaining budget near the end.

    Args:
        client: SQS client
        queue_url: Queue URL
        limit: Maximum number of messages (None to drain the queue)

    Yields:
        QueueMessage for every message received

    Raises:
        ValueError: If limit is not positive
        ClientError: If a receive call fails
    """
    if limit is not None and limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")

    count = 0
    page_size = MAX_BATCH if limit is None else min(MAX_BATCH, limit)

    while True:
        if limit is not None:
            page_size = min(page_size, limit - count)

        messages = client.receive_messages(queue_url, page_size)
        logger.debug(f"Received {len(messages)}/{page_size} messages from {queue_url}")

        for message in messages:
            yield QueueMessage.from_sqs(message)

        count += len(messages)

        if limit is not None and count >= limit:
            break
        if not messages:
            break


def fetch_up_to(
    client: SQSClient,
    queue_url: str,
    limit: int | None = None,
    sink: Callable[[QueueMessage], None] | None = None,
) -> int:
    """
    Run the fetch loop, handing every message to sink as it arrives.

    Returns:
        Number of messages fetched
    """
    count = 0
    for message in iter_messages(client, queue_url, limit):
        if sink is not None:
            sink(message)
        count += 1

    logger.info(f"Fetched {count} messages from {queue_url}")
    return count

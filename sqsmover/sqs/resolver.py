"""Queue name resolution and listing.

NO try-catch blocks - resolution failures are user input errors, never retried.
"""

import logging

from sqsmover.core.errors import AmbiguousQueueError, QueueNotFoundError
from sqsmover.core.models import QueueSummary
from sqsmover.sqs.client import SQSClient

logger = logging.getLogger(__name__)

SUMMARY_ATTRIBUTES = [
    "QueueArn",
    "ApproximateNumberOfMessages",
    "ApproximateNumberOfMessagesNotVisible",
    "LastModifiedTimestamp",
]


def find_queue_url(client: SQSClient, prefix: str) -> str:
    """
    Resolve a queue name or name prefix to exactly one queue URL.

    Args:
        client: SQS client
        prefix: Queue name or prefix

    Returns:
        The single matching queue URL

    Raises:
        QueueNotFoundError: If no queue matches
        AmbiguousQueueError: If more than one queue matches
        ClientError: If listing fails
    """
    urls = client.list_queue_urls(prefix)

    if not urls:
        raise QueueNotFoundError(prefix)
    if len(urls) > 1:
        raise AmbiguousQueueError(prefix, urls)

    logger.info(f"Resolved {prefix} to {urls[0]}")
    return urls[0]


def list_queues(client: SQSClient, prefix: str = "") -> list[QueueSummary]:
    """Backlog metrics for every queue starting with prefix."""
    return [
        QueueSummary.from_attributes(url, client.get_queue_attributes(url, SUMMARY_ATTRIBUTES))
        for url in client.list_queue_urls(prefix)
    ]

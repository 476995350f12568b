"""SQS operations for sqsmover."""

from sqsmover.sqs.batch import apply_batch, chunked
from sqsmover.sqs.client import SQSClient
from sqsmover.sqs.fetcher import fetch_up_to, iter_messages
from sqsmover.sqs.resolver import find_queue_url, list_queues
from sqsmover.sqs.transfer import dump_queue, read_dump, requeue_file

__all__ = [
    "SQSClient",
    "apply_batch",
    "chunked",
    "dump_queue",
    "fetch_up_to",
    "find_queue_url",
    "iter_messages",
    "list_queues",
    "read_dump",
    "requeue_file",
]

"""Chunked batch operator.

Applies delete or send to any number of items in chunks of at most MAX_BATCH,
collecting per-item failures instead of raising. Errors on a whole call
(network, throttling, permissions) bubble up.
"""

import logging
from collections.abc import Iterator, Sequence

from sqsmover.core.config import MAX_BATCH
from sqsmover.core.models import BatchFailure, BatchOperation, DumpRecord, QueueMessage, TransferReport
from sqsmover.sqs.client import SQSClient

logger = logging.getLogger(__name__)

_FAILURE_VERBS = {
    BatchOperation.DELETE: "delete",
    BatchOperation.SEND: "requeue",
}


def chunked(items: Sequence, size: int = MAX_BATCH) -> Iterator[list]:
    """Split items into consecutive chunks of at most size, preserving order."""
    if size < 1 or size > MAX_BATCH:
        raise ValueError(f"Chunk size must be between 1 and {MAX_BATCH}, got {size}")

    for start in range(0, len(items), size):
        yield list(items[start : start + size])


def _entry(item: QueueMessage | DumpRecord, op: BatchOperation, position: int) -> dict:
    entry = item.to_delete_entry() if op is BatchOperation.DELETE else item.to_send_entry()
    # Ids only need to be unique within one call; message ids can repeat
    entry["Id"] = str(position)
    return entry


def _failure(failure: dict, chunk: list) -> BatchFailure:
    result = BatchFailure.from_sqs(failure)
    if result.id.isdigit() and int(result.id) < len(chunk):
        result.id = chunk[int(result.id)].id
    return result


def apply_batch(
    client: SQSClient,
    queue_url: str,
    items: Sequence[QueueMessage | DumpRecord],
    op: BatchOperation,
) -> TransferReport:
    """
    Apply a bulk operation to items, one call per chunk.

    Args:
        client: SQS client
        queue_url: Queue URL
        items: QueueMessages for DELETE, DumpRecords for SEND
        op: BatchOperation.DELETE or BatchOperation.SEND

    Returns:
        TransferReport covering every item (successful + failed == len(items))

    Raises:
        ClientError: If a whole batch call fails
    """
    op = BatchOperation(op)
    report = TransferReport(operation=op, total=len(items))
    call = client.delete_batch if op is BatchOperation.DELETE else client.send_batch
    chunks = list(chunked(items))

    for index, chunk in enumerate(chunks, 1):
        response = call(queue_url, [_entry(item, op, position) for position, item in enumerate(chunk)])
        report.calls += 1

        failures = [_failure(failure, chunk) for failure in response.get("Failed", [])]
        for failure in failures:
            logger.warning(f"Could not {_FAILURE_VERBS[op]} {failure.id}, code: {failure.code}")

        report.failures.extend(failures)
        report.successful += len(chunk) - len(failures)

        logger.info(f"Batch {index}/{len(chunks)}: {len(chunk) - len(failures)} {op.value} ok, {len(failures)} failed")

    return report

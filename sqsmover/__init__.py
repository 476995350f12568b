"""sqsmover - Dump, requeue and inspect Amazon SQS queues."""

__version__ = "1.0.0"

from sqsmover.core.config import MAX_BATCH, config
from sqsmover.core.models import BatchFailure, BatchOperation, DumpRecord, QueueMessage, TransferReport

__all__ = [
    "config",
    "MAX_BATCH",
    "BatchFailure",
    "BatchOperation",
    "DumpRecord",
    "QueueMessage",
    "TransferReport",
    "__version__",
]

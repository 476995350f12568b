"""Core configuration, models and errors for sqsmover."""

from sqsmover.core.config import MAX_BATCH, config
from sqsmover.core.models import DumpRecord, QueueMessage, TransferReport

__all__ = ["config", "MAX_BATCH", "DumpRecord", "QueueMessage", "TransferReport"]

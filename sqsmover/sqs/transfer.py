"""Dump a queue to a JSON lines file and requeue a dump file.

Invalid dump lines and unusable dump paths are translated into SQSMoverError
subclasses; everything else bubbles up. The dump file is closed on every
exit path by DumpWriter.
"""

import logging
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from sqsmover.core.errors import DumpExistsError, DumpFormatError, DumpNotFoundError, DumpPathError
from sqsmover.core.models import BatchOperation, DumpRecord, DumpResult, QueueMessage, TransferReport
from sqsmover.sqs.batch import apply_batch
from sqsmover.sqs.client import SQSClient
from sqsmover.sqs.fetcher import fetch_up_to
from sqsmover.sqs.resolver import find_queue_url

logger = logging.getLogger(__name__)


def dump_file_path(directory: str | Path, queue_name: str, today: date | None = None) -> Path:
    """<directory>/<queue_name>-<YYYY-MM-DD>.jsonl"""
    today = today or date.today()
    return Path(directory) / f"{queue_name}-{today.isoformat()}.jsonl"


class DumpWriter:
    """Writes DumpRecords one line at a time, opening the file on first write.

    Nothing is created on disk if no record is ever written.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.count = 0
        self._file = None

    def write(self, message: QueueMessage) -> None:
        if self._file is None:
            self._open()

        self._file.write(DumpRecord.from_message(message).to_line())
        self._file.flush()
        self.count += 1

    def _open(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DumpPathError(self.path, e.strerror or str(e)) from e

        try:
            # "x" refuses to clobber a file created after the existence check
            self._file = open(self.path, "x", encoding="utf-8")
        except FileExistsError as e:
            raise DumpExistsError(self.path) from e
        except OSError as e:
            raise DumpPathError(self.path, e.strerror or str(e)) from e

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def opened(self) -> bool:
        return self.count > 0

    def __enter__(self) -> "DumpWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def dump_queue(
    client: SQSClient,
    queue_name: str,
    directory: str | Path,
    limit: int | None = None,
    delete: bool = True,
    today: date | None = None,
) -> DumpResult:
    """
    Save up to limit messages of a queue into a JSON lines file.

    Args:
        client: SQS client
        queue_name: Queue name or unique prefix
        directory: Directory for the dump file
        limit: Maximum number of messages (None for all)
        delete: Delete dumped messages from the queue afterwards
        today: Date used in the file name (defaults to today)

    Returns:
        DumpResult; path is None when the queue was empty

    Raises:
        DumpExistsError: If the dump file already exists (no network call made)
        DumpPathError: If the dump directory is not usable
        QueueNotFoundError / AmbiguousQueueError: If the name does not resolve
        ClientError: If an SQS call fails
    """
    path = dump_file_path(directory, queue_name, today)
    if path.exists():
        raise DumpExistsError(path)
    if path.parent.exists() and not path.parent.is_dir():
        raise DumpPathError(path, f"{path.parent} is not a directory")

    queue_url = find_queue_url(client, queue_name)
    to_delete: list[QueueMessage] = []

    def sink(message: QueueMessage) -> None:
        writer.write(message)
        if delete:
            to_delete.append(message)

    with DumpWriter(path) as writer:
        count = fetch_up_to(client, queue_url, limit, sink)

    delete_report = None
    if delete:
        delete_report = apply_batch(client, queue_url, to_delete, BatchOperation.DELETE)
        logger.info(f"Deleted {delete_report.successful}/{count} dumped messages from {queue_name}")

    return DumpResult(
        queue_name=queue_name,
        path=path if writer.opened else None,
        count=count,
        delete_report=delete_report,
    )


def read_dump(path: str | Path) -> list[DumpRecord]:
    """
    Parse every non-blank line of a dump file.

    Raises:
        DumpNotFoundError: If the file does not exist
        DumpFormatError: If a line is not a valid record
    """
    path = Path(path)
    if not path.is_file():
        raise DumpNotFoundError(path)

    records = []
    with open(path, "rb") as f:
        for line_number, raw in enumerate(f, 1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DumpFormatError(path, line_number, f"invalid UTF-8 at byte {e.start}") from e
            if not line.strip():
                continue
            try:
                records.append(DumpRecord.model_validate_json(line))
            except ValidationError as e:
                raise DumpFormatError(path, line_number, str(e.errors()[0]["msg"])) from e

    logger.info(f"Loaded {len(records)} records from {path}")
    return records


def requeue_file(client: SQSClient, queue_name: str, path: str | Path) -> TransferReport:
    """
    Send every record of a dump file to a queue.

    Re-running on the same file enqueues the same messages again.

    Raises:
        DumpNotFoundError: If the file does not exist (no network call made)
        DumpFormatError: If a line is not a valid record (no message sent)
        QueueNotFoundError / AmbiguousQueueError: If the name does not resolve
        ClientError: If a whole batch call fails
    """
    records = read_dump(path)
    queue_url = find_queue_url(client, queue_name)

    report = apply_batch(client, queue_url, records, BatchOperation.SEND)
    logger.info(f"Requeued {report.successful}/{report.total} messages to {queue_name}")
    return report

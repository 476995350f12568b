"""Shared pytest fixtures."""

import os
import tempfile
from pathlib import Path

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

# Set fake AWS environment before importing sqsmover modules
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_REGION", "us-east-1")

from sqsmover.sqs.client import SQSClient  # noqa: E402

REGION = "us-east-1"
QUEUE_URL_BASE = "https://sqs.us-east-1.amazonaws.com/123456789012"


def make_sqs_message(index: int, **extra) -> dict:
    """A receive_message entry as boto3 returns it."""
    message = {
        "MessageId": f"msg-{index:04d}",
        "ReceiptHandle": f"receipt-{index:04d}",
        "MD5OfBody": "0" * 32,
        "Body": f'{{"order": {index}}}',
        "Attributes": {"SentTimestamp": "1700000000000", "ApproximateReceiveCount": "1"},
    }
    message.update(extra)
    return message


class FakeSQS:
    """In-memory stand-in for SQSClient that records every call.

    Entries whose ReceiptHandle (delete) or MessageBody (send) is a key of
    `failures` are reported back as failed with the given code.
    """

    def __init__(self, mocker):
        self.queues: dict[str, list[dict]] = {}
        self.failures: dict[str, str] = {}
        self.page_cap: int | None = None
        self.attributes: dict[str, dict] = {}

        self.client = mocker.MagicMock(spec=SQSClient)
        self.client.list_queue_urls.side_effect = self._list
        self.client.get_queue_attributes.side_effect = lambda url, names: self.attributes.get(url, {})
        self.client.receive_messages.side_effect = self._receive
        self.client.delete_batch.side_effect = self._batch
        self.client.send_batch.side_effect = self._batch

    def add_queue(self, name: str, count: int = 0) -> str:
        url = f"{QUEUE_URL_BASE}/{name}"
        self.queues[url] = [make_sqs_message(i) for i in range(count)]
        return url

    def _list(self, prefix: str = "") -> list[str]:
        return [url for url in self.queues if url.rsplit("/", 1)[-1].startswith(prefix)]

    def _receive(self, queue_url: str, max_messages: int, *args, **kwargs) -> list[dict]:
        if self.page_cap is not None:
            max_messages = min(max_messages, self.page_cap)
        messages = self.queues[queue_url]
        page, self.queues[queue_url] = messages[:max_messages], messages[max_messages:]
        return page

    def _batch(self, queue_url: str, entries: list[dict]) -> dict:
        if len({entry["Id"] for entry in entries}) != len(entries):
            raise ClientError(
                {"Error": {"Code": "AWS.SimpleQueueService.BatchEntryIdsNotDistinct", "Message": "Ids repeat"}},
                "SendMessageBatch",
            )
        failed, successful = [], []
        for entry in entries:
            key = entry.get("ReceiptHandle", entry.get("MessageBody"))
            if key in self.failures:
                failed.append({"Id": entry["Id"], "Code": self.failures[key], "SenderFault": True})
            else:
                successful.append({"Id": entry["Id"]})
        return {"Successful": successful, "Failed": failed}

    def call_sizes(self, method: str) -> list[int]:
        """Page size / entry count of every recorded call to method."""
        calls = getattr(self.client, method).call_args_list
        if method == "receive_messages":
            return [c.args[1] for c in calls]
        return [len(c.args[1]) for c in calls]


@pytest.fixture
def tmp_output_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_sqs(mocker):
    """FakeSQS with no queues."""
    return FakeSQS(mocker)


@pytest.fixture
def sqs():
    """Moto-backed (SQSClient, raw boto3 client) pair."""
    with mock_aws():
        yield SQSClient(region=REGION), boto3.client("sqs", region_name=REGION)


@pytest.fixture(autouse=True)
def reset_env():
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def sqs_message():
    """Factory for raw receive_message entries."""
    return make_sqs_message

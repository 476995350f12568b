"""Pydantic models - Single source of truth for data structures.

NO try-catch blocks - Pydantic validates automatically and raises ValidationError.
"""

import base64
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Keys SQS accepts inside a MessageAttributeValue on send
_ATTRIBUTE_VALUE_KEYS = {
    "DataType": "DataType",
    "data_type": "DataType",
    "StringValue": "StringValue",
    "string_value": "StringValue",
    "BinaryValue": "BinaryValue",
    "binary_value": "BinaryValue",
}

# Legacy / raw SQS field names -> dump record field names
_RECORD_RENAMES = {
    "message_id": "id",
    "MessageId": "id",
    "body": "message_body",
    "Body": "message_body",
    "Attributes": "attributes",
    "MessageAttributes": "message_attributes",
}

# Never replayed: single-use receipt and checksums of the original send
_RECORD_DROPPED = {
    "receipt_handle",
    "ReceiptHandle",
    "md5_of_body",
    "MD5OfBody",
    "md5_of_message_attributes",
    "MD5OfMessageAttributes",
}

# System attributes that must be carried over when sending to a FIFO queue
_FIFO_ATTRIBUTES = ("MessageGroupId", "MessageDeduplicationId")


class BatchOperation(str, Enum):
    """Bulk operations supported by the chunked batch operator."""

    DELETE = "delete"
    SEND = "send"


class QueueMessage(BaseModel):
    """A message received from SQS (in-flight until deleted or timed out)."""

    id: str
    receipt_handle: str
    body: str = ""
    attributes: dict[str, str] = Field(default_factory=dict)
    message_attributes: dict[str, dict[str, Any]] = Field(default_factory=dict)
    md5_of_body: str | None = None
    md5_of_message_attributes: str | None = None

    @classmethod
    def from_sqs(cls, message: dict) -> "QueueMessage":
        """Build from one entry of a boto3 receive_message response."""
        return cls(
            id=message["MessageId"],
            receipt_handle=message["ReceiptHandle"],
            body=message.get("Body", ""),
            attributes=message.get("Attributes", {}),
            message_attributes=message.get("MessageAttributes", {}),
            md5_of_body=message.get("MD5OfBody"),
            md5_of_message_attributes=message.get("MD5OfMessageAttributes"),
        )

    def to_delete_entry(self) -> dict:
        return {"Id": self.id, "ReceiptHandle": self.receipt_handle}


class DumpRecord(BaseModel):
    """On-disk projection of a QueueMessage, one JSON object per line.

    Receipt handles and checksums are never part of a record. Binary message
    attribute values are kept base64 encoded so the record stays valid JSON.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    message_body: str
    attributes: dict[str, str] = Field(default_factory=dict)
    message_attributes: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_fields(cls, data: Any) -> Any:
        """Accept records written with raw SQS or older snake_case field names."""
        if not isinstance(data, dict):
            return data

        normalized = {}
        for key, value in data.items():
            if key in _RECORD_DROPPED:
                continue
            normalized.setdefault(_RECORD_RENAMES.get(key, key), value)

        attributes = normalized.get("message_attributes")
        if isinstance(attributes, dict):
            normalized["message_attributes"] = {
                name: _normalize_attribute_value(value) if isinstance(value, dict) else value
                for name, value in attributes.items()
            }

        return normalized

    @classmethod
    def from_message(cls, message: QueueMessage) -> "DumpRecord":
        return cls(
            id=message.id,
            message_body=message.body,
            attributes=message.attributes,
            message_attributes={
                name: _encode_binary(value) for name, value in message.message_attributes.items()
            },
        )

    def to_line(self) -> str:
        return self.model_dump_json() + "\n"

    def to_send_entry(self) -> dict:
        """Build a send_message_batch entry replaying this record."""
        entry = {"Id": self.id, "MessageBody": self.message_body}

        if self.message_attributes:
            entry["MessageAttributes"] = {
                name: _decode_binary(value) for name, value in self.message_attributes.items()
            }

        for key in _FIFO_ATTRIBUTES:
            if key in self.attributes:
                entry[key] = self.attributes[key]

        return entry


def _normalize_attribute_value(value: dict) -> dict:
    return {
        _ATTRIBUTE_VALUE_KEYS[key]: item
        for key, item in value.items()
        if key in _ATTRIBUTE_VALUE_KEYS and item is not None
    }


def _encode_binary(value: dict) -> dict:
    value = _normalize_attribute_value(value)
    if isinstance(value.get("BinaryValue"), (bytes, bytearray)):
        value["BinaryValue"] = base64.b64encode(value["BinaryValue"]).decode("ascii")
    return value


def _decode_binary(value: dict) -> dict:
    value = dict(value)
    if isinstance(value.get("BinaryValue"), str):
        value["BinaryValue"] = base64.b64decode(value["BinaryValue"])
    return value


class BatchFailure(BaseModel):
    """One item the queue service rejected inside a bulk call."""

    id: str
    code: str
    message: str | None = None
    sender_fault: bool = False

    @classmethod
    def from_sqs(cls, failure: dict) -> "BatchFailure":
        return cls(
            id=failure["Id"],
            code=failure["Code"],
            message=failure.get("Message"),
            sender_fault=failure.get("SenderFault", False),
        )


class TransferReport(BaseModel):
    """Accumulated outcome of a multi-chunk bulk operation."""

    operation: BatchOperation
    total: int = 0
    successful: int = 0
    calls: int = 0
    failures: list[BatchFailure] = Field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)


class QueueSummary(BaseModel):
    """Backlog metrics for one queue (a row of `ls`)."""

    name: str
    url: str
    available: int = 0
    in_flight: int = 0
    last_modified: datetime | None = None

    @classmethod
    def from_attributes(cls, url: str, attributes: dict) -> "QueueSummary":
        arn = attributes.get("QueueArn")
        timestamp = attributes.get("LastModifiedTimestamp")
        return cls(
            name=arn.split(":")[-1] if arn else url.rstrip("/").split("/")[-1],
            url=url,
            available=int(attributes.get("ApproximateNumberOfMessages", 0)),
            in_flight=int(attributes.get("ApproximateNumberOfMessagesNotVisible", 0)),
            last_modified=datetime.fromtimestamp(float(timestamp)) if timestamp else None,
        )


class DumpResult(BaseModel):
    """Outcome of a dump: file written, messages saved, optional delete report."""

    queue_name: str
    path: Path | None = None
    count: int = 0
    delete_report: TransferReport | None = None

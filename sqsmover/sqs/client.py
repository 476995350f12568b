"""SQS client wrapper.

NO try-catch blocks - let boto3 exceptions bubble up.
"""

import boto3

from sqsmover.core.config import MAX_BATCH, config


class SQSClient:
    """Low-level SQS calls used by the resolver, fetch loop and batch operator.

    One instance is built per command and passed to every component.
    """

    def __init__(self, region: str | None = None, endpoint_url: str | None = None, profile: str | None = None):
        self.region = region or config.aws_region
        self.endpoint_url = endpoint_url or config.sqs_endpoint_url
        self.profile = profile or config.aws_profile

        session = boto3.session.Session(profile_name=self.profile) if self.profile else boto3
        self.sqs = session.client("sqs", region_name=self.region, endpoint_url=self.endpoint_url)

    def list_queue_urls(self, prefix: str = "") -> list[str]:
        """
        List queue URLs whose name starts with prefix.

        Args:
            prefix: Queue name prefix ("" for all queues)

        Returns:
            Queue URLs, across all result pages

        Raises:
            ClientError: If list fails
        """
        urls = []
        kwargs = {"QueueNamePrefix": prefix, "MaxResults": 1000}

        while True:
            response = self.sqs.list_queues(**kwargs)
            urls.extend(response.get("QueueUrls", []))

            next_token = response.get("NextToken")
            if not next_token:
                return urls
            kwargs["NextToken"] = next_token

    def get_queue_attributes(self, queue_url: str, attribute_names: list[str]) -> dict:
        """
        Read named attributes of a queue.

        Raises:
            ClientError: If get attributes fails
        """
        response = self.sqs.get_queue_attributes(QueueUrl=queue_url, AttributeNames=attribute_names)
        return response.get("Attributes", {})

    def receive_messages(
        self,
        queue_url: str,
        max_messages: int,
        wait_seconds: int | None = None,
        visibility_timeout: int | None = None,
    ) -> list[dict]:
        """
        Receive up to max_messages messages with all attributes.

        Args:
            queue_url: Queue URL
            max_messages: 1..10 messages
            wait_seconds: Long polling wait (defaults to config)
            visibility_timeout: Optional visibility timeout override

        Returns:
            Raw boto3 message dicts (empty list when nothing is visible)

        Raises:
            ClientError: If receive fails
        """
        kwargs = {
            "QueueUrl": queue_url,
            "MaxNumberOfMessages": max_messages,
            "AttributeNames": ["All"],
            "MessageAttributeNames": ["All"],
            "WaitTimeSeconds": config.receive_wait_seconds if wait_seconds is None else wait_seconds,
        }
        if visibility_timeout is None:
            visibility_timeout = config.visibility_timeout
        if visibility_timeout is not None:
            kwargs["VisibilityTimeout"] = visibility_timeout

        response = self.sqs.receive_message(**kwargs)
        return response.get("Messages", [])

    def delete_batch(self, queue_url: str, entries: list[dict]) -> dict:
        """
        Delete batch of messages (max 10).

        Args:
            entries: List of entries with 'Id' and 'ReceiptHandle'

        Returns:
            Raw response with 'Successful' and 'Failed' lists

        Raises:
            ValueError: If more than MAX_BATCH entries are given
            ClientError: If SQS batch delete fails
        """
        _check_batch_size(entries)
        return self.sqs.delete_message_batch(QueueUrl=queue_url, Entries=entries)

    def send_batch(self, queue_url: str, entries: list[dict]) -> dict:
        """
        Send batch of messages (max 10).

        Args:
            entries: List of message entries with 'Id' and 'MessageBody'

        Returns:
            Raw response with 'Successful' and 'Failed' lists

        Raises:
            ValueError: If more than MAX_BATCH entries are given
            ClientError: If SQS batch send fails
        """
        _check_batch_size(entries)
        return self.sqs.send_message_batch(QueueUrl=queue_url, Entries=entries)


def _check_batch_size(entries: list[dict]) -> None:
    if len(entries) > MAX_BATCH:
        raise ValueError(f"Batch of {len(entries)} entries exceeds the SQS limit of {MAX_BATCH}")

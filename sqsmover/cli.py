"""Command line interface: ls, dump and requeue.

Example:
    sqsmover ls orders
    sqsmover dump orders --number 100 --path ./dumps --delete false
    sqsmover requeue orders ./dumps/orders-2024-01-01.jsonl
"""

import argparse
import logging
import sys

from botocore.exceptions import BotoCoreError, ClientError

from sqsmover.core.config import config
from sqsmover.core.errors import SQSMoverError
from sqsmover.core.models import QueueSummary, TransferReport
from sqsmover.sqs.client import SQSClient
from sqsmover.sqs.resolver import list_queues
from sqsmover.sqs.transfer import dump_queue, requeue_file

TABLE_HEADER = ["Queue", "Messages Available", "Messages Inflight", "Last Modified"]


def parse_bool(value: str) -> bool:
    """argparse type for --delete=true|false."""
    lowered = value.strip().lower()
    if lowered in ("true", "t", "yes", "y", "1"):
        return True
    if lowered in ("false", "f", "no", "n", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {value!r}")
    return number


def format_table(summaries: list[QueueSummary]) -> str:
    """Render ls rows as a left-aligned text table."""
    rows = [TABLE_HEADER] + [
        [
            summary.name,
            str(summary.available),
            str(summary.in_flight),
            summary.last_modified.strftime("%Y-%m-%d %H:%M:%S") if summary.last_modified else "-",
        ]
        for summary in summaries
    ]
    widths = [max(len(row[i]) for row in rows) for i in range(len(TABLE_HEADER))]
    return "\n".join("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows)


def print_failures(report: TransferReport, verb: str) -> None:
    for failure in report.failures:
        print(f"⚠️  Could not {verb} {failure.id}, code: {failure.code}")


def cmd_ls(client: SQSClient, args: argparse.Namespace) -> int:
    summaries = list_queues(client, args.prefix)
    print(format_table(summaries))
    return 0


def cmd_dump(client: SQSClient, args: argparse.Namespace) -> int:
    result = dump_queue(
        client,
        args.queue_name,
        args.path,
        limit=args.number,
        delete=args.delete,
    )

    if result.count == 0:
        print(f"Queue {args.queue_name} is empty")
        return 0

    print(f"✅ Dump saved in {result.path} with {result.count} messages")

    if result.delete_report is not None:
        print_failures(result.delete_report, "delete")
        print(f"   {result.delete_report.successful} of {result.count} removed from {args.queue_name}")

    return 0


def cmd_requeue(client: SQSClient, args: argparse.Namespace) -> int:
    report = requeue_file(client, args.queue_name, args.path)

    print_failures(report, "requeue")
    print(f"✅ Requeued {report.successful} of {report.total} messages to {args.queue_name}")
    if report.failed:
        print(f"❌ Failed: {report.failed}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqsmover",
        description="List SQS queues, dump their messages to JSON lines files and requeue dumps",
    )
    parser.add_argument("--region", default=None, help=f"AWS region (default: {config.aws_region})")
    parser.add_argument("--endpoint-url", default=None, help="Custom SQS endpoint, e.g. LocalStack")
    parser.add_argument("--profile", default=None, help="AWS profile name")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every batch call")

    subparsers = parser.add_subparsers(dest="command", required=True)

    ls_parser = subparsers.add_parser("ls", help="List queues")
    ls_parser.add_argument("prefix", nargs="?", default="", help="Queue name prefix")
    ls_parser.set_defaults(func=cmd_ls)

    dump_parser = subparsers.add_parser("dump", help="Dump messages from a queue into a JSON lines file")
    dump_parser.add_argument("queue_name", help="Queue name or unique prefix")
    dump_parser.add_argument(
        "--number", "-n", type=positive_int, default=None, help="Number of messages to dump (default: all)"
    )
    dump_parser.add_argument(
        "--path", "-p", default=config.dump_dir, help=f"Directory to save the dump file (default: {config.dump_dir})"
    )
    dump_parser.add_argument(
        "--delete", "-d", type=parse_bool, default=True, help="Delete dumped messages from the queue (default: true)"
    )
    dump_parser.set_defaults(func=cmd_dump)

    requeue_parser = subparsers.add_parser("requeue", help="Requeue messages from a dump file")
    requeue_parser.add_argument("queue_name", help="Queue name or unique prefix")
    requeue_parser.add_argument("path", help="Dump file")
    requeue_parser.set_defaults(func=cmd_requeue)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        client = SQSClient(region=args.region, endpoint_url=args.endpoint_url, profile=args.profile)
        return args.func(client, args)
    except SQSMoverError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except (ClientError, BotoCoreError) as e:
        print(f"❌ AWS error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())

"""Exceptions raised for operator input errors.

Per-item batch failures are never raised; they are collected in a TransferReport.
"""


class SQSMoverError(Exception):
    """Base class for fatal, user-facing errors."""


class QueueNotFoundError(SQSMoverError):
    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"No queue found starting with {prefix}")


class AmbiguousQueueError(SQSMoverError):
    def __init__(self, prefix: str, candidates: list[str]):
        self.prefix = prefix
        self.candidates = candidates
        super().__init__(f"There's more than one queue starting with {prefix}: {', '.join(candidates)}")


class DumpExistsError(SQSMoverError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"File {path} already exists")


class DumpNotFoundError(SQSMoverError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Path {path} not found")


class DumpFormatError(SQSMoverError):
    def __init__(self, path, line_number: int, reason: str):
        self.path = path
        self.line_number = line_number
        super().__init__(f"Invalid record in {path} at line {line_number}: {reason}")


class DumpPathError(SQSMoverError):
    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Cannot write dump file {path}: {reason}")

"""
Exception hierarchy for the set/zset benchmark.

Library code raises these; only the command line turns them into exit codes.
"""


class BenchmarkError(Exception):
    """Base class for every error raised by setbench."""


class ConfigError(BenchmarkError):
    """Raised when a BenchmarkConfig holds an unusable value."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field


class ConnectionSetupError(BenchmarkError):
    """Raised when the client pool cannot be established."""


class OperationFailed(BenchmarkError):
    """
    A single store operation returned an error.

    Attributes:
        worker_id (int): Worker that issued the operation
        index (int): Logical request index being executed
        operation (str): Operation kind, e.g. 'zadd'
        cause (Exception): Error raised by the client
    """

    def __init__(self, worker_id: int, index: int, operation: str, cause: Exception):
        super().__init__(
            f"worker {worker_id}: {operation} failed at request {index}: {cause}"
        )
        self.worker_id = worker_id
        self.index = index
        self.operation = operation
        self.cause = cause


class BenchmarkAborted(BenchmarkError):
    """The run was abandoned because a worker failed; no summary exists."""

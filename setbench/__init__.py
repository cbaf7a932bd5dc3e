"""Valkey set/zset latency benchmark."""

__all__ = [
    "BenchmarkConfig",
    "Dispatcher",
    "LatencyHistogram",
    "RunSummary",
    "Worker",
    "WorkPartition",
    "partition_requests",
]

__version__ = "0.1.0"

from .config import BenchmarkConfig
from .dispatcher import Dispatcher, RunSummary, partition_requests
from .histogram import LatencyHistogram
from .worker import Worker, WorkPartition

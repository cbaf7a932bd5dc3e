"""
Benchmark worker: runs one contiguous slice of the request indices against a
single client and feeds each latency into the shared histogram.
"""

import time
from dataclasses import dataclass

from .config import BenchmarkConfig
from .errors import OperationFailed
from .histogram import LatencyHistogram
from .operations import execute, operation_call


@dataclass(frozen=True)
class WorkPartition:
    """
    Range [start, start + count) of logical request indices.

    Attributes:
        start (int): First request index
        count (int): Number of requests
    """

    start: int
    count: int

    @property
    def stop(self) -> int:
        return self.start + self.count

    def indices(self) -> range:
        return range(self.start, self.stop)


@dataclass(frozen=True)
class WorkerResult:
    """
    Outcome of a finished worker.

    Attributes:
        worker_id (int): Worker number
        completed (int): Iterations recorded in the histogram
        skipped (int): Iterations that sent nothing because the operation
            kind has no command mapping
    """

    worker_id: int
    completed: int
    skipped: int


class Worker:
    def __init__(self, worker_id: int, config: BenchmarkConfig,
                 histogram: LatencyHistogram, clock=time.perf_counter_ns):
        self.worker_id = worker_id
        self.config = config
        self.histogram = histogram
        self._clock = clock

    async def run(self, client, partition: WorkPartition) -> WorkerResult:
        """
        Execute every request in the partition, one at a time.

        Latency is measured in nanoseconds and truncated to whole milliseconds. An operation kind without
        a command mapping still records its (near zero) iteration time and is
        counted as skipped.

        Args:
            client: GLIDE client, or anything with the same typed set/zset methods
            partition (WorkPartition): Request indices owned by this worker

        Returns:
            WorkerResult: Completed and skipped counts

        Raises:
            OperationFailed: On the first error returned by the store
        """
        operation = self.config.operation
        completed = 0
        skipped = 0

        for index in partition.indices():
            call = operation_call(operation, self.config.key, index)

            start = self._clock()
            if call is None:
                skipped += 1
            else:
                try:
                    await execute(client, call)
                except Exception as e:
                    raise OperationFailed(self.worker_id, index, operation, e) from e
            latency_ms = (self._clock() - start) // 1_000_000

            self.histogram.record(latency_ms)
            completed += 1

        return WorkerResult(worker_id=self.worker_id, completed=completed, skipped=skipped)

"""
Run lifecycle: split the request count across workers, start them all,
wait for every one of them and build the run summary.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import List

from .config import BenchmarkConfig
from .errors import BenchmarkAborted
from .histogram import HistogramSnapshot, LatencyHistogram
from .worker import WorkPartition, Worker, WorkerResult


@dataclass(frozen=True)
class RunSummary:
    """
    Everything the reporter needs from a finished run.

    Attributes:
        operation (str): Operation kind that was benchmarked
        total_requests (int): Requested total, executed or not
        concurrency (int): Number of workers
        elapsed_seconds (float): Wall time from launch to join
        histogram (HistogramSnapshot): Latency counts
        dropped_requests (int): Requests no worker was assigned
        skipped_operations (int): Iterations that sent no command
    """

    operation: str
    total_requests: int
    concurrency: int
    elapsed_seconds: float
    histogram: HistogramSnapshot
    dropped_requests: int = 0
    skipped_operations: int = 0


def partition_requests(total: int, concurrency: int,
                       redistribute_remainder: bool = False) -> List[WorkPartition]:
    """
    Split [0, total) into `concurrency` contiguous partitions.

    Every partition gets total // concurrency requests. The remainder is left
    unassigned unless redistribute_remainder is set, in which case the last
    partition absorbs it.

    Args:
        total (int): Total number of requests
        concurrency (int): Number of workers, at least 1
        redistribute_remainder (bool): Assign the remainder to the last worker

    Returns:
        List[WorkPartition]: One partition per worker, in index order
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    size = total // concurrency
    partitions = [WorkPartition(start=k * size, count=size) for k in range(concurrency)]

    remainder = total - size * concurrency
    if redistribute_remainder and remainder:
        last = partitions[-1]
        partitions[-1] = WorkPartition(start=last.start, count=last.count + remainder)
    return partitions


class Dispatcher:
    """
    Fans a run out to one asyncio task per worker and joins them.

    Attributes:
        config (BenchmarkConfig): Run configuration
        pool: Object whose `lease()` is an async context manager yielding a client
    """

    def __init__(self, config: BenchmarkConfig, pool, clock=time.perf_counter_ns):
        self.config = config
        self.pool = pool
        self._clock = clock

    async def _run_worker(self, worker: Worker, partition: WorkPartition) -> WorkerResult:
        async with self.pool.lease() as client:
            return await worker.run(client, partition)

    async def execute(self) -> RunSummary:
        """
        Run the benchmark to completion.

        Returns:
            RunSummary: Built only after every worker has finished

        Raises:
            BenchmarkAborted: If any worker fails; the other workers are
                cancelled and no partial results are kept
        """
        config = self.config
        histogram = LatencyHistogram(config.histogram_ceiling_ms)
        partitions = partition_requests(
            config.requests, config.concurrency, config.redistribute_remainder
        )
        workers = [
            Worker(k, config, histogram, clock=self._clock)
            for k in range(len(partitions))
        ]

        start = self._clock()
        tasks = [
            asyncio.create_task(self._run_worker(worker, partition))
            for worker, partition in zip(workers, partitions)
        ]
        try:
            results = await asyncio.gather(*tasks)
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise BenchmarkAborted(str(e)) from e
        elapsed = (self._clock() - start) / 1e9

        assigned = sum(p.count for p in partitions)
        return RunSummary(
            operation=config.operation,
            total_requests=config.requests,
            concurrency=config.concurrency,
            elapsed_seconds=elapsed,
            histogram=histogram.snapshot(),
            dropped_requests=config.requests - assigned,
            skipped_operations=sum(r.skipped for r in results),
        )

"""
Turns a RunSummary into the benchmark report.

Text output mirrors redis-benchmark:

    ================== zadd =================
    200000 requests completed in 3 seconds
    20 parallel clients
    66666 queries per second

    12.50% <= 0ms
    99.98% <= 1ms
    100.00% <= 2ms
"""

import sys
from dataclasses import dataclass
from typing import List

from .dispatcher import RunSummary

CSV_HEADER = 'latency_ms,count,cumulative_count,cumulative_pct'


@dataclass(frozen=True)
class PercentileRow:
    latency_ms: int
    count: int
    cumulative: int
    percentage: float


def whole_seconds(summary: RunSummary) -> int:
    return int(summary.elapsed_seconds)


def queries_per_second(summary: RunSummary) -> int:
    """
    Throughput over whole elapsed seconds.

    A run shorter than one second reports the request count itself.
    """
    seconds = whole_seconds(summary)
    if seconds > 0:
        return summary.total_requests // seconds
    return summary.total_requests


def percentile_rows(summary: RunSummary) -> List[PercentileRow]:
    """
    Walk non-empty buckets in latency order with a running total.

    Percentages are relative to the requested total, not to what was
    recorded. The walk stops once the running total reaches the requested
    total; overflow is never part of it.

    Args:
        summary (RunSummary): Finished run

    Returns:
        List[PercentileRow]: One row per non-empty in-range bucket
    """
    total = summary.total_requests
    rows = []
    cumulative = 0
    for latency_ms, count in summary.histogram.nonzero():
        if cumulative >= total:
            break
        cumulative += count
        rows.append(PercentileRow(
            latency_ms=latency_ms,
            count=count,
            cumulative=cumulative,
            percentage=100.0 * cumulative / total,
        ))
    return rows


def format_text(summary: RunSummary) -> List[str]:
    lines = [
        f"================== {summary.operation} =================",
        f"{summary.total_requests} requests completed in {whole_seconds(summary)} seconds",
        f"{summary.concurrency} parallel clients",
        f"{queries_per_second(summary)} queries per second",
        "",
    ]
    for row in percentile_rows(summary):
        lines.append(f"{row.percentage:.2f}% <= {row.latency_ms}ms")
    return lines


def format_quiet(summary: RunSummary) -> List[str]:
    return [f"{summary.operation}: {queries_per_second(summary)} requests per second"]


def format_csv(summary: RunSummary) -> List[str]:
    """
    CSV rendition of the percentile walk.

    A trailing row whose latency_ms equals the histogram ceiling carries the
    overflow count (latencies >= ceiling).
    """
    lines = [CSV_HEADER]
    rows = percentile_rows(summary)
    for row in rows:
        lines.append(f"{row.latency_ms},{row.count},{row.cumulative},{row.percentage:.2f}")

    overflow = summary.histogram.overflow
    if overflow:
        cumulative = (rows[-1].cumulative if rows else 0) + overflow
        percentage = 100.0 * cumulative / summary.total_requests
        lines.append(f"{summary.histogram.ceiling},{overflow},{cumulative},{percentage:.2f}")
    return lines


def summary_warnings(summary: RunSummary) -> List[str]:
    warnings = []
    if summary.dropped_requests:
        warnings.append(
            f"Warning: {summary.dropped_requests} requests were not executed "
            f"({summary.total_requests} is not a multiple of {summary.concurrency} clients)"
        )
    if summary.skipped_operations:
        warnings.append(
            f"Warning: {summary.skipped_operations} iterations sent no command "
            f"(no mapping for operation '{summary.operation}')"
        )
    if summary.histogram.overflow:
        warnings.append(
            f"Warning: {summary.histogram.overflow} requests took "
            f">= {summary.histogram.ceiling}ms and were counted as overflow"
        )
    return warnings


def print_report(summary: RunSummary, output_format: str = 'text', quiet: bool = False,
                 out=None, err=None):
    """
    Write the report to `out` (stdout) and warnings to `err` (stderr).

    Args:
        summary (RunSummary): Finished run
        output_format (str): 'text' or 'csv'
        quiet (bool): Only print the throughput line; ignored for CSV
        out: Stream for the report
        err: Stream for warnings
    """
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err

    if output_format == 'csv':
        lines = format_csv(summary)
    elif quiet:
        lines = format_quiet(summary)
    else:
        lines = format_text(summary)

    for line in lines:
        print(line, file=out)
    for warning in summary_warnings(summary):
        print(warning, file=err)

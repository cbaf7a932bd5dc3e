import io

from setbench.dispatcher import RunSummary
from setbench.histogram import LatencyHistogram
from setbench.report import (
    CSV_HEADER, format_csv, format_quiet, format_text, percentile_rows,
    print_report, queries_per_second,
)


def summary_for(latencies, total=None, elapsed=3.7, concurrency=2, ceiling=2000,
                operation="zadd", **extra):
    h = LatencyHistogram(ceiling_ms=ceiling)
    for ms in latencies:
        h.record(ms)
    return RunSummary(
        operation=operation,
        total_requests=len(latencies) if total is None else total,
        concurrency=concurrency,
        elapsed_seconds=elapsed,
        histogram=h.snapshot(),
        **extra,
    )


def test_qps_uses_whole_seconds():
    assert queries_per_second(summary_for([1] * 10, total=10, elapsed=3.9)) == 3


def test_qps_falls_back_to_total_for_sub_second_runs():
    assert queries_per_second(summary_for([1] * 10, total=10, elapsed=0.4)) == 10


def test_header_block():
    lines = format_text(summary_for([0, 1, 1], elapsed=1.2, concurrency=20))
    assert lines[:5] == [
        "================== zadd =================",
        "3 requests completed in 1 seconds",
        "20 parallel clients",
        "3 queries per second",
        "",
    ]


def test_percentile_lines():
    lines = format_text(summary_for([0, 1, 1, 5]))
    assert lines[5:] == [
        "25.00% <= 0ms",
        "75.00% <= 1ms",
        "100.00% <= 5ms",
    ]


def test_ten_requests_reach_one_hundred_percent():
    rows = percentile_rows(summary_for([3, 1, 4, 1, 5, 9, 2, 6, 5, 3]))
    assert sum(r.count for r in rows) == 10
    assert rows[-1].cumulative == 10
    assert format_text(summary_for([3, 1, 4, 1, 5, 9, 2, 6, 5, 3]))[-1] == "100.00% <= 9ms"


def test_percentages_never_decrease():
    rows = percentile_rows(summary_for([7, 0, 3, 3, 12, 1, 7, 7, 30]))
    pcts = [r.percentage for r in rows]
    assert pcts == sorted(pcts)
    assert [r.latency_ms for r in rows] == sorted(r.latency_ms for r in rows)


def test_percentages_relative_to_requested_total():
    rows = percentile_rows(summary_for([1] * 6, total=7))
    assert len(rows) == 1
    assert rows[0].cumulative == 6
    assert round(rows[0].percentage, 2) == 85.71


def test_overflow_is_not_listed():
    summary = summary_for([2000], ceiling=2000)
    assert summary.histogram.overflow == 1
    assert percentile_rows(summary) == []
    assert format_text(summary)[-1] == ""


def test_zero_requests():
    assert percentile_rows(summary_for([], total=0)) == []
    assert queries_per_second(summary_for([], total=0, elapsed=0)) == 0


def test_quiet():
    assert format_quiet(summary_for([1, 1], elapsed=0.1, operation="sadd")) == [
        "sadd: 2 requests per second"
    ]


def test_csv_rows_and_overflow_row():
    lines = format_csv(summary_for([0, 1, 1, 10], ceiling=10))
    assert lines == [
        CSV_HEADER,
        "0,1,1,25.00",
        "1,2,3,75.00",
        "10,1,4,100.00",
    ]


def test_print_report_warnings_go_to_stderr():
    summary = summary_for([1] * 6, total=7, concurrency=3, dropped_requests=1)
    out, err = io.StringIO(), io.StringIO()

    print_report(summary, out=out, err=err)

    assert "85.71% <= 1ms" in out.getvalue()
    assert "Warning" not in out.getvalue()
    assert "1 requests were not executed" in err.getvalue()


def test_print_report_csv():
    out, err = io.StringIO(), io.StringIO()
    print_report(summary_for([1, 2]), output_format="csv", out=out, err=err)
    assert out.getvalue().splitlines()[0] == CSV_HEADER
    assert err.getvalue() == ""

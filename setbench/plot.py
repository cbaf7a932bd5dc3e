#!/usr/bin/env python3
"""
Latency Distribution Plotter
============================

Draws the cumulative latency distribution from a CSV report written by
`setbench --csv`.

Usage:
    setbench-plot <csv_file> [-o <image>]

Example:
    setbench --csv -t zadd -n 100000 > zadd.csv
    setbench-plot zadd.csv -o zadd.png
"""

import argparse
import sys
from pathlib import Path

import pandas as pd
import matplotlib.pyplot as plt

from .report import CSV_HEADER

COLUMNS = CSV_HEADER.split(',')
GUIDES = ((50, 'g'), (90, 'orange'), (99, 'r'))


def load_distribution(csv_file) -> pd.DataFrame:
    """
    Read a CSV report.

    Args:
        csv_file: Path to the CSV file

    Returns:
        pd.DataFrame: Rows sorted by latency_ms

    Raises:
        ValueError: If a required column is missing
    """
    data = pd.read_csv(csv_file)
    missing = [c for c in COLUMNS if c not in data.columns]
    if missing:
        raise ValueError(f"{csv_file}: missing columns {', '.join(missing)}")
    return data.sort_values('latency_ms').reset_index(drop=True)


def percentile_latency(data: pd.DataFrame, percentile: float):
    """Smallest latency whose cumulative percentage reaches `percentile`, or None."""
    reached = data[data['cumulative_pct'] >= percentile]
    if reached.empty:
        return None
    return int(reached['latency_ms'].iloc[0])


def plot_distribution(data: pd.DataFrame, title: str = 'Latency Distribution'):
    """
    Step plot of cumulative percentage against latency.

    Returns:
        matplotlib.figure.Figure
    """
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.set_title(title, fontweight='bold', fontsize=12)
    ax.set_xlabel('Latency (ms)')
    ax.set_ylabel('Requests (%)')
    ax.set_ylim(0, 105)
    ax.grid(True, alpha=0.3)

    if data.empty:
        ax.text(0.5, 0.5, 'No latency data',
                transform=ax.transAxes, ha='center', va='center', fontsize=12)
        return fig

    ax.step(data['latency_ms'], data['cumulative_pct'], 'b-', where='post',
            linewidth=2, label='Cumulative')
    ax.fill_between(data['latency_ms'], data['cumulative_pct'], step='post', alpha=0.3)

    for percentile, color in GUIDES:
        latency = percentile_latency(data, percentile)
        if latency is not None:
            ax.axvline(x=latency, color=color, linestyle='--',
                       linewidth=1, label=f'P{percentile}: {latency}ms')
    ax.legend(loc='lower right')
    fig.tight_layout()
    return fig


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description='Plot the latency distribution of a setbench CSV report',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  setbench-plot zadd.csv
  setbench-plot zadd.csv -o zadd.png
        """
    )
    parser.add_argument('csv_file', help='Path to the CSV report')
    parser.add_argument('-o', '--output', help='Write the figure to this file instead of showing it')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    csv_file = Path(args.csv_file)

    if not csv_file.exists():
        print(f"Error: CSV file not found: {csv_file}", file=sys.stderr)
        return 1

    try:
        data = load_distribution(csv_file)
    except (ValueError, pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    fig = plot_distribution(data, title=f'Latency Distribution - {csv_file.name}')
    if args.output:
        fig.savefig(args.output)
        print(f"Saved {args.output}")
    else:
        plt.show()
    return 0


if __name__ == '__main__':
    sys.exit(main())

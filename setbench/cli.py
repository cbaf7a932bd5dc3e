"""
Command line entry point for the set/zset benchmark.

Usage:
    setbench [-h <host>] [-p <port>] [-t <type>] [-n <requests>]
             [-z <pool size>] [-c <clients>] [-k <key>]

Examples:
    setbench -t zadd -n 100000 -c 20
    setbench -h 192.168.1.1 -t zrank -n 100000 -k pikatest
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .config import BenchmarkConfig, DEFAULT_CEILING_MS, OPERATIONS
from .dispatcher import Dispatcher, RunSummary
from .errors import BenchmarkError
from .pool import ClientPool
from .report import print_report


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    -h is the host, as in redis-benchmark, so help is only --help.

    Args:
        argv (Optional[List[str]]): Arguments, defaults to sys.argv[1:]

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = argparse.ArgumentParser(description='Valkey set/zset benchmark',
                                     add_help=False)

    parser.add_argument('--help', action='help', default=argparse.SUPPRESS,
                        help='Show this help message and exit')

    # Basic options
    basic_group = parser.add_argument_group('Basic options')
    basic_group.add_argument('-h', '--host', default='127.0.0.1',
                             help='Server hostname')
    basic_group.add_argument('-p', '--port', type=int, default=6379,
                             help='Server port')
    basic_group.add_argument('-t', '--type', default='zadd', choices=OPERATIONS,
                             help='Operation to benchmark (one per run; run zadd before zrank/zscore/zrem)')
    basic_group.add_argument('-n', '--requests', type=int, default=200000,
                             help='Total number of requests')
    basic_group.add_argument('-z', '--pool-size', type=int, default=20,
                             help='Number of client connections')
    basic_group.add_argument('-c', '--clients', type=int, default=20,
                             help='Number of parallel clients')
    basic_group.add_argument('-k', '--key', default='pikatest',
                             help='Set/zset key, also used as member prefix')

    # Connection options
    conn_group = parser.add_argument_group('Connection options')
    conn_group.add_argument('--tls', action='store_true',
                            help='Use TLS connection')
    conn_group.add_argument('--cluster', action='store_true',
                            help='Use cluster client')

    # Workload options
    workload_group = parser.add_argument_group('Workload options')
    workload_group.add_argument('--redistribute-remainder', action='store_true',
                                help='Run the requests %% clients leftover on the last client '
                                     'instead of dropping them')
    workload_group.add_argument('--ceiling', type=int, default=DEFAULT_CEILING_MS,
                                help='Latency in ms from which requests count as overflow')

    # Output options
    output_group = parser.add_argument_group('Output options')
    output_group.add_argument('--csv', action='store_true',
                              help='Output the latency distribution as CSV')
    output_group.add_argument('-q', '--quiet', action='store_true',
                              help='Quiet. Just show query/sec values')

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> BenchmarkConfig:
    return BenchmarkConfig(
        host=args.host,
        port=args.port,
        operation=args.type,
        requests=args.requests,
        pool_size=args.pool_size,
        concurrency=args.clients,
        key=args.key,
        use_tls=args.tls,
        cluster_mode=args.cluster,
        redistribute_remainder=args.redistribute_remainder,
        histogram_ceiling_ms=args.ceiling,
        output_format='csv' if args.csv else 'text',
        quiet=args.quiet,
    ).validate()


async def run_benchmark(config: BenchmarkConfig) -> RunSummary:
    """
    Open the pool, run every worker and close the pool again.

    Args:
        config (BenchmarkConfig): Validated run configuration

    Returns:
        RunSummary: Result of the completed run
    """
    if not config.quiet and config.output_format == 'text':
        print(f"Host: {config.host}:{config.port} | Command: {config.operation} | "
              f"Requests: {config.requests} | Clients: {config.concurrency} | "
              f"Pool: {config.pool_size} | Key: {config.key}", file=sys.stderr)

    pool = ClientPool(config)
    async with pool:
        return await Dispatcher(config, pool).execute()


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point. Returns the process exit status."""
    args = parse_arguments(argv)
    try:
        config = build_config(args)
        summary = asyncio.run(run_benchmark(config))
    except BenchmarkError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_report(summary, config.output_format, config.quiet)
    return 0


if __name__ == '__main__':
    sys.exit(main())

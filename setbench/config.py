"""
Benchmark configuration.

The command line builds one BenchmarkConfig and hands it to the client pool,
the dispatcher and every worker. Nothing reads option values from anywhere
else.
"""

from dataclasses import dataclass

from .errors import ConfigError

OP_SADD = 'sadd'
OP_SREM = 'srem'
OP_SISMEMBER = 'sismember'
OP_ZADD = 'zadd'
OP_ZREM = 'zrem'
OP_ZRANK = 'zrank'
OP_ZSCORE = 'zscore'

SET_OPERATIONS = (OP_SADD, OP_SREM, OP_SISMEMBER)
ZSET_OPERATIONS = (OP_ZADD, OP_ZREM, OP_ZRANK, OP_ZSCORE)
OPERATIONS = SET_OPERATIONS + ZSET_OPERATIONS

OUTPUT_FORMATS = ('text', 'csv')

DEFAULT_CEILING_MS = 2000


@dataclass(frozen=True)
class BenchmarkConfig:
    """
    Immutable settings for one benchmark run.

    Attributes:
        host (str): Server hostname
        port (int): Server port
        operation (str): Operation kind, one of OPERATIONS
        requests (int): Total number of requests across all workers
        pool_size (int): Number of clients opened up front
        concurrency (int): Number of concurrent workers
        key (str): Set/zset key, also the member prefix
        use_tls (bool): Connect with TLS
        cluster_mode (bool): Use the cluster client
        redistribute_remainder (bool): Give requests % concurrency to the
            last worker instead of dropping them
        histogram_ceiling_ms (int): First latency counted as overflow
        output_format (str): 'text' or 'csv'
        quiet (bool): Only print the throughput line
    """

    host: str = '127.0.0.1'
    port: int = 6379
    operation: str = OP_ZADD
    requests: int = 200000
    pool_size: int = 20
    concurrency: int = 20
    key: str = 'pikatest'
    use_tls: bool = False
    cluster_mode: bool = False
    redistribute_remainder: bool = False
    histogram_ceiling_ms: int = DEFAULT_CEILING_MS
    output_format: str = 'text'
    quiet: bool = False

    def validate(self) -> 'BenchmarkConfig':
        """
        Check value ranges.

        Returns:
            BenchmarkConfig: self, so calls can be chained

        Raises:
            ConfigError: If a field is out of range
        """
        if self.requests < 0:
            raise ConfigError('requests', 'must be zero or positive')
        if self.concurrency < 1:
            raise ConfigError('concurrency', 'must be at least 1')
        if self.pool_size < 1:
            raise ConfigError('pool_size', 'must be at least 1')
        if not 1 <= self.port <= 65535:
            raise ConfigError('port', f'{self.port} is not a valid TCP port')
        if self.histogram_ceiling_ms < 1:
            raise ConfigError('histogram_ceiling_ms', 'must be at least 1')
        if not self.key:
            raise ConfigError('key', 'must not be empty')
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError('output_format', f'unknown format {self.output_format!r}')
        return self

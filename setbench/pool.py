"""
Client pool backed by Valkey GLIDE.

All clients are created before any worker starts. GLIDE clients multiplex
requests, so a lease is shared round-robin rather than handed out
exclusively; the pool only tracks how many leases are outstanding.
"""

from contextlib import asynccontextmanager
from typing import List

from glide import (
    GlideClient,
    GlideClientConfiguration,
    GlideClusterClient,
    GlideClusterClientConfiguration,
    NodeAddress,
)

from .config import BenchmarkConfig
from .errors import ConnectionSetupError


async def create_client(config: BenchmarkConfig):
    """
    Open one client for the configured server.

    Args:
        config (BenchmarkConfig): Run configuration

    Returns:
        GlideClient or GlideClusterClient
    """
    addresses = [NodeAddress(host=config.host, port=config.port)]

    if config.cluster_mode:
        client_config = GlideClusterClientConfiguration(
            addresses=addresses,
            use_tls=config.use_tls,
        )
        return await GlideClusterClient.create(client_config)

    client_config = GlideClientConfiguration(
        addresses=addresses,
        use_tls=config.use_tls,
    )
    return await GlideClient.create(client_config)


class ClientPool:
    """
    Fixed set of clients leased to workers.

    Attributes:
        config (BenchmarkConfig): Run configuration
        clients (List): Open clients, empty until open() succeeds
        outstanding (int): Leases not yet returned
    """

    def __init__(self, config: BenchmarkConfig, factory=create_client):
        self.config = config
        self.clients: List = []
        self.outstanding = 0
        self._factory = factory
        self._next = 0

    async def open(self):
        """
        Create pool_size clients.

        Raises:
            ConnectionSetupError: If any client cannot be created; clients
                opened before the failure are closed again
        """
        try:
            for _ in range(self.config.pool_size):
                self.clients.append(await self._factory(self.config))
        except Exception as e:
            await self.close()
            raise ConnectionSetupError(
                f"cannot connect to {self.config.host}:{self.config.port}: {e}"
            ) from e

    @asynccontextmanager
    async def lease(self):
        if not self.clients:
            raise ConnectionSetupError("pool is not open")
        client = self.clients[self._next % len(self.clients)]
        self._next += 1
        self.outstanding += 1
        try:
            yield client
        finally:
            self.outstanding -= 1

    async def close(self):
        clients, self.clients = self.clients, []
        for client in clients:
            await client.close()

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

import asyncio

import matplotlib

matplotlib.use("Agg")

import pytest

from setbench.config import BenchmarkConfig


class FakeClock:
    """Monotonic nanosecond clock that only moves when told to."""

    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now

    def advance_ms(self, ms):
        self.now += int(ms * 1_000_000)


class FakeClient:
    """
    Stands in for a GLIDE client.

    Each call takes `latency_ms` on the fake clock. With `yield_control` set,
    every call suspends once so other workers can run in between.
    """

    def __init__(self, clock=None, latency_ms=0, fail_at=None, yield_control=False):
        self.clock = clock
        self.latency_ms = latency_ms
        self.fail_at = fail_at
        self.yield_control = yield_control
        self.calls = []
        self.closed = False
        self.active = 0
        self.peak = 0

    async def _call(self, method, *args):
        if self.fail_at is not None and len(self.calls) == self.fail_at:
            raise RuntimeError("ERR simulated failure")
        self.calls.append((method,) + args)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            if self.yield_control:
                await asyncio.sleep(0)
            if self.clock is not None:
                self.clock.advance_ms(self.latency_ms)
        finally:
            self.active -= 1
        return 1

    async def sadd(self, key, members):
        return await self._call("sadd", key, members)

    async def srem(self, key, members):
        return await self._call("srem", key, members)

    async def sismember(self, key, member):
        return await self._call("sismember", key, member)

    async def zadd(self, key, members_scores):
        return await self._call("zadd", key, members_scores)

    async def zrem(self, key, members):
        return await self._call("zrem", key, members)

    async def zrank(self, key, member):
        return await self._call("zrank", key, member)

    async def zscore(self, key, member):
        return await self._call("zscore", key, member)

    def members(self):
        """Member names touched, in call order."""
        found = []
        for _method, _key, arg in self.calls:
            if isinstance(arg, (dict, list)):
                found.extend(arg)
            else:
                found.append(arg)
        return found

    async def close(self):
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_config():
    def _make(**overrides):
        fields = dict(requests=10, concurrency=2, pool_size=2, operation="sadd", key="k")
        fields.update(overrides)
        return BenchmarkConfig(**fields)
    return _make

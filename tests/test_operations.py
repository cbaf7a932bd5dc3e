import asyncio

from conftest import FakeClient
from setbench.operations import execute, member_name, operation_call


def test_member_name():
    assert member_name("pikatest", 12) == "pikatest12"


def test_set_operations():
    assert operation_call("sadd", "k", 3) == ("sadd", ("k", ["k3"]))
    assert operation_call("srem", "k", 3) == ("srem", ("k", ["k3"]))
    assert operation_call("sismember", "k", 3) == ("sismember", ("k", "k3"))


def test_zadd_uses_index_as_score():
    assert operation_call("zadd", "k", 7) == ("zadd", ("k", {"k7": 7.0}))


def test_zset_member_operations():
    assert operation_call("zrem", "k", 0) == ("zrem", ("k", ["k0"]))
    assert operation_call("zrank", "k", 0) == ("zrank", ("k", "k0"))
    assert operation_call("zscore", "k", 0) == ("zscore", ("k", "k0"))


def test_unknown_operation_has_no_call():
    assert operation_call("hset", "k", 0) is None


def test_execute_calls_typed_method():
    client = FakeClient()
    asyncio.run(execute(client, operation_call("zadd", "pk", 2)))
    assert client.calls == [("zadd", "pk", {"pk2": 2.0})]

"""
Mapping from operation kind to the client call made for one logical request.

Member names are the key followed by the request index, so a run with key
'pikatest' touches members 'pikatest0', 'pikatest1', ... Run zadd before
zrank/zscore/zrem, otherwise those read an empty zset.
"""

from typing import Any, Optional, Tuple

from .config import (
    OP_SADD, OP_SISMEMBER, OP_SREM,
    OP_ZADD, OP_ZRANK, OP_ZREM, OP_ZSCORE,
)

Call = Tuple[str, Tuple[Any, ...]]


def member_name(key: str, index: int) -> str:
    return f"{key}{index}"


def operation_call(operation: str, key: str, index: int) -> Optional[Call]:
    """
    Build the client call for request `index`.

    Args:
        operation (str): Operation kind, e.g. 'sadd'
        key (str): Set/zset key and member prefix
        index (int): Logical request index

    Returns:
        Optional[Call]: (client method name, positional args), or None when
            the operation kind is not one we know how to send
    """
    member = member_name(key, index)
    if operation in (OP_SADD, OP_SREM, OP_ZREM):
        return operation, (key, [member])
    if operation in (OP_SISMEMBER, OP_ZRANK, OP_ZSCORE):
        return operation, (key, member)
    if operation == OP_ZADD:
        # score is the request index
        return operation, (key, {member: float(index)})
    return None


async def execute(client, call: Call):
    """Await one typed GLIDE call, e.g. client.zadd(key, {member: score})."""
    method, args = call
    return await getattr(client, method)(*args)

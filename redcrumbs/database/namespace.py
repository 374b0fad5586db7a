"""
Key-namespacing proxy around a redis-py client.

Every key sent through a Namespace is stored as "<namespace>:<key>", so several
applications can share one Redis database without colliding. Only commands
listed below are available; anything else raises AttributeError rather than
reaching Redis with an unprefixed key.
"""
from typing import Any, Iterable, Iterator, Mapping

# Commands whose first positional argument is a key
SINGLE_KEY_COMMANDS = frozenset({
    "get", "set", "setex", "psetex", "setnx", "getset", "getdel", "getex",
    "append", "strlen", "setrange", "getrange", "setbit", "getbit",
    "bitcount", "bitpos",
    "incr", "incrby", "incrbyfloat", "decr", "decrby",
    "expire", "expireat", "pexpire", "pexpireat", "persist", "ttl", "pttl",
    "type", "dump", "restore",
    "hget", "hset", "hsetnx", "hmget", "hgetall", "hdel", "hexists",
    "hincrby", "hincrbyfloat", "hkeys", "hvals", "hlen", "hstrlen", "hscan",
    "hscan_iter",
    "lpush", "rpush", "lpushx", "rpushx", "lpop", "rpop", "llen", "lrange",
    "lindex", "lset", "lrem", "ltrim", "linsert", "lpos",
    "sadd", "srem", "smembers", "smismember", "sismember", "scard", "spop",
    "srandmember", "sscan", "sscan_iter",
    "zadd", "zrem", "zrange", "zrevrange", "zrangebyscore",
    "zrevrangebyscore", "zrangebylex", "zrevrangebylex", "zlexcount",
    "zcard", "zcount", "zscore", "zmscore", "zincrby", "zrank", "zrevrank",
    "zpopmin", "zpopmax", "zrandmember", "zremrangebyrank",
    "zremrangebyscore", "zremrangebylex", "zscan", "zscan_iter",
    "pfadd",
    "xadd", "xrange", "xrevrange", "xlen", "xtrim", "xdel",
})

# Commands taking any number of keys as positional arguments (or a list)
MULTI_KEY_COMMANDS = frozenset({
    "delete", "exists", "unlink", "touch", "watch",
    "sinter", "sunion", "sdiff", "pfcount",
})

# Commands and attributes that involve no key
PASSTHROUGH_COMMANDS = frozenset({
    "ping", "echo", "info", "time", "dbsize", "lastsave",
    "flushdb", "flushall", "close", "unwatch",
    "connection_pool", "get_connection_kwargs",
})


def _flatten(keys: Iterable[Any]) -> Iterator[Any]:
    for key in keys:
        if isinstance(key, (list, tuple)):
            yield from key
        else:
            yield key


class Namespace:
    """
    Wraps a Redis client and prefixes every key with a namespace.

    Commands that take no key (ping, info, flushdb, close, ...) are passed
    straight through to the wrapped client.
    """

    def __init__(self, namespace: str, redis: Any):
        self.namespace = namespace
        self.redis = redis

    @property
    def prefix(self) -> str:
        return f"{self.namespace}:"

    def full_key(self, key: Any) -> Any:
        """Return the key as stored in Redis."""
        if isinstance(key, bytes):
            return self.prefix.encode() + key
        return f"{self.prefix}{key}"

    def strip_key(self, key: Any) -> Any:
        """Inverse of full_key for keys read back from Redis."""
        if isinstance(key, bytes):
            prefix = self.prefix.encode()
        else:
            prefix = self.prefix
        if key.startswith(prefix):
            return key[len(prefix):]
        return key

    def keys(self, pattern: str = "*") -> list[Any]:
        return [self.strip_key(key) for key in self.redis.keys(self.full_key(pattern))]

    def scan_iter(self, match: str = "*", count: int | None = None, **kwargs) -> Iterator[Any]:
        for key in self.redis.scan_iter(match=self.full_key(match), count=count, **kwargs):
            yield self.strip_key(key)

    def mget(self, keys: Any, *args: Any) -> list[Any]:
        if isinstance(keys, (str, bytes)):
            keys = [keys]
        names = [self.full_key(key) for key in [*keys, *args]]
        return self.redis.mget(names)

    def mset(self, mapping: Mapping[Any, Any]) -> Any:
        return self.redis.mset({self.full_key(key): value for key, value in mapping.items()})

    def rename(self, src: Any, dst: Any) -> Any:
        return self.redis.rename(self.full_key(src), self.full_key(dst))

    def smove(self, src: Any, dst: Any, value: Any) -> Any:
        return self.redis.smove(self.full_key(src), self.full_key(dst), value)

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes the proxy itself lacks
        if name.startswith("__") or name in ("namespace", "redis"):
            raise AttributeError(name)

        if name in SINGLE_KEY_COMMANDS:
            command = getattr(self.redis, name)

            def single_key_command(key, *args, **kwargs):
                return command(self.full_key(key), *args, **kwargs)
            return single_key_command

        if name in MULTI_KEY_COMMANDS:
            command = getattr(self.redis, name)

            def multi_key_command(*keys, **kwargs):
                return command(*(self.full_key(key) for key in _flatten(keys)), **kwargs)
            return multi_key_command

        if name in PASSTHROUGH_COMMANDS:
            return getattr(self.redis, name)

        raise AttributeError(
            f"{name!r} is not supported through Namespace({self.namespace!r}); "
            f"use .redis with full_key() for raw access"
        )

    def __repr__(self) -> str:
        return f"Namespace({self.namespace!r}, {self.redis!r})"

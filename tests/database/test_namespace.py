"""
Tests for the key-namespacing proxy.
"""

import pytest

from redcrumbs.database.namespace import Namespace


class TestKeyPrefixing:
    """Keys written through the proxy carry the namespace."""

    def test_set_and_get(self, mock_redis):
        connection = Namespace("redcrumbs", mock_redis)

        connection.set("crumbs:1", "payload")

        assert mock_redis.get("redcrumbs:crumbs:1") == "payload"
        assert connection.get("crumbs:1") == "payload"

    def test_hash_commands(self, mock_redis):
        connection = Namespace("app", mock_redis)

        connection.hset("crumbs:1", mapping={"creator_id": "42"})

        assert mock_redis.hgetall("app:crumbs:1") == {"creator_id": "42"}
        assert connection.hget("crumbs:1", "creator_id") == "42"

    def test_multi_key_commands(self, mock_redis):
        connection = Namespace("app", mock_redis)
        connection.set("a", "1")
        connection.set("b", "2")

        assert connection.exists("a", "b") == 2
        assert connection.delete("a", "b") == 2
        assert mock_redis.exists("app:a", "app:b") == 0

    def test_mget_and_mset(self, mock_redis):
        connection = Namespace("app", mock_redis)

        connection.mset({"a": "1", "b": "2"})

        assert connection.mget(["a", "b"]) == ["1", "2"]
        assert connection.mget("a", "b") == ["1", "2"]
        assert mock_redis.get("app:a") == "1"

    def test_expire_and_ttl(self, mock_redis):
        connection = Namespace("app", mock_redis)
        connection.set("crumbs:1", "payload")

        connection.expire("crumbs:1", 60)

        assert 0 < mock_redis.ttl("app:crumbs:1") <= 60
        assert 0 < connection.ttl("crumbs:1") <= 60


class TestKeyListing:
    """Listing keys stays inside the namespace."""

    def test_keys_strips_prefix(self, mock_redis):
        connection = Namespace("app", mock_redis)
        connection.set("crumbs:1", "x")
        connection.set("crumbs:2", "x")
        mock_redis.set("other:crumbs:3", "x")

        assert sorted(connection.keys("crumbs:*")) == ["crumbs:1", "crumbs:2"]

    def test_scan_iter_strips_prefix(self, mock_redis):
        connection = Namespace("app", mock_redis)
        connection.set("crumbs:1", "x")
        mock_redis.set("crumbs:2", "x")

        assert list(connection.scan_iter("crumbs:*")) == ["crumbs:1"]


class TestPassThrough:
    """Commands without keys go straight to the client."""

    def test_ping(self, mock_redis):
        connection = Namespace("app", mock_redis)

        assert connection.ping() is True

    def test_full_and_strip_key(self, mock_redis):
        connection = Namespace("app", mock_redis)

        assert connection.full_key("crumbs") == "app:crumbs"
        assert connection.full_key(b"crumbs") == b"app:crumbs"
        assert connection.strip_key("app:crumbs") == "crumbs"
        assert connection.strip_key(b"app:crumbs") == b"crumbs"
        assert connection.strip_key("other:crumbs") == "other:crumbs"


class TestCommandCoverage:
    """Less common key commands are prefixed too; unknown ones are refused."""

    def test_setrange_stays_in_namespace(self, mock_redis):
        connection = Namespace("app", mock_redis)
        connection.set("counter", "1")

        connection.setrange("counter", 0, "9")

        assert mock_redis.get("app:counter") == "9"
        assert mock_redis.exists("counter") == 0

    def test_zpopmin_reads_namespaced_key(self, mock_redis):
        connection = Namespace("app", mock_redis)
        connection.zadd("z", {"a": 1, "b": 2})

        assert connection.zpopmin("z") == [("a", 1.0)]
        assert mock_redis.zcard("app:z") == 1

    def test_smove_prefixes_both_keys(self, mock_redis):
        connection = Namespace("app", mock_redis)
        connection.sadd("src", "x")

        connection.smove("src", "dst", "x")

        assert mock_redis.smembers("app:dst") == {"x"}
        assert mock_redis.exists("dst") == 0

    def test_multi_key_command_accepts_list(self, mock_redis):
        connection = Namespace("app", mock_redis)
        connection.sadd("a", "1", "2")
        connection.sadd("b", "2", "3")

        assert connection.sinter(["a", "b"]) == {"2"}

    def test_unlisted_command_is_refused(self, mock_redis):
        connection = Namespace("app", mock_redis)

        with pytest.raises(AttributeError, match="zrangestore"):
            connection.zrangestore("dst", "src", 0, -1)

        assert hasattr(connection, "zrangestore") is False
        assert mock_redis.keys("*") == []

    def test_raw_client_remains_reachable(self, mock_redis):
        connection = Namespace("app", mock_redis)

        connection.redis.set(connection.full_key("raw"), "1")

        assert connection.get("raw") == "1"

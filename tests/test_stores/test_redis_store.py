"""Tests for RedisListStore against a mocked redis client."""

from unittest.mock import MagicMock, call

import pytest
import redis

from multilist import ListContext, NestedList, StoreError, configure_store, current_store
from multilist.stores.redis_store import RedisListStore


@pytest.fixture
def client():
    return MagicMock(spec=redis.Redis)


@pytest.fixture
def rstore(client):
    return RedisListStore(client)


def test_length(rstore, client):
    client.llen.return_value = 3
    assert rstore.length("k") == 3
    client.llen.assert_called_once_with("k")


def test_range_decodes_bytes(rstore, client):
    client.lrange.return_value = [b"a", "b", "caf\xc3\xa9".encode("latin-1")]
    assert rstore.range("k", 0, -1) == ["a", "b", "café"]
    client.lrange.assert_called_once_with("k", 0, -1)


def test_index_get(rstore, client):
    client.lindex.return_value = b"v"
    assert rstore.index_get("k", 2) == "v"
    client.lindex.return_value = None
    assert rstore.index_get("k", 9) is None


def test_index_set(rstore, client):
    rstore.index_set("k", 1, "v")
    client.lset.assert_called_once_with("k", 1, "v")


def test_index_set_out_of_range(rstore, client):
    client.lset.side_effect = redis.ResponseError("ERR index out of range")
    with pytest.raises(StoreError) as exc_info:
        rstore.index_set("k", 5, "v")
    assert exc_info.value.operation == "index_set"
    assert isinstance(exc_info.value.__cause__, redis.ResponseError)


def test_push_right(rstore, client):
    client.rpush.return_value = 3
    assert rstore.push_right("k", "", "", "v") == 3
    client.rpush.assert_called_once_with("k", "", "", "v")


def test_push_nothing_does_not_call_rpush(rstore, client):
    client.llen.return_value = 0
    assert rstore.push_right("k") == 0
    client.rpush.assert_not_called()


def test_trim_last(rstore, client):
    rstore.trim_last("k")
    client.ltrim.assert_called_once_with("k", 0, -2)


def test_remove_matching(rstore, client):
    client.lrem.return_value = 2
    assert rstore.remove_matching("k", "dup") == 2
    client.lrem.assert_called_once_with("k", 0, "dup")


def test_delete_and_exists(rstore, client):
    client.delete.return_value = 1
    client.exists.return_value = 0
    assert rstore.delete("k") == 1
    assert rstore.exists("k") is False
    client.delete.assert_called_once_with("k")


def test_list_keys_escapes_glob_characters(rstore, client):
    client.scan_iter.return_value = iter([b"a*b:x"])
    assert rstore.list_keys("a*b:") == ["a*b:x"]
    client.scan_iter.assert_called_once_with(match="a\\*b:*")


def test_connection_errors_become_store_errors(rstore, client):
    client.llen.side_effect = redis.ConnectionError("refused")
    with pytest.raises(StoreError, match="refused"):
        rstore.length("k")


def test_batch_uses_transactional_pipeline(rstore, client):
    pipe = MagicMock()
    client.pipeline.return_value.__enter__.return_value = pipe

    with rstore.atomic_batch() as batch:
        batch.delete("k")
        batch.push_right("k", "a", "b")

    client.pipeline.assert_called_once_with(transaction=True)
    assert pipe.mock_calls == [
        call.delete("k"),
        call.rpush("k", "a", "b"),
        call.execute(),
    ]


def test_batch_errors_become_store_errors(rstore, client):
    pipe = MagicMock()
    pipe.execute.side_effect = redis.WatchError("aborted")
    client.pipeline.return_value.__enter__.return_value = pipe

    with pytest.raises(StoreError) as exc_info:
        with rstore.atomic_batch() as batch:
            batch.delete("k")
    assert exc_info.value.operation == "execute_batch"


def test_close(rstore, client):
    rstore.close()
    client.close.assert_called_once_with()


def test_configure_store_wraps_raw_client(client):
    configure_store(client)
    store = current_store()
    assert isinstance(store, RedisListStore)
    assert store.client is client


def test_nested_list_writes_reference_token(rstore, client):
    client.rpush.return_value = 1
    outer = NestedList("outer", context=ListContext(store=rstore, namespace="ns"))
    outer.push(NestedList("s1"))
    client.rpush.assert_called_once_with("ns:outer", "ns:~>s1")


def test_remove_at_rebuilds_in_pipeline(rstore, client):
    client.lrange.return_value = [b"a", b"b", b"c"]
    pipe = MagicMock()
    client.pipeline.return_value.__enter__.return_value = pipe

    NestedList("k", context=ListContext(store=rstore, namespace="ns")).remove_at(1)

    client.lrange.assert_called_once_with("ns:k", 0, -1)
    assert pipe.mock_calls == [call.delete("ns:k"), call.rpush("ns:k", "a", "c"), call.execute()]

import pytest

from governance.service.sparse_collection_walker import SparseCollectionWalker, scan_ids, walk_with_placeholders


def _array(items):
    calls = []

    async def read_at(index):
        calls.append(index)
        if index >= len(items):
            raise ValueError("execution reverted")
        return items[index]

    return read_at, calls


@pytest.mark.asyncio
@pytest.mark.parametrize("size", [0, 1, 2, 5])
async def test_walk_returns_exactly_the_stored_items(size):
    items = [100 + i for i in range(size)]
    read_at, calls = _array(items)

    assert await SparseCollectionWalker(read_at).walk() == items
    assert calls == list(range(size + 1))


@pytest.mark.asyncio
async def test_walk_restarts_from_zero():
    read_at, calls = _array(["a", "b"])
    walker = SparseCollectionWalker(read_at)

    assert await walker.walk() == ["a", "b"]
    assert await walker.walk() == ["a", "b"]
    assert calls == [0, 1, 2, 0, 1, 2]


@pytest.mark.asyncio
async def test_transient_failure_truncates():
    async def read_at(index):
        if index == 2:
            raise ConnectionError("reset by peer")
        if index > 4:
            raise ValueError("execution reverted")
        return index

    assert await SparseCollectionWalker(read_at).walk() == [0, 1]


@pytest.mark.asyncio
async def test_limit_stops_the_walk():
    async def read_at(index):
        return index

    assert await SparseCollectionWalker(read_at, limit=3).walk() == [0, 1, 2]


@pytest.mark.asyncio
async def test_placeholders_keep_one_record_per_key():
    keys = ["w1", "w2", "w3", "w4", "w5"]

    async def read_one(key):
        if key == "w3":
            raise ValueError("call reverted")
        return {"key": key, "amount": 10}

    records = await walk_with_placeholders(keys, read_one, lambda key: {"key": key, "amount": 0}, label="wallet")

    assert len(records) == 5
    assert [r["key"] for r in records] == keys
    assert records[2] == {"key": "w3", "amount": 0}


@pytest.mark.asyncio
async def test_scan_tolerates_gaps_until_consecutive_misses():
    # 3 was deleted, 5 fails to read, nothing exists past 6
    slots = {1: "a", 2: "b", 3: None, 4: "d", 6: "f"}
    calls = []

    async def read_at(pool_id):
        calls.append(pool_id)
        if pool_id == 5:
            raise ConnectionError("reset by peer")
        return slots.get(pool_id)

    found = await scan_ids(read_at, lambda record: record is not None, start=1, max_consecutive_misses=3)

    assert found == [(1, "a"), (2, "b"), (4, "d"), (6, "f")]
    assert calls == [1, 2, 3, 4, 5, 6, 7, 8, 9]


@pytest.mark.asyncio
async def test_scan_of_empty_mapping_stops_after_misses():
    async def read_at(pool_id):
        return None

    assert await scan_ids(read_at, lambda record: record is not None, max_consecutive_misses=3) == []

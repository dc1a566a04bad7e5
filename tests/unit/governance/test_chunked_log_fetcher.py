import pytest
from unittest.mock import AsyncMock, patch

from abi.governance_abi import PROPOSAL_CREATED_EVENT
from governance.service.chunked_log_fetcher import ChunkedLogFetcher
from tests.unit.governance.fakes import CONTRACT, make_log

EVENT = PROPOSAL_CREATED_EVENT["name"]


def _seed(access_port, blocks):
    access_port.logs[EVENT] = [make_log(EVENT, block, log_index=i) for i, block in enumerate(blocks)]


@pytest.mark.asyncio
async def test_full_range_is_tried_first(access_port):
    _seed(access_port, [3, 17, 40])
    fetcher = ChunkedLogFetcher(access_port, chunk_delay_seconds=0)

    logs = await fetcher.fetch_logs(CONTRACT, PROPOSAL_CREATED_EVENT)

    assert [log.block_number for log in logs] == [3, 17, 40]
    assert access_port.get_logs_calls == [(EVENT, 0, 100)]


@pytest.mark.asyncio
async def test_chunked_fallback_returns_same_events_as_unrestricted_provider(access_port):
    _seed(access_port, [0, 8, 9, 10, 55, 99, 100])
    fetcher = ChunkedLogFetcher(access_port, chunk_delay_seconds=0)
    unrestricted = await fetcher.fetch_logs(CONTRACT, PROPOSAL_CREATED_EVENT)

    access_port.max_block_range = 10
    access_port.get_logs_calls.clear()
    chunked = await fetcher.fetch_logs(CONTRACT, PROPOSAL_CREATED_EVENT)

    assert chunked == unrestricted
    windows = access_port.get_logs_calls[1:]
    assert windows[0] == (EVENT, 0, 8)
    assert windows[-1] == (EVENT, 99, 100)
    assert all(end - start + 1 <= 9 for _, start, end in windows)
    # Windows are contiguous and non-overlapping
    for (_, _, prev_end), (_, next_start, _) in zip(windows, windows[1:]):
        assert next_start == prev_end + 1


@pytest.mark.asyncio
async def test_failed_chunk_is_skipped(access_port):
    _seed(access_port, [2, 12, 20])
    access_port.max_block_range = 10
    access_port.failing_ranges.add((9, 17))
    fetcher = ChunkedLogFetcher(access_port, chunk_delay_seconds=0)

    logs = await fetcher.fetch_logs(CONTRACT, PROPOSAL_CREATED_EVENT, 0, 26)

    assert [log.block_number for log in logs] == [2, 20]


@pytest.mark.asyncio
async def test_non_range_error_is_not_chunked(access_port):
    access_port.failing_ranges.add((0, 100))
    fetcher = ChunkedLogFetcher(access_port, chunk_delay_seconds=0)

    with pytest.raises(ValueError, match="upstream timeout"):
        await fetcher.fetch_logs(CONTRACT, PROPOSAL_CREATED_EVENT)
    assert len(access_port.get_logs_calls) == 1


@pytest.mark.asyncio
async def test_pause_between_chunks(access_port):
    access_port.max_block_range = 5
    fetcher = ChunkedLogFetcher(access_port, chunk_size=50, chunk_delay_seconds=0.15)
    assert fetcher.chunk_size == 9

    with patch("governance.service.chunked_log_fetcher.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        await fetcher.fetch_logs(CONTRACT, PROPOSAL_CREATED_EVENT, 0, 26)

    # 3 windows of 9 blocks, a pause between each pair
    assert mock_sleep.await_count == 2
    mock_sleep.assert_awaited_with(0.15)

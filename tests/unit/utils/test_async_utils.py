import pytest
from unittest.mock import AsyncMock, patch

from utils.async_utils import async_retry


@pytest.mark.asyncio
async def test_retries_transport_errors_then_succeeds():
    func = AsyncMock(side_effect=[ConnectionError("reset"), ConnectionError("reset"), "ok"])
    func.__name__ = "read"

    with patch("utils.async_utils.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        result = await async_retry(max_retries=3, initial_delay=0.5)(func)()

    assert result == "ok"
    assert func.await_count == 3
    assert [call.args[0] for call in mock_sleep.await_args_list] == [0.5, 1.0]


@pytest.mark.asyncio
async def test_gives_up_after_max_retries():
    func = AsyncMock(side_effect=ConnectionError("down"))
    func.__name__ = "read"

    with patch("utils.async_utils.asyncio.sleep", new_callable=AsyncMock):
        with pytest.raises(ConnectionError):
            await async_retry(max_retries=2)(func)()

    assert func.await_count == 3


@pytest.mark.asyncio
async def test_contract_errors_are_not_retried():
    func = AsyncMock(side_effect=ValueError("execution reverted"))
    func.__name__ = "read"

    with pytest.raises(ValueError):
        await async_retry(max_retries=3)(func)()

    assert func.await_count == 1

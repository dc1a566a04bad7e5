import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from web3 import AsyncHTTPProvider

from governance.providers.failover_provider import FailoverAsyncHTTPProvider
from governance.providers.provider_factory import get_failover_async_provider_from_uris

URIS = ["http://node-a:8545", "ws://node-b:8546", "https://node-c"]


@pytest.fixture
def mock_http_providers():
    with patch("governance.providers.failover_provider.AsyncHTTPProvider") as MockProvider:
        instances = [MagicMock(), MagicMock()]
        for instance in instances:
            instance.make_request = AsyncMock()
            instance.disconnect = AsyncMock()
        MockProvider.side_effect = instances
        yield instances


def test_non_http_uris_are_skipped(mock_http_providers):
    provider = FailoverAsyncHTTPProvider(URIS)
    assert provider.current_endpoint == "http://node-a:8545"


def test_no_http_uri_is_an_error():
    with pytest.raises(ValueError):
        FailoverAsyncHTTPProvider(["ws://node-b:8546"])


@pytest.mark.asyncio
async def test_transport_failure_rotates(mock_http_providers):
    first, second = mock_http_providers
    first.make_request.side_effect = ConnectionError("refused")
    second.make_request.return_value = {"jsonrpc": "2.0", "id": 1, "result": "0x10"}
    provider = FailoverAsyncHTTPProvider(URIS)

    response = await provider.make_request("eth_blockNumber", [])

    assert response["result"] == "0x10"
    assert provider.current_endpoint == "https://node-c"


@pytest.mark.asyncio
async def test_all_endpoints_failing(mock_http_providers):
    for instance in mock_http_providers:
        instance.make_request.side_effect = ConnectionError("refused")
    provider = FailoverAsyncHTTPProvider(URIS)

    with pytest.raises(ConnectionError, match="All 2 providers failed"):
        await provider.make_request("eth_blockNumber", [])


@pytest.mark.asyncio
async def test_disconnect_closes_every_endpoint(mock_http_providers):
    await FailoverAsyncHTTPProvider(URIS).disconnect()
    for instance in mock_http_providers:
        instance.disconnect.assert_awaited_once()


def test_single_uri_yields_plain_provider():
    provider = get_failover_async_provider_from_uris(["http://localhost:8545"], timeout=5)
    assert isinstance(provider, AsyncHTTPProvider)

    with pytest.raises(ValueError):
        get_failover_async_provider_from_uris([])

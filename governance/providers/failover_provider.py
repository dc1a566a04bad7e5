from typing import Any, List
from urllib.parse import urlparse

from web3 import AsyncHTTPProvider
from web3.providers.async_base import AsyncBaseProvider
from web3.types import RPCEndpoint, RPCResponse

from utils.logger_utils import get_logger

logger = get_logger("Failover Async HTTP Provider")


class FailoverAsyncHTTPProvider(AsyncBaseProvider):
    """
    Async provider over an ordered list of RPC endpoints.
    Requests go to the current endpoint; a transport failure rotates to the next one.
    JSON-RPC error responses (reverts, block-range rejections) are returned as-is and never rotate.
    """

    def __init__(self, endpoint_uris: List[str], request_kwargs: Any = None):
        super().__init__()
        self._endpoint_uris = []
        self._providers = []

        for uri in endpoint_uris:
            parsed = urlparse(uri)
            if parsed.scheme in ("http", "https"):
                kwargs = dict(request_kwargs) if request_kwargs else {}
                self._endpoint_uris.append(uri)
                self._providers.append(AsyncHTTPProvider(uri, request_kwargs=kwargs))
            else:
                logger.warning(f"FailoverAsyncHTTPProvider only supports http/https. Skipping {uri}")

        if not self._providers:
            raise ValueError("No valid http/https providers found in the provided list.")

        self._current_index = 0

    @property
    def current_endpoint(self) -> str:
        return self._endpoint_uris[self._current_index]

    async def make_request(self, method: RPCEndpoint, params: Any) -> RPCResponse:
        total_providers = len(self._providers)
        attempts = 0

        while attempts < total_providers:
            provider = self._providers[self._current_index]
            try:
                return await provider.make_request(method, params)
            except Exception as e:
                logger.warning(
                    f"Provider {self.current_endpoint} failed on {method}: {e}. Switching to next provider."
                )
                self._current_index = (self._current_index + 1) % total_providers
                attempts += 1

        raise ConnectionError(f"All {total_providers} providers failed to respond to {method}.")

    async def disconnect(self) -> None:
        for provider in self._providers:
            await provider.disconnect()

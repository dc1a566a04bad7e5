# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified by: governance-admin maintainers
# Change Description: Async-only providers for the governance access port; aiohttp timeouts.

from typing import List
from urllib.parse import urlparse

import aiohttp
from web3 import AsyncHTTPProvider
from web3.providers.async_base import AsyncBaseProvider

from governance.providers.failover_provider import FailoverAsyncHTTPProvider

DEFAULT_TIMEOUT = 60


def _request_kwargs(timeout: int) -> dict:
    return {"timeout": aiohttp.ClientTimeout(total=timeout)}


def get_async_provider_from_uri(uri_string: str, timeout: int = DEFAULT_TIMEOUT) -> AsyncBaseProvider:
    """
    Creates an asynchronous Web3 provider based on the URI scheme.
    """
    uri = urlparse(uri_string)

    if uri.scheme == "http" or uri.scheme == "https":
        return AsyncHTTPProvider(uri_string, request_kwargs=_request_kwargs(timeout))
    else:
        raise ValueError(f"Unknown uri scheme {uri_string}. Supported: http, https")


def get_failover_async_provider_from_uris(uri_strings: List[str], timeout: int = DEFAULT_TIMEOUT) -> AsyncBaseProvider:
    """
    A single URI yields a plain AsyncHTTPProvider; several yield a FailoverAsyncHTTPProvider
    that tries them in the given order.
    """
    if not uri_strings:
        raise ValueError("uri_strings list cannot be empty")

    if len(uri_strings) == 1:
        return get_async_provider_from_uri(uri_strings[0], timeout)

    return FailoverAsyncHTTPProvider(uri_strings, request_kwargs=_request_kwargs(timeout))

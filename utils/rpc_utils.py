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
# Modified By: governance-admin maintainers
# Change Description: Classifies provider errors (block range rejections) for the governance log fetcher.

import ast
import re
from typing import Optional, Tuple

JSON_RPC_INVALID_REQUEST = -32600
JSON_RPC_LIMIT_EXCEEDED = -32005

BLOCK_RANGE_ERROR_CODES = frozenset({JSON_RPC_INVALID_REQUEST, JSON_RPC_LIMIT_EXCEEDED})

BLOCK_RANGE_ERROR_PATTERN = re.compile(
    r"block range|Under the Free tier plan|range (?:is )?too (?:large|wide)|"
    r"exceed(?:s|ed)? (?:max(?:imum)? )?(?:block )?range|query returned more than",
    re.IGNORECASE,
)


def extract_rpc_error(error: BaseException) -> Tuple[Optional[int], str]:
    """
    Pulls (code, message) out of whatever the provider stack raised.
    web3.py puts the JSON-RPC error object either in `rpc_response`, in args[0] as a dict,
    or only in the string form of the exception.
    """
    code: Optional[int] = getattr(error, "code", None) if isinstance(getattr(error, "code", None), int) else None
    parts = [str(error)]

    rpc_response = getattr(error, "rpc_response", None)
    if isinstance(rpc_response, dict):
        rpc_error = rpc_response.get("error") or {}
        if isinstance(rpc_error, dict):
            code = rpc_error.get("code", code)
            parts.append(str(rpc_error.get("message", "")))
            parts.append(str(rpc_error.get("data", "")))

    for arg in getattr(error, "args", ()):
        payload = arg
        if isinstance(arg, str) and arg.startswith("{"):
            try:
                payload = ast.literal_eval(arg)
            except (ValueError, SyntaxError):
                payload = arg
        if isinstance(payload, dict):
            if isinstance(payload.get("code"), int):
                code = payload["code"]
            parts.append(str(payload.get("message", "")))
            parts.append(str(payload.get("details", "")))

    details = getattr(error, "details", None)
    if details:
        parts.append(str(details))

    return code, " ".join(p for p in parts if p)


def is_block_range_error(error: BaseException) -> bool:
    code, message = extract_rpc_error(error)
    if code in BLOCK_RANGE_ERROR_CODES:
        return True
    return bool(BLOCK_RANGE_ERROR_PATTERN.search(message))

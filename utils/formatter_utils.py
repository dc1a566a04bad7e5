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
# Change Description: bytes32/token-amount helpers for governance reads and writes.

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from eth_utils import to_checksum_address
from hexbytes import HexBytes
from web3 import Web3

from utils.exceptions import InvalidAmountError, ValidationError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
ZERO_HASH = "0x" + "00" * 32


def to_normalized_address(address: Optional[str]) -> Optional[str]:
    """
    Checksums an address. Safe-guards against None or invalid types.
    """
    if address is None or not isinstance(address, str):
        return None

    try:
        return to_checksum_address(address)
    except ValueError:
        return address.lower()

def to_bytes32_hex(value: Union[bytes, bytearray, str, None]) -> str:
    """
    Normalizes a bytes32 value (raw bytes from web3 or a hex string) to a lowercase 0x-prefixed hex string.
    """
    if value is None:
        return ZERO_HASH
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).rjust(32, b"\x00")[-32:].hex()
    text = value.lower()
    if not text.startswith("0x"):
        text = "0x" + text
    return "0x" + text[2:].rjust(64, "0")

def string_to_bytes32(text: str) -> bytes:
    encoded = text.encode("utf-8")
    if len(encoded) > 31:
        raise ValidationError(f"'{text}' is too long for a bytes32 string (max 31 bytes)")
    return encoded.ljust(32, b"\x00")

def bytes32_to_string(value: Union[bytes, str, None]) -> str:
    if value is None:
        return ""
    raw = bytes(HexBytes(value))
    return raw.rstrip(b"\x00").decode("utf-8", errors="ignore")

def parse_token_amount(amount: Union[str, int, float, Decimal], decimals: int = 18) -> int:
    """
    Converts a human token amount ("1.5") to base units, the way the dashboard forms do.
    """
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError(f"Invalid token amount: {amount}") from e
    if value < 0:
        raise InvalidAmountError(f"Token amount must not be negative: {amount}")
    if decimals == 18:
        return int(Web3.to_wei(value, "ether"))
    return int(value * (Decimal(10) ** decimals))

def format_token_amount(base_units: Any, decimals: int = 18) -> str:
    try:
        value = int(base_units)
    except (TypeError, ValueError):
        return str(base_units)
    if decimals == 18:
        return str(Web3.from_wei(value, "ether").normalize())
    return str((Decimal(value) / (Decimal(10) ** decimals)).normalize())

def text_to_hex(text: str) -> str:
    """UTF-8 text to 0x hex, used for substrate addresses passed as `bytes`."""
    return "0x" + text.encode("utf-8").hex()

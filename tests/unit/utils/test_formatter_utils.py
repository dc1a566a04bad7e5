import pytest

from utils.exceptions import InvalidAmountError, ValidationError
from utils.formatter_utils import (
    ZERO_HASH,
    bytes32_to_string,
    format_token_amount,
    parse_token_amount,
    string_to_bytes32,
    text_to_hex,
    to_bytes32_hex,
)


def test_bytes32_hex_normalization():
    assert to_bytes32_hex(None) == ZERO_HASH
    assert to_bytes32_hex(b"\x01") == "0x" + "00" * 31 + "01"
    assert to_bytes32_hex("0xAB") == "0x" + "00" * 31 + "ab"


def test_bytes32_text():
    encoded = string_to_bytes32("team")
    assert len(encoded) == 32
    assert bytes32_to_string(encoded) == "team"
    assert bytes32_to_string(None) == ""

    with pytest.raises(ValidationError):
        string_to_bytes32("x" * 32)


@pytest.mark.parametrize("amount, expected", [("1.5", 1_500_000_000_000_000_000), (2, 2 * 10**18), ("0", 0)])
def test_parse_token_amount(amount, expected):
    assert parse_token_amount(amount) == expected


@pytest.mark.parametrize("amount", ["-1", "abc"])
def test_parse_token_amount_rejects_bad_input(amount):
    with pytest.raises(InvalidAmountError):
        parse_token_amount(amount)


def test_format_token_amount():
    assert format_token_amount(1_500_000_000_000_000_000) == "1.5"
    assert format_token_amount(1234, decimals=2) == "12.34"
    assert format_token_amount("n/a") == "n/a"


def test_text_to_hex():
    assert text_to_hex("5G") == "0x3547"

import pytest

from utils.exceptions import InvalidAddressError, InvalidAmountError, InvalidQuorumError
from utils.validation_utils import (
    validate_address,
    validate_batch,
    validate_block_range,
    validate_positive_amount,
    validate_quorum,
)


@pytest.mark.parametrize("quorum, expected", [(1, 1), ("65535", 65535), (" 7 ", 7)])
def test_valid_quorum(quorum, expected):
    assert validate_quorum(quorum) == expected


@pytest.mark.parametrize("quorum", [0, 65536, -3, "", "1.5", None])
def test_invalid_quorum(quorum):
    with pytest.raises(InvalidQuorumError):
        validate_quorum(quorum)


def test_validate_address_returns_checksum():
    lower = "0x5aaeb6053f3e94c9b9a09f33669435e7ef1beaed"
    assert validate_address(lower) == "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"

    with pytest.raises(InvalidAddressError, match="Invalid target address"):
        validate_address("0x123", "target address")


def test_amount_and_batch_limits():
    assert validate_positive_amount(5) == 5
    with pytest.raises(InvalidAmountError, match="Amount must be greater than 0"):
        validate_positive_amount(0)
    with pytest.raises(InvalidAmountError, match="max 2"):
        validate_batch([1, 2, 3], 2)


def test_block_range():
    validate_block_range(5, 5)
    with pytest.raises(ValueError, match="must be greater than or equal to range_start"):
        validate_block_range(6, 5)
    with pytest.raises(ValueError):
        validate_block_range(-1, 5)

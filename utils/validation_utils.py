from typing import Any, Sequence

from eth_utils import is_address, to_checksum_address

from utils.exceptions import InvalidAddressError, InvalidAmountError, InvalidQuorumError

MIN_QUORUM = 1
MAX_QUORUM = 65535  # uint16


def validate_block_range(range_start_incl: int, range_end_incl: int) -> None:
    """
    Validate a block range for log retrieval.

    Raises:
        ValueError: If the block range is invalid.
    """
    validate_block_number(range_start_incl)
    validate_block_number(range_end_incl)

    if range_end_incl < range_start_incl:
        raise ValueError(
            f"range_end ({range_end_incl}) must be greater than or equal to range_start ({range_start_incl})"
        )


def validate_block_number(block_number: int) -> None:
    if block_number < 0:
        raise ValueError(f"Block number must be greater than or equal to 0, got {block_number}")


def validate_quorum(quorum: Any) -> int:
    """
    Quorum is a uint16 on-chain and zero would make every proposal executable,
    so only [1, 65535] is accepted.
    """
    try:
        value = int(str(quorum).strip())
    except (TypeError, ValueError) as e:
        raise InvalidQuorumError(quorum) from e
    if value < MIN_QUORUM or value > MAX_QUORUM:
        raise InvalidQuorumError(value)
    return value


def validate_address(address: Any, label: str = "address") -> str:
    if not isinstance(address, str) or not is_address(address):
        raise InvalidAddressError(address, label)
    return to_checksum_address(address)


def validate_positive_amount(amount: int, label: str = "amount") -> int:
    if amount <= 0:
        raise InvalidAmountError(f"{label.capitalize()} must be greater than 0")
    return amount


def validate_batch(items: Sequence[Any], max_size: int, label: str = "Batch") -> None:
    if len(items) > max_size:
        raise InvalidAmountError(f"{label} too large (max {max_size})")

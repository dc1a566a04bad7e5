from web3 import Web3

from utils.formatter_utils import ZERO_ADDRESS, ZERO_HASH

# --- Role identifiers: keccak256(utf8(name)); DEFAULT_ADMIN_ROLE is bytes32(0) by OpenZeppelin convention ---
KNOWN_ROLE_NAMES = (
    "ADMIN_ROLE",
    "CONTRACT_OPERATOR_ROLE",
    "BRIDGE_OPERATOR_ROLE",
    "POOL_ADMIN_ROLE",
)
DEFAULT_ADMIN_ROLE = "DEFAULT_ADMIN_ROLE"

ROLE_HASHES = {name: Web3.to_hex(Web3.keccak(text=name)) for name in KNOWN_ROLE_NAMES}
ROLE_HASHES[DEFAULT_ADMIN_ROLE] = ZERO_HASH

ROLE_DISPLAY_NAMES = {
    ROLE_HASHES["BRIDGE_OPERATOR_ROLE"]: "Bridge Operator",
    ROLE_HASHES["CONTRACT_OPERATOR_ROLE"]: "Contract Operator",
    ROLE_HASHES["ADMIN_ROLE"]: "Admin",
    ROLE_HASHES["POOL_ADMIN_ROLE"]: "Pool Admin",
    ZERO_HASH: "Default Admin",
}

# Role whose quorum gates proposal execution
GOVERNANCE_ROLE = "ADMIN_ROLE"

# --- Log fetching ---
MAX_LOG_CHUNK_SIZE = 9
DEFAULT_LOG_CHUNK_DELAY_SECONDS = 0.15
LOG_PROGRESS_EVERY = 100

# --- Proposal evaluation ---
# Used when the governance role's quorum could not be read. Not sourced from the contract.
DEFAULT_QUORUM_FALLBACK = 2

# --- Writes ---
EMPTY_INIT_DATA = b""
CANCEL_GAS_PRICE_BUMP_PERCENT = 10
MAX_ADDRESS_BATCH = 1000
MAX_CREATE_POOL_LOCK_AMOUNT = 100_000_000 * 10**18
MAX_INITIAL_RELEASE_PERCENT = 100

# --- Storage pool reads ---
# Pool ids are scanned from 1; deleted pools leave gaps, so a few empty slots are tolerated
POOL_ID_START = 1
POOL_SCAN_MAX_CONSECUTIVE_MISSES = 3
MAX_JOIN_REQUESTS_PER_POOL = 100

SECONDS_PER_DAY = 86400

__all__ = [
    "ZERO_ADDRESS",
    "ZERO_HASH",
    "KNOWN_ROLE_NAMES",
    "DEFAULT_ADMIN_ROLE",
    "ROLE_HASHES",
    "ROLE_DISPLAY_NAMES",
    "GOVERNANCE_ROLE",
    "MAX_LOG_CHUNK_SIZE",
    "DEFAULT_LOG_CHUNK_DELAY_SECONDS",
    "LOG_PROGRESS_EVERY",
    "DEFAULT_QUORUM_FALLBACK",
    "EMPTY_INIT_DATA",
    "CANCEL_GAS_PRICE_BUMP_PERCENT",
    "MAX_ADDRESS_BATCH",
    "MAX_CREATE_POOL_LOCK_AMOUNT",
    "MAX_INITIAL_RELEASE_PERCENT",
    "POOL_ID_START",
    "POOL_SCAN_MAX_CONSECUTIVE_MISSES",
    "MAX_JOIN_REQUESTS_PER_POOL",
    "SECONDS_PER_DAY",
]

from typing import Optional

from constants.governance_constants import ROLE_DISPLAY_NAMES, ROLE_HASHES
from utils.exceptions import UnknownRoleError
from utils.formatter_utils import to_bytes32_hex

_NAMES_BY_HASH = {role_id: name for name, role_id in ROLE_HASHES.items()}


def role_hash(name: str) -> str:
    """
    Maps a known role name to its on-chain bytes32 identifier (0x-prefixed hex).
    Arbitrary strings are rejected rather than hashed: an ad hoc hash matches no real role.
    """
    try:
        return ROLE_HASHES[name]
    except (KeyError, TypeError):
        raise UnknownRoleError(name) from None


def role_name(role_id: str) -> Optional[str]:
    return _NAMES_BY_HASH.get(to_bytes32_hex(role_id))


def display_name(role_id: str) -> str:
    normalized = to_bytes32_hex(role_id)
    return ROLE_DISPLAY_NAMES.get(normalized, normalized)


def resolve_role(role: str) -> str:
    """Accepts a known role name or one of the known role identifiers."""
    if role in ROLE_HASHES:
        return ROLE_HASHES[role]
    if isinstance(role, str) and role.startswith("0x") and len(role) == 66:
        normalized = to_bytes32_hex(role)
        if normalized in _NAMES_BY_HASH:
            return normalized
    raise UnknownRoleError(role)

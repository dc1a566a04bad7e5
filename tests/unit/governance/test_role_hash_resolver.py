import pytest
from web3 import Web3

from constants.governance_constants import KNOWN_ROLE_NAMES, ROLE_HASHES
from governance.service.role_hash_resolver import display_name, resolve_role, role_hash, role_name
from utils.exceptions import UnknownRoleError
from utils.formatter_utils import ZERO_HASH


def test_role_hash_is_keccak_of_name():
    assert role_hash("ADMIN_ROLE") == Web3.to_hex(Web3.keccak(text="ADMIN_ROLE"))
    assert role_hash("ADMIN_ROLE") == role_hash("ADMIN_ROLE")


def test_role_hashes_are_distinct():
    hashes = [role_hash(name) for name in KNOWN_ROLE_NAMES] + [role_hash("DEFAULT_ADMIN_ROLE")]
    assert len(set(hashes)) == len(hashes)


def test_default_admin_is_zero_hash():
    assert role_hash("DEFAULT_ADMIN_ROLE") == ZERO_HASH
    assert display_name(ZERO_HASH) == "Default Admin"


@pytest.mark.parametrize("name", ["", "admin_role", "SUPER_ROLE", None])
def test_unknown_role_is_rejected(name):
    with pytest.raises(UnknownRoleError):
        role_hash(name)


def test_resolve_role_accepts_names_and_known_hashes():
    admin = ROLE_HASHES["ADMIN_ROLE"]
    assert resolve_role("ADMIN_ROLE") == admin
    assert resolve_role(admin.upper().replace("0X", "0x")) == admin
    assert role_name(admin) == "ADMIN_ROLE"

    with pytest.raises(UnknownRoleError):
        resolve_role("0x" + "ab" * 32)


def test_display_name_falls_back_to_hash():
    unknown = "0x" + "12" * 32
    assert display_name(unknown) == unknown
    assert display_name(ROLE_HASHES["BRIDGE_OPERATOR_ROLE"]) == "Bridge Operator"

import pytest

from abi.distribution_abi import DISTRIBUTION_ABI
from governance.service.vesting_cap_service import VestingCapService
from tests.unit.governance.fakes import CONTRACT

WALLETS = [f"0x{i:040x}" for i in range(1, 6)]


def _cap(name=b"team"):
    return (10**24, name.ljust(32, b"\x00"), 30, 365, 30, 10, 1_700_000_000, 5 * 10**21)


@pytest.fixture
def service(access_port):
    return VestingCapService(access_port, CONTRACT, DISTRIBUTION_ABI)


@pytest.mark.asyncio
async def test_cap_ids_are_read_until_failure(access_port, service):
    cap_ids = [1, 4, 9]

    def cap_id_at(index):
        return cap_ids[index]

    access_port.read_handlers["capIds"] = cap_id_at

    assert await service.read_cap_ids() == [1, 4, 9]


@pytest.mark.asyncio
async def test_failed_wallet_read_becomes_placeholder(access_port, service):
    def wallet_info(wallet, cap_id):
        if wallet == WALLETS[3]:
            raise ValueError("call reverted")
        return (cap_id, b"investor".ljust(32, b"\x00"), 10**21, 0)

    access_port.read_handlers.update(
        vestingCaps=lambda cap_id: _cap(),
        getWalletsInCap=lambda cap_id: WALLETS,
        vestingWallets=wallet_info,
    )

    cap = await service.read_cap(4)

    assert cap.name == "team"
    assert list(cap.wallets) == WALLETS
    assert len(cap.wallet_details) == 5
    placeholder = cap.wallet_details[3]
    assert placeholder.is_placeholder
    assert (placeholder.amount, placeholder.claimed, placeholder.name) == (0, 0, "")
    assert [d.is_placeholder for d in cap.wallet_details].count(True) == 1
    assert cap.wallet_details[0].name == "investor"


@pytest.mark.asyncio
async def test_cap_table_skips_unreadable_caps(access_port, service):
    access_port.read_handlers.update(
        capIds=lambda index: [1, 2][index],
        getWalletsInCap=lambda cap_id: [],
    )

    def caps(cap_id):
        if cap_id == 2:
            raise ValueError("bad cap")
        return _cap()

    access_port.read_handlers["vestingCaps"] = caps

    table = await service.read_cap_table()

    assert [cap.cap_id for cap in table] == [1]

import pytest

from abi.storage_pool_abi import STORAGE_POOL_ABI
from governance.service.storage_pool_service import StoragePoolService
from tests.unit.governance.fakes import CONTRACT, FakeRevert
from utils.formatter_utils import ZERO_ADDRESS

CREATOR = "0x4444444444444444444444444444444444444444"
MEMBER_A = "0x5555555555555555555555555555555555555555"
MEMBER_B = "0x6666666666666666666666666666666666666666"
PEER_1 = b"\x01" * 32
PEER_2 = b"\x02" * 32


def _pool(pool_id, name="fula-eu"):
    return (CREATOR, pool_id, 300, 2, 10, 500 * 10**18, 60, name, "Europe")


def _empty_pool():
    return (ZERO_ADDRESS, 0, 0, 0, 0, 0, 0, "", "")


@pytest.fixture
def service(access_port):
    return StoragePoolService(access_port, CONTRACT, STORAGE_POOL_ABI)


def _seed(access_port, pools, join_keys=None, join_requests=None, members=None):
    join_keys = join_keys or {}
    join_requests = join_requests or {}
    members = members or {}

    def read_pool(pool_id):
        if pool_id not in pools:
            return _empty_pool()
        if pools[pool_id] is None:
            raise FakeRevert("execution reverted")
        return pools[pool_id]

    def read_join_key(pool_id, index):
        keys = join_keys.get(pool_id, [])
        if index >= len(keys):
            raise FakeRevert("execution reverted")
        return keys[index]

    access_port.read_handlers.update(
        pools=read_pool,
        joinRequestKeys=read_join_key,
        joinRequests=lambda pool_id, peer_id: join_requests[(pool_id, peer_id)],
        getPoolMembers=lambda pool_id: members.get(pool_id, []),
        getMemberIndex=lambda pool_id, member: [MEMBER_A, MEMBER_B].index(member),
        getMemberPeerIds=lambda pool_id, member: [PEER_1, PEER_2] if member == MEMBER_A else [],
        getPeerIdInfo=lambda pool_id, peer_id: (MEMBER_A, 7 * 10**18),
    )


@pytest.mark.asyncio
async def test_pool_ids_are_found_across_deleted_slots(access_port, service):
    # Pool 2 deleted, pool 4 unreadable, pool 5 present
    _seed(access_port, {1: _pool(1), 3: _pool(3), 4: None, 5: _pool(5)})

    assert await service.read_pool_ids() == [1, 3, 5]
    scanned = [call[2][0] for call in access_port.calls if call[1] == "pools"]
    assert scanned == [1, 2, 3, 4, 5, 6, 7, 8]


@pytest.mark.asyncio
async def test_read_pools_collects_join_requests_and_members(access_port, service):
    _seed(
        access_port,
        {1: _pool(1), 2: _pool(2, name="")},
        join_keys={1: ["12D3KooWA", "12D3KooWB", "12D3KooWC"]},
        join_requests={
            (1, "12D3KooWA"): (MEMBER_B, 1, 1700000000, 0, 1, 0, "12D3KooWA", 0),
            # Cancelled request reads back zeroed
            (1, "12D3KooWB"): (ZERO_ADDRESS, 0, 0, 0, 0, 0, "", 0),
            (1, "12D3KooWC"): (CREATOR, 1, 1700000100, 0, 0, 1, "12D3KooWC", 2),
        },
        members={1: [MEMBER_A, MEMBER_B]},
    )

    pools = await service.read_pools()

    assert [pool.pool_id for pool in pools] == [1, 2]
    first = pools[0]
    assert first.name == "fula-eu"
    assert first.required_tokens == 500 * 10**18
    assert first.max_challenge_response_period == 300
    assert [request.peer_id for request in first.join_requests] == ["12D3KooWA", "12D3KooWC"]
    assert first.join_requests[0].account == MEMBER_B
    assert [member.address for member in first.members] == [MEMBER_A, MEMBER_B]
    assert first.members[0].peers[0].peer_id == "0x" + "01" * 32
    assert first.members[0].total_locked_tokens == 14 * 10**18
    assert first.members[1].member_index == 1
    assert first.members[1].peers == ()

    assert pools[1].name == "Pool 2"
    assert pools[1].join_requests == ()
    assert pools[1].members == ()


@pytest.mark.asyncio
async def test_join_request_walk_stops_at_limit(access_port):
    _seed(access_port, {1: _pool(1)})
    access_port.read_handlers["joinRequestKeys"] = lambda pool_id, index: f"peer-{index}"
    access_port.read_handlers["joinRequests"] = lambda pool_id, peer_id: (MEMBER_A, 1, 0, 0, 0, 0, peer_id, 0)
    service = StoragePoolService(access_port, CONTRACT, STORAGE_POOL_ABI, max_join_requests=4)

    requests = await service.read_join_requests(1)

    assert [request.peer_id for request in requests] == ["peer-0", "peer-1", "peer-2", "peer-3"]


@pytest.mark.asyncio
async def test_failed_member_and_peer_reads_become_placeholders(access_port, service):
    _seed(access_port, {1: _pool(1)}, members={1: [MEMBER_A, MEMBER_B]})

    def peer_info(pool_id, peer_id):
        if peer_id == PEER_2:
            raise FakeRevert("execution reverted")
        return (MEMBER_A, 3)

    def member_index(pool_id, member):
        if member == MEMBER_B:
            raise FakeRevert("execution reverted")
        return 0

    access_port.read_handlers.update(getPeerIdInfo=peer_info, getMemberIndex=member_index)

    members = await service.read_members(1)

    assert [peer.is_placeholder for peer in members[0].peers] == [False, True]
    assert members[0].total_locked_tokens == 3
    assert members[1].address == MEMBER_B
    assert members[1].is_placeholder


@pytest.mark.asyncio
async def test_unreadable_member_list_leaves_pool_without_members(access_port, service):
    _seed(access_port, {1: _pool(1)})
    del access_port.read_handlers["getPoolMembers"]

    assert await service.read_members(1) == []

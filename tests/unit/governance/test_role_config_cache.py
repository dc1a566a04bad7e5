import pytest

from abi.governance_abi import GOVERNANCE_ABI
from constants.governance_constants import ROLE_HASHES
from governance.service.chunked_log_fetcher import ChunkedLogFetcher
from governance.service.role_config_cache import RoleConfigCache
from tests.unit.governance.fakes import CONTRACT, make_log

ADMIN = ROLE_HASHES["ADMIN_ROLE"]
OPERATOR = ROLE_HASHES["CONTRACT_OPERATOR_ROLE"]


@pytest.fixture
def cache(access_port):
    return RoleConfigCache(access_port, ChunkedLogFetcher(access_port, chunk_delay_seconds=0), CONTRACT, GOVERNANCE_ABI)


@pytest.mark.asyncio
async def test_refresh_reads_current_values_of_discovered_roles(access_port, cache):
    access_port.logs["TransactionLimitUpdated"] = [
        make_log("TransactionLimitUpdated", 1, role=ADMIN, limit=5),
        make_log("TransactionLimitUpdated", 2, role=ADMIN, limit=7),
    ]
    access_port.logs["QuorumUpdated"] = [make_log("QuorumUpdated", 3, role=OPERATOR, quorum=1)]
    on_chain = {ADMIN: (10**21, 3), OPERATOR: (0, 1)}
    access_port.read_handlers["roleConfigs"] = lambda role: on_chain[role]

    configs = await cache.refresh()

    assert list(configs) == [ADMIN, OPERATOR]
    assert configs[ADMIN].transaction_limit == 10**21
    assert configs[ADMIN].quorum == 3
    assert configs[ADMIN].role_name == "Admin"
    # Each role is read once, with the identifier seen in events
    reads = [call for call in access_port.calls if call[0] == "read"]
    assert reads == [("read", "roleConfigs", (ADMIN,)), ("read", "roleConfigs", (OPERATOR,))]


@pytest.mark.asyncio
async def test_unreadable_role_is_left_out(access_port, cache):
    access_port.logs["QuorumUpdated"] = [
        make_log("QuorumUpdated", 1, role=ADMIN, quorum=2),
        make_log("QuorumUpdated", 2, role=OPERATOR, quorum=2),
    ]

    def read(role):
        if role == OPERATOR:
            raise ValueError("execution reverted")
        return (1, 2)

    access_port.read_handlers["roleConfigs"] = read
    configs = await cache.refresh()

    assert list(configs) == [ADMIN]


@pytest.mark.asyncio
async def test_resolve_quorum_reads_unseen_role_directly(access_port, cache):
    access_port.read_handlers["roleConfigs"] = lambda role: (0, 4)

    assert await cache.resolve_quorum(ADMIN) == 4
    assert cache.get(ADMIN).quorum == 4


@pytest.mark.asyncio
async def test_resolve_quorum_unset_or_unreadable(access_port, cache):
    access_port.read_handlers["roleConfigs"] = lambda role: (0, 0)
    assert await cache.resolve_quorum(ADMIN) is None

    del access_port.read_handlers["roleConfigs"]
    assert await cache.resolve_quorum(OPERATOR) is None

import pytest

from abi.governance_abi import GOVERNANCE_ABI
from governance.service.proposal_registry_synchronizer import ProposalRegistrySynchronizer
from tests.unit.governance.fakes import CONTRACT

TARGET = "0x3333333333333333333333333333333333333333"
ZERO = "0x0000000000000000000000000000000000000000"


def _id(n):
    return "0x" + f"{n:064x}"


def _raw(proposal_type, approvals=1):
    return (proposal_type, TARGET, 0, "0x" + "00" * 32, ZERO, 0, (2000, 1000, approvals, 0))


@pytest.mark.asyncio
async def test_sync_reads_every_slot(access_port):
    ids = [_id(1), _id(2), _id(3)]
    access_port.read_handlers.update(
        proposalCount=lambda: 3,
        proposalRegistry=lambda index: ids[index],
        proposals=lambda proposal_id: _raw(5),
    )

    proposals = await ProposalRegistrySynchronizer(access_port, CONTRACT, GOVERNANCE_ABI).sync()

    assert [p.proposal_id for p in proposals] == ids


@pytest.mark.asyncio
async def test_sync_skips_bad_slots(access_port):
    ids = [_id(1), _id(0), _id(3), _id(4)]

    def proposals(proposal_id):
        if proposal_id == _id(3):
            raise ValueError("execution reverted")
        return _raw(1)

    access_port.read_handlers.update(
        proposalCount=lambda: 5,
        proposalRegistry=lambda index: ids[index],
        proposals=proposals,
    )

    result = await ProposalRegistrySynchronizer(access_port, CONTRACT, GOVERNANCE_ABI).sync()

    # Slot 1 holds the zero id, slot 2 fails to decode, slot 4 is out of range
    assert [p.proposal_id for p in result] == [_id(1), _id(4)]


@pytest.mark.asyncio
async def test_count_failure_propagates(access_port):
    with pytest.raises(Exception, match="no handler for proposalCount"):
        await ProposalRegistrySynchronizer(access_port, CONTRACT, GOVERNANCE_ABI).sync()

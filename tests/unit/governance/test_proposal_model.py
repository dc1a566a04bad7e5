import pytest

from governance.enums.proposal_type import ProposalStatus, ProposalType
from governance.mappers.proposal_mapper import ProposalMapper
from governance.models.proposal import Proposal

PROPOSAL_ID = "0x" + "01" * 32
TARGET = "0x3333333333333333333333333333333333333333"


def _proposal(**overrides):
    fields = dict(
        proposal_id=PROPOSAL_ID,
        proposal_type=ProposalType.ADD_ROLE,
        status=ProposalStatus.PENDING,
        approvals=2,
        execution_time=1000,
        expiry_time=5000,
    )
    fields.update(overrides)
    return Proposal(**fields)


def test_can_execute_waits_for_execution_time():
    proposal = _proposal()
    assert proposal.can_execute(999, 2) is False
    assert proposal.can_execute(1000, 2) is True


def test_can_execute_requires_quorum_and_pending():
    assert _proposal(approvals=1).can_execute(2000, 2) is False
    assert _proposal(status=ProposalStatus.EXECUTED).can_execute(2000, 2) is False


def test_expiry_is_derived_from_time():
    proposal = _proposal(expiry_time=100)
    assert proposal.is_expired(100) is False
    assert proposal.is_expired(101) is True
    assert _proposal(expiry_time=100, status=ProposalStatus.EXECUTED).is_expired(101) is False


def test_type_name():
    assert _proposal().type_name == "ADD_ROLE"
    assert _proposal(proposal_type=42).type_name == "UNKNOWN_42"


def test_mapper_reads_nested_config_tuple():
    raw = (5, TARGET, 0, b"\x00" * 32, "0x0000000000000000000000000000000000000000", 0, (5000, 1000, 2, 0))
    proposal = ProposalMapper.web3_result_to_proposal(bytes.fromhex("01" * 32), raw)

    assert proposal.proposal_id == PROPOSAL_ID
    assert proposal.proposal_type == ProposalType.ADD_WHITELIST
    assert proposal.target == "0x3333333333333333333333333333333333333333"
    assert (proposal.expiry_time, proposal.execution_time, proposal.approvals) == (5000, 1000, 2)
    assert proposal.is_pending


def test_mapper_treats_non_zero_status_as_executed():
    raw = (1, TARGET, 0, "0x" + "00" * 32, TARGET, 0, {"expiryTime": 1, "executionTime": 1, "approvals": 3, "status": 2})
    assert ProposalMapper.web3_result_to_proposal(PROPOSAL_ID, raw).status == ProposalStatus.EXECUTED


@pytest.mark.parametrize("raw", [(), (1, 2, 3), "0xdeadbeef", None])
def test_mapper_rejects_unexpected_layout(raw):
    with pytest.raises(ValueError):
        ProposalMapper.web3_result_to_proposal(PROPOSAL_ID, raw)

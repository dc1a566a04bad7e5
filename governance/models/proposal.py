from pydantic import BaseModel, ConfigDict

from governance.enums.proposal_type import ProposalStatus, ProposalType
from utils.formatter_utils import ZERO_ADDRESS, ZERO_HASH


class Proposal(BaseModel):
    """
    One entry of the on-chain proposal registry.

    Expired is never stored on-chain; it is derived from `expiry_time` at evaluation time.
    The quorum that gates execution lives in the role configuration, not on the proposal.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    proposal_id: str
    proposal_type: int = ProposalType.NA
    target: str = ZERO_ADDRESS
    numeric_id: int = 0
    role: str = ZERO_HASH
    token_address: str = ZERO_ADDRESS
    amount: int = 0
    status: ProposalStatus = ProposalStatus.PENDING
    approvals: int = 0
    expiry_time: int = 0
    execution_time: int = 0

    @property
    def type_name(self) -> str:
        try:
            return ProposalType(self.proposal_type).name
        except ValueError:
            return f"UNKNOWN_{self.proposal_type}"

    @property
    def is_pending(self) -> bool:
        return self.status == ProposalStatus.PENDING

    def is_expired(self, now: int) -> bool:
        return self.is_pending and self.expiry_time < now

    def can_execute(self, now: int, quorum: int) -> bool:
        return self.is_pending and now >= self.execution_time and self.approvals >= quorum

from typing import Any, Mapping, Sequence

from governance.enums.proposal_type import ProposalStatus
from governance.models.proposal import Proposal
from utils.formatter_utils import ZERO_ADDRESS, to_bytes32_hex, to_normalized_address

PROPOSAL_TUPLE_LENGTH = 7
CONFIG_FIELDS = ("expiryTime", "executionTime", "approvals", "status")


class ProposalMapper(object):
    @staticmethod
    def web3_result_to_proposal(proposal_id: Any, raw: Sequence[Any]) -> Proposal:
        """
        `proposals(id)` returns (proposalType, target, id, role, tokenAddress, amount, config)
        with config = (expiryTime, executionTime, approvals, status).
        """
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence) or len(raw) != PROPOSAL_TUPLE_LENGTH:
            raise ValueError(f"Unexpected proposal layout for {to_bytes32_hex(proposal_id)}: {raw!r}")

        proposal_type, target, numeric_id, role, token_address, amount, config = raw
        expiry_time, execution_time, approvals, status = ProposalMapper._config_values(config)

        return Proposal(
            proposal_id=to_bytes32_hex(proposal_id),
            proposal_type=int(proposal_type),
            target=to_normalized_address(target) or ZERO_ADDRESS,
            numeric_id=int(numeric_id or 0),
            role=to_bytes32_hex(role),
            token_address=to_normalized_address(token_address) or ZERO_ADDRESS,
            amount=int(amount or 0),
            status=ProposalStatus.from_raw(status or 0),
            approvals=int(approvals or 0),
            expiry_time=int(expiry_time or 0),
            execution_time=int(execution_time or 0),
        )

    @staticmethod
    def _config_values(config: Any) -> tuple:
        if isinstance(config, Mapping):
            return tuple(config.get(field, 0) for field in CONFIG_FIELDS)
        if config is None:
            return 0, 0, 0, 0
        values = tuple(config)
        if len(values) != len(CONFIG_FIELDS):
            raise ValueError(f"Unexpected proposal config layout: {config!r}")
        return values

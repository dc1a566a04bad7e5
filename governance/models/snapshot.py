from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from governance.models.address_set import AddressSetEntry
from governance.models.event_records import BridgeOperationRecord, NonceRecord, TgeStatus
from governance.models.proposal import Proposal
from governance.models.role_config import RoleConfig
from governance.models.storage_pool import StoragePool
from governance.models.vesting_cap import VestingCap


class GovernanceSnapshot(BaseModel):
    """
    Immutable view of one governance target, rebuilt from scratch on every refresh.
    Consumers read it; only GovernanceSynchronizer produces it.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    contract_type: str
    contract_address: str
    generation: int = 0
    synced_at: int = 0
    # Quorum of the governance role, or the fallback when it could not be read
    quorum: int
    quorum_resolved: bool = False
    proposals: Tuple[Proposal, ...] = ()
    role_configs: Tuple[RoleConfig, ...] = ()
    vesting_cap_table: Tuple[VestingCap, ...] = ()
    whitelisted_addresses: Tuple[AddressSetEntry, ...] = ()
    blacklisted_addresses: Tuple[AddressSetEntry, ...] = ()
    substrate_mappings: Tuple[AddressSetEntry, ...] = ()
    storage_pools: Tuple[StoragePool, ...] = ()
    bridge_op_events: Tuple[BridgeOperationRecord, ...] = ()
    nonce_events: Tuple[NonceRecord, ...] = ()
    tge_status: TgeStatus = TgeStatus()
    failed_sections: Tuple[str, ...] = ()

    def role_config(self, role_id: str) -> Optional[RoleConfig]:
        return next((config for config in self.role_configs if config.role == role_id), None)

    def executable_proposals(self, now: int) -> List[Proposal]:
        return [p for p in self.proposals if p.can_execute(now, self.quorum)]

    def actionable_proposals(self, now: int) -> List[Proposal]:
        return [p for p in self.proposals if p.is_pending and not p.is_expired(now)]

    def proposal_states(self, now: int) -> List[Dict[str, Any]]:
        states = []
        for proposal in self.proposals:
            state = proposal.model_dump(mode="json")
            state["type_name"] = proposal.type_name
            state["is_expired"] = proposal.is_expired(now)
            state["can_execute"] = proposal.can_execute(now, self.quorum)
            states.append(state)
        return states

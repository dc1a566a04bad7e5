import asyncio
import time
from typing import Any, Awaitable, Callable, List, Optional

from abi.contract_abis import get_contract_abi
from constants.governance_constants import DEFAULT_QUORUM_FALLBACK, GOVERNANCE_ROLE
from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.enums.contract_type import DISTRIBUTION_CONTRACT_TYPES, GOVERNED_CONTRACT_TYPES, ContractType
from governance.models.event_records import TgeStatus
from governance.models.snapshot import GovernanceSnapshot
from governance.service.address_set_service import AddressSetService
from governance.service.chunked_log_fetcher import BlockIdentifier, ChunkedLogFetcher
from governance.service.event_projection_service import EventProjectionService
from governance.service.proposal_registry_synchronizer import ProposalRegistrySynchronizer
from governance.service.role_config_cache import RoleConfigCache
from governance.service.role_hash_resolver import role_hash
from governance.service.storage_pool_service import StoragePoolService
from governance.service.vesting_cap_service import VestingCapService
from utils.exceptions import ContractUnresolvedError
from utils.logger_utils import get_logger

logger = get_logger("Governance Synchronizer")


class GovernanceSynchronizer:
    """
    Builds GovernanceSnapshot for one governance target.

    Refreshes are serialized by a lock and numbered. A refresh that has been superseded by a
    newer request before it publishes discards its result and returns the last published
    snapshot instead. Each snapshot section is loaded independently: a section that fails as
    a whole is logged, left empty and listed in `failed_sections`.
    """

    def __init__(
        self,
        access_port: BlockchainAccessPort,
        contract_type: ContractType,
        contract_address: Optional[str],
        log_fetcher: ChunkedLogFetcher,
        abi: Optional[List[dict]] = None,
        from_block: BlockIdentifier = "earliest",
        quorum_fallback: int = DEFAULT_QUORUM_FALLBACK,
        clock: Callable[[], float] = time.time,
    ):
        self._access_port = access_port
        self._contract_type = ContractType(contract_type)
        self._contract_address = contract_address
        self._abi = abi if abi is not None else get_contract_abi(self._contract_type)
        self._log_fetcher = log_fetcher
        self._from_block = from_block
        self._quorum_fallback = quorum_fallback
        self._clock = clock

        self._role_config_cache = RoleConfigCache(
            access_port, log_fetcher, contract_address, self._abi, from_block=from_block
        )
        self._lock = asyncio.Lock()
        self._generation = 0
        self._snapshot: Optional[GovernanceSnapshot] = None

    @property
    def snapshot(self) -> Optional[GovernanceSnapshot]:
        return self._snapshot

    @property
    def role_config_cache(self) -> RoleConfigCache:
        return self._role_config_cache

    async def refresh(self) -> Optional[GovernanceSnapshot]:
        if not self._contract_address:
            raise ContractUnresolvedError(self._contract_type.value, self._access_port.chain_id)

        self._generation += 1
        generation = self._generation

        async with self._lock:
            if generation != self._generation:
                logger.info(f"Refresh #{generation} superseded by #{self._generation} before it started")
                return self._snapshot

            snapshot = await self._build(generation)

            if generation != self._generation:
                logger.info(f"Discarding result of refresh #{generation}, superseded by #{self._generation}")
                return self._snapshot

            self._snapshot = snapshot
            logger.info(
                f"Published snapshot #{generation} for {self._contract_type.value}: "
                f"{len(snapshot.proposals)} proposals, {len(snapshot.role_configs)} role configs"
                + (f", failed sections: {', '.join(snapshot.failed_sections)}" if snapshot.failed_sections else "")
            )
            return snapshot

    async def _build(self, generation: int) -> GovernanceSnapshot:
        failed_sections: List[str] = []

        async def load(section: str, loader: Callable[[], Awaitable[Any]], default: Any) -> Any:
            try:
                return await loader()
            except Exception as e:
                logger.error(f"Failed to load {section} for {self._contract_type.value}: {e}")
                failed_sections.append(section)
                return default

        address = self._contract_address
        fields = {}

        if self._contract_type in GOVERNED_CONTRACT_TYPES:
            proposal_sync = ProposalRegistrySynchronizer(self._access_port, address, self._abi)
            fields["proposals"] = tuple(await load("proposals", proposal_sync.sync, []))

        fields["role_configs"] = tuple((await load("role_configs", self._role_config_cache.refresh, {})).values())
        quorum = await self._role_config_cache.resolve_quorum(role_hash(GOVERNANCE_ROLE))
        if quorum is None:
            logger.warning(
                f"Quorum of {GOVERNANCE_ROLE} unresolved, assuming {self._quorum_fallback} for executability"
            )

        if self._contract_type in DISTRIBUTION_CONTRACT_TYPES:
            vesting = VestingCapService(self._access_port, address, self._abi)
            fields["vesting_cap_table"] = tuple(await load("vesting_cap_table", vesting.read_cap_table, []))

        projections = EventProjectionService(self._log_fetcher, address, self._from_block)
        address_sets = AddressSetService(self._access_port, self._log_fetcher, address, self._abi, self._from_block)

        if self._contract_type in DISTRIBUTION_CONTRACT_TYPES:
            fields["tge_status"] = await load("tge_status", projections.get_tge_status, TgeStatus())

        if self._contract_type == ContractType.TOKEN:
            fields["whitelisted_addresses"] = tuple(
                await load("whitelisted_addresses", address_sets.get_whitelisted_addresses, [])
            )
            fields["blacklisted_addresses"] = tuple(
                await load("blacklisted_addresses", address_sets.get_blacklisted_addresses, [])
            )
            fields["bridge_op_events"] = tuple(await load("bridge_op_events", projections.get_bridge_operations, []))
            fields["nonce_events"] = tuple(await load("nonce_events", projections.get_nonce_events, []))

        if self._contract_type == ContractType.TESTNET_MINING:
            fields["substrate_mappings"] = tuple(
                await load("substrate_mappings", address_sets.get_substrate_mappings, [])
            )

        if self._contract_type == ContractType.STORAGE_POOL:
            pools = StoragePoolService(self._access_port, address, self._abi)
            fields["storage_pools"] = tuple(await load("storage_pools", pools.read_pools, []))

        return GovernanceSnapshot(
            contract_type=self._contract_type.value,
            contract_address=address,
            generation=generation,
            synced_at=int(self._clock()),
            quorum=quorum if quorum is not None else self._quorum_fallback,
            quorum_resolved=quorum is not None,
            failed_sections=tuple(failed_sections),
            **fields,
        )

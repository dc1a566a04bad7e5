from typing import Dict, List, Optional

from abi.governance_abi import QUORUM_UPDATED_EVENT, TRANSACTION_LIMIT_UPDATED_EVENT
from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.models.role_config import RoleConfig
from governance.service.chunked_log_fetcher import BlockIdentifier, ChunkedLogFetcher
from governance.service.role_hash_resolver import display_name
from utils.exceptions import PartialReadFailure
from utils.formatter_utils import to_bytes32_hex
from utils.logger_utils import get_logger

logger = get_logger("Role Config Cache")


class RoleConfigCache:
    """
    Per-role (transaction limit, quorum) pairs for one governance contract.

    TransactionLimitUpdated / QuorumUpdated events only tell which roles were ever configured.
    Current values always come from `roleConfigs(role)`, since a role may have been updated
    several times and only the on-chain value is authoritative.
    """

    def __init__(
        self,
        access_port: BlockchainAccessPort,
        log_fetcher: ChunkedLogFetcher,
        contract_address: str,
        abi: List[dict],
        from_block: BlockIdentifier = "earliest",
    ):
        self._access_port = access_port
        self._log_fetcher = log_fetcher
        self._contract_address = contract_address
        self._abi = abi
        self._from_block = from_block
        self._configs: Dict[str, RoleConfig] = {}

    @property
    def configs(self) -> Dict[str, RoleConfig]:
        return dict(self._configs)

    def get(self, role_id: str) -> Optional[RoleConfig]:
        return self._configs.get(to_bytes32_hex(role_id))

    async def discover_roles(self) -> List[str]:
        roles: List[str] = []
        for event_abi in (TRANSACTION_LIMIT_UPDATED_EVENT, QUORUM_UPDATED_EVENT):
            logs = await self._log_fetcher.fetch_logs(self._contract_address, event_abi, self._from_block, "latest")
            for log in logs:
                role_id = to_bytes32_hex(log.args.get("role"))
                if role_id not in roles:
                    roles.append(role_id)
        logger.info(f"Discovered {len(roles)} configured role(s) on {self._contract_address}")
        return roles

    async def read_role_config(self, role_id: str) -> RoleConfig:
        role_id = to_bytes32_hex(role_id)
        transaction_limit, quorum = await self._access_port.read_contract(
            self._contract_address, "roleConfigs", [role_id], self._abi
        )
        return RoleConfig(
            role=role_id,
            role_name=display_name(role_id),
            transaction_limit=int(transaction_limit),
            quorum=int(quorum),
        )

    async def refresh(self) -> Dict[str, RoleConfig]:
        configs: Dict[str, RoleConfig] = {}
        for role_id in await self.discover_roles():
            try:
                configs[role_id] = await self.read_role_config(role_id)
            except Exception as e:
                logger.warning(str(PartialReadFailure(f"role config {display_name(role_id)}", e)))

        self._configs = configs
        return dict(configs)

    async def resolve_quorum(self, role_id: str) -> Optional[int]:
        """
        Quorum of `role_id` from the cache, reading it directly when the role was never
        seen in events. Returns None when it cannot be read or is unset (zero).
        """
        config = self.get(role_id)
        if config is None:
            try:
                config = await self.read_role_config(role_id)
            except Exception as e:
                logger.warning(str(PartialReadFailure(f"quorum of {display_name(role_id)}", e)))
                return None
            self._configs[config.role] = config
        return config.quorum or None

from typing import List, Tuple

from abi.distribution_abi import ADDRESS_REMOVED_EVENT, SUBSTRATE_REWARDS_UPDATED_EVENT
from abi.token_abi import BLACKLIST_OP_EVENT, WALLET_WHITELISTED_OP_EVENT
from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.enums.operation import SetOperation
from governance.models.address_set import AddressSetEntry
from governance.models.event_records import SubstrateRewardRecord, TimeConfig
from governance.service.chunked_log_fetcher import BlockIdentifier, ChunkedLogFetcher
from governance.service.set_reconstructor import events_from_logs, reconstruct_set
from utils.logger_utils import get_logger
from utils.validation_utils import validate_address

logger = get_logger("Address Set Service")


class AddressSetService:
    """Whitelist, blacklist and substrate-mapping membership rebuilt from event history."""

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

    async def _fetch(self, event_abi: dict):
        return await self._log_fetcher.fetch_logs(self._contract_address, event_abi, self._from_block, "latest")

    async def get_whitelisted_addresses(self) -> List[AddressSetEntry]:
        logs = await self._fetch(WALLET_WHITELISTED_OP_EVENT)
        events = events_from_logs(
            logs,
            address_field="target",
            operation_field="operation",
            operator_field="operator",
            lock_time_field="whitelistLockTime",
        )
        entries = reconstruct_set(events)
        logger.info(f"Whitelist: {len(entries)} address(es) from {len(logs)} event(s)")
        return entries

    async def get_blacklisted_addresses(self) -> List[AddressSetEntry]:
        logs = await self._fetch(BLACKLIST_OP_EVENT)
        events = events_from_logs(logs, address_field="account", operation_field="status", operator_field="by")
        entries = reconstruct_set(events)
        logger.info(f"Blacklist: {len(entries)} address(es) from {len(logs)} event(s)")
        return entries

    async def get_substrate_mappings(self) -> List[AddressSetEntry]:
        """
        Wallets with substrate rewards, each carrying its latest reward amount.
        A later AddressRemoved drops the wallet from the set.
        """
        reward_logs = await self._fetch(SUBSTRATE_REWARDS_UPDATED_EVENT)
        removed_logs = await self._fetch(ADDRESS_REMOVED_EVENT)
        events = events_from_logs(reward_logs, address_field="wallet", operation=SetOperation.ADD, amount_field="amount")
        events += events_from_logs(removed_logs, address_field="ethereumAddr", operation=SetOperation.REMOVE)
        return reconstruct_set(events)

    async def read_time_config(self, address: str) -> TimeConfig:
        validate_address(address)
        last_activity_time, role_change_time_lock, whitelist_lock_time = await self._access_port.read_contract(
            self._contract_address, "timeConfigs", [address], self._abi
        )
        return TimeConfig(
            last_activity_time=int(last_activity_time),
            role_change_time_lock=int(role_change_time_lock),
            whitelist_lock_time=int(whitelist_lock_time),
        )

    async def is_whitelisted(self, address: str) -> bool:
        return (await self.read_time_config(address)).whitelist_lock_time > 0

    async def check_whitelist_config(self, address: str) -> Tuple[int, int, int]:
        config = await self.read_time_config(address)
        return config.last_activity_time, config.role_change_time_lock, config.whitelist_lock_time

    async def get_substrate_rewards(self, wallet: str) -> SubstrateRewardRecord:
        validate_address(wallet, "wallet address")
        last_update, amount = await self._access_port.read_contract(
            self._contract_address, "getSubstrateRewards", [wallet], self._abi
        )
        return SubstrateRewardRecord(wallet=wallet, last_update=int(last_update), amount=int(amount))

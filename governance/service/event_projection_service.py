from typing import List

from abi.distribution_abi import TGE_INITIATED_EVENT
from abi.token_abi import BRIDGE_OPERATION_DETAILS_EVENT, SUPPORTED_CHAIN_CHANGED_EVENT
from governance.mappers.event_mapper import EventMapper
from governance.models.event_records import BridgeOperationRecord, NonceRecord, TgeStatus
from governance.service.chunked_log_fetcher import BlockIdentifier, ChunkedLogFetcher
from utils.logger_utils import get_logger

logger = get_logger("Event Projection Service")


class EventProjectionService:
    """Append-only projections of bridge and TGE events. Records are never updated."""

    def __init__(self, log_fetcher: ChunkedLogFetcher, contract_address: str, from_block: BlockIdentifier = "earliest"):
        self._log_fetcher = log_fetcher
        self._contract_address = contract_address
        self._from_block = from_block

    async def _fetch(self, event_abi: dict):
        logs = await self._log_fetcher.fetch_logs(self._contract_address, event_abi, self._from_block, "latest")
        return sorted(logs, key=lambda log: log.chain_position)

    async def get_bridge_operations(self) -> List[BridgeOperationRecord]:
        return [EventMapper.log_to_bridge_operation(log) for log in await self._fetch(BRIDGE_OPERATION_DETAILS_EVENT)]

    async def get_nonce_events(self) -> List[NonceRecord]:
        return [EventMapper.log_to_nonce_record(log) for log in await self._fetch(SUPPORTED_CHAIN_CHANGED_EVENT)]

    async def get_tge_status(self) -> TgeStatus:
        logs = await self._fetch(TGE_INITIATED_EVENT)
        if not logs:
            return TgeStatus(is_initiated=False)
        latest = EventMapper.log_to_tge_status(logs[-1])
        logger.info(f"TGE initiated at {latest.timestamp} (block {latest.block_number})")
        return latest

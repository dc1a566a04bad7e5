import asyncio
from typing import List, Union

from constants.governance_constants import DEFAULT_LOG_CHUNK_DELAY_SECONDS, LOG_PROGRESS_EVERY, MAX_LOG_CHUNK_SIZE
from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.models.decoded_log import DecodedLog
from utils.exceptions import RateLimitError
from utils.logger_utils import get_logger
from utils.validation_utils import validate_block_range

logger = get_logger("Chunked Log Fetcher")

BlockIdentifier = Union[int, str]


class ChunkedLogFetcher:
    """
    Historical event retrieval that survives provider block-range limits.

    The full range is tried first. When the provider rejects it as too wide, the range is
    walked in windows of at most MAX_LOG_CHUNK_SIZE blocks, one request at a time with a
    short pause in between. A window that fails is logged and skipped: the result may then
    be missing that window's events, but the rest of the history is still returned.
    """

    def __init__(
        self,
        access_port: BlockchainAccessPort,
        chunk_size: int = MAX_LOG_CHUNK_SIZE,
        chunk_delay_seconds: float = DEFAULT_LOG_CHUNK_DELAY_SECONDS,
    ):
        self._access_port = access_port
        self._chunk_size = max(1, min(chunk_size, MAX_LOG_CHUNK_SIZE))
        self._chunk_delay_seconds = max(0.0, chunk_delay_seconds)

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    async def fetch_logs(
        self,
        address: str,
        event_abi: dict,
        from_block: BlockIdentifier = "earliest",
        to_block: BlockIdentifier = "latest",
    ) -> List[DecodedLog]:
        event_name = event_abi.get("name")
        try:
            return await self._access_port.get_logs(address, event_abi, from_block, to_block)
        except RateLimitError as e:
            logger.info(f"{event_name}: block range rejected by provider ({e.cause or e}), using chunked approach")

        start_block = 0 if from_block == "earliest" else int(from_block)
        end_block = await self._access_port.get_block_number() if to_block == "latest" else int(to_block)
        validate_block_range(start_block, end_block)

        return await self._fetch_in_chunks(address, event_abi, start_block, end_block)

    async def _fetch_in_chunks(
        self, address: str, event_abi: dict, start_block: int, end_block: int
    ) -> List[DecodedLog]:
        event_name = event_abi.get("name")
        logger.info(
            f"Fetching {event_name} events in chunks of {self._chunk_size} blocks from {start_block} to {end_block}"
        )

        logs: List[DecodedLog] = []
        skipped_chunks = 0
        next_progress = LOG_PROGRESS_EVERY
        chunk_start = start_block

        while chunk_start <= end_block:
            chunk_end = min(chunk_start + self._chunk_size - 1, end_block)
            try:
                logs.extend(await self._access_port.get_logs(address, event_abi, chunk_start, chunk_end))
            except Exception as e:
                skipped_chunks += 1
                logger.warning(f"Failed to fetch {event_name} events for blocks {chunk_start}-{chunk_end}: {e}")

            if len(logs) >= next_progress:
                logger.info(f"Fetched {len(logs)} {event_name} events so far...")
                next_progress = (len(logs) // LOG_PROGRESS_EVERY + 1) * LOG_PROGRESS_EVERY

            chunk_start = chunk_end + 1
            if chunk_start <= end_block and self._chunk_delay_seconds:
                await asyncio.sleep(self._chunk_delay_seconds)

        if skipped_chunks:
            logger.warning(f"Completed chunked fetch of {event_name} with {skipped_chunks} skipped chunk(s)")
        logger.info(f"Completed chunked fetch: {len(logs)} total {event_name} events")
        return logs

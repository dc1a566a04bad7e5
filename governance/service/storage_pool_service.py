from typing import Any, List, Sequence

from constants.governance_constants import (
    MAX_JOIN_REQUESTS_PER_POOL,
    POOL_ID_START,
    POOL_SCAN_MAX_CONSECUTIVE_MISSES,
)
from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.mappers.storage_pool_mapper import StoragePoolMapper
from governance.models.storage_pool import PoolJoinRequest, PoolMember, StoragePool
from governance.service.sparse_collection_walker import SparseCollectionWalker, scan_ids, walk_with_placeholders
from utils.exceptions import PartialReadFailure
from utils.formatter_utils import ZERO_ADDRESS, to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Storage Pool Service")


class StoragePoolService:
    """
    Read side of the storage pool contract.

    The contract has no pool count, so pool ids are scanned from 1 with a small tolerance for
    gaps left by deleted pools. Join requests are enumerated by walking `joinRequestKeys(pool, i)`
    and members come from `getPoolMembers`. A failed member or peer read yields a placeholder;
    a failed join request or member list leaves that part of the pool empty.
    """

    def __init__(
        self,
        access_port: BlockchainAccessPort,
        contract_address: str,
        abi: List[dict],
        max_consecutive_misses: int = POOL_SCAN_MAX_CONSECUTIVE_MISSES,
        max_join_requests: int = MAX_JOIN_REQUESTS_PER_POOL,
    ):
        self._access_port = access_port
        self._contract_address = contract_address
        self._abi = abi
        self._max_consecutive_misses = max_consecutive_misses
        self._max_join_requests = max_join_requests

    async def _read(self, function_name: str, *args):
        return await self._access_port.read_contract(self._contract_address, function_name, list(args), self._abi)

    async def read_pool_ids(self) -> List[int]:
        return [pool_id for pool_id, _ in await self._scan_pools()]

    async def _scan_pools(self):
        return await scan_ids(
            lambda pool_id: self._read("pools", pool_id),
            StoragePoolMapper.pool_exists,
            start=POOL_ID_START,
            max_consecutive_misses=self._max_consecutive_misses,
            label="pools",
        )

    async def read_join_requests(self, pool_id: int) -> List[PoolJoinRequest]:
        async def read_key(index: int) -> str:
            return await self._read("joinRequestKeys", pool_id, index)

        walker = SparseCollectionWalker(read_key, label=f"joinRequestKeys of pool {pool_id}", limit=self._max_join_requests)
        requests: List[PoolJoinRequest] = []
        async for peer_id in walker.iterate():
            if not peer_id:
                break
            try:
                raw = await self._read("joinRequests", pool_id, peer_id)
            except Exception as e:
                logger.warning(str(PartialReadFailure(f"join request {peer_id} in pool {pool_id}", e)))
                continue
            request = StoragePoolMapper.web3_result_to_join_request(pool_id, raw)
            if request.account != ZERO_ADDRESS:
                requests.append(request)
        return requests

    async def read_member(self, pool_id: int, address: str) -> PoolMember:
        member_index = int(await self._read("getMemberIndex", pool_id, address))
        peer_ids: Sequence[Any] = await self._read("getMemberPeerIds", pool_id, address)

        peers = await walk_with_placeholders(
            list(peer_ids),
            lambda peer_id: self._read_peer(pool_id, peer_id),
            StoragePoolMapper.placeholder_peer,
            label=f"peer info in pool {pool_id} for",
        )
        return PoolMember(address=to_normalized_address(address), member_index=member_index, peers=tuple(peers))

    async def _read_peer(self, pool_id: int, peer_id: Any):
        raw = await self._read("getPeerIdInfo", pool_id, peer_id)
        return StoragePoolMapper.web3_result_to_peer(peer_id, raw)

    async def read_members(self, pool_id: int) -> List[PoolMember]:
        try:
            addresses = list(await self._read("getPoolMembers", pool_id))
        except Exception as e:
            logger.warning(str(PartialReadFailure(f"members of pool {pool_id}", e)))
            return []

        return await walk_with_placeholders(
            addresses,
            lambda address: self.read_member(pool_id, address),
            StoragePoolMapper.placeholder_member,
            label=f"member of pool {pool_id}",
        )

    async def read_pools(self) -> List[StoragePool]:
        pools: List[StoragePool] = []
        for pool_id, raw in await self._scan_pools():
            pool = StoragePoolMapper.web3_result_to_pool(pool_id, raw)
            join_requests = await self.read_join_requests(pool_id)
            members = await self.read_members(pool_id)
            pools.append(pool.model_copy(update={"join_requests": tuple(join_requests), "members": tuple(members)}))

        logger.info(f"Loaded {len(pools)} storage pools from {self._contract_address}")
        return pools

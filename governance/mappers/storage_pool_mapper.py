from typing import Any, Sequence

from governance.models.storage_pool import PoolJoinRequest, PoolMember, PoolPeer, StoragePool
from utils.formatter_utils import ZERO_ADDRESS, to_bytes32_hex, to_normalized_address

POOL_FIELDS = 9
JOIN_REQUEST_FIELDS = 8


class StoragePoolMapper(object):
    @staticmethod
    def pool_exists(raw: Sequence[Any]) -> bool:
        # Unused and deleted slots read back with id 0
        values = tuple(raw or ())
        return len(values) >= POOL_FIELDS and int(values[1]) != 0

    @staticmethod
    def web3_result_to_pool(pool_id: int, raw: Sequence[Any]) -> StoragePool:
        # [creator, id, maxChallengeResponsePeriod, memberCount, maxMembers, requiredTokens, minPingTime, name, region]
        values = tuple(raw)
        if len(values) < POOL_FIELDS:
            raise ValueError(f"Unexpected pool layout for pool {pool_id}: {raw!r}")

        return StoragePool(
            pool_id=int(pool_id),
            creator=to_normalized_address(values[0]) or ZERO_ADDRESS,
            max_challenge_response_period=int(values[2] or 0),
            member_count=int(values[3] or 0),
            max_members=int(values[4] or 0),
            required_tokens=int(values[5] or 0),
            min_ping_time=int(values[6] or 0),
            name=values[7] or f"Pool {pool_id}",
            region=values[8] or "Unknown",
        )

    @staticmethod
    def web3_result_to_join_request(pool_id: int, raw: Sequence[Any]) -> PoolJoinRequest:
        # [account, poolId, timestamp, status, approvals, rejections, peerId, index]
        values = tuple(raw)
        if len(values) < JOIN_REQUEST_FIELDS:
            raise ValueError(f"Unexpected join request layout in pool {pool_id}: {raw!r}")

        return PoolJoinRequest(
            pool_id=int(values[1]) if values[1] else int(pool_id),
            account=to_normalized_address(values[0]),
            timestamp=int(values[2]),
            status=int(values[3]),
            approvals=int(values[4]),
            rejections=int(values[5]),
            peer_id=values[6],
            index=int(values[7]),
        )

    @staticmethod
    def web3_result_to_peer(peer_id: Any, raw: Sequence[Any]) -> PoolPeer:
        # (member, lockedTokens)
        _, locked_tokens = tuple(raw)
        return PoolPeer(peer_id=to_bytes32_hex(peer_id), locked_tokens=int(locked_tokens))

    @staticmethod
    def placeholder_peer(peer_id: Any) -> PoolPeer:
        return PoolPeer(peer_id=to_bytes32_hex(peer_id), is_placeholder=True)

    @staticmethod
    def placeholder_member(address: str) -> PoolMember:
        return PoolMember(address=to_normalized_address(address), is_placeholder=True)

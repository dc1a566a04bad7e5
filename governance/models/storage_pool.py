from typing import Tuple

from pydantic import BaseModel, ConfigDict


class PoolJoinRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    pool_id: int
    account: str
    peer_id: str
    timestamp: int = 0
    status: int = 0
    approvals: int = 0
    rejections: int = 0
    index: int = 0


class PoolPeer(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # bytes32 form as stored on chain, 0x-prefixed hex
    peer_id: str
    locked_tokens: int = 0
    # True when getPeerIdInfo failed and zero locked tokens were substituted
    is_placeholder: bool = False


class PoolMember(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    address: str
    member_index: int = 0
    peers: Tuple[PoolPeer, ...] = ()
    is_placeholder: bool = False

    @property
    def total_locked_tokens(self) -> int:
        return sum(peer.locked_tokens for peer in self.peers)


class StoragePool(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    pool_id: int
    name: str = ""
    region: str = ""
    creator: str = ""
    required_tokens: int = 0
    min_ping_time: int = 0
    max_challenge_response_period: int = 0
    member_count: int = 0
    max_members: int = 0
    join_requests: Tuple[PoolJoinRequest, ...] = ()
    members: Tuple[PoolMember, ...] = ()

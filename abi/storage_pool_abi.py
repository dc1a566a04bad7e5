from abi.distribution_abi import DISTRIBUTION_ABI
from abi.governance_abi import _function, _view

STORAGE_POOL_ABI = [
    *DISTRIBUTION_ABI,
    _view("createPoolLockAmount", outputs=[("", "uint256")]),
    _view(
        "pools",
        [("poolId", "uint32")],
        [
            ("creator", "address"),
            ("id", "uint32"),
            ("maxChallengeResponsePeriod", "uint32"),
            ("memberCount", "uint32"),
            ("maxMembers", "uint32"),
            ("requiredTokens", "uint256"),
            ("minPingTime", "uint256"),
            ("name", "string"),
            ("region", "string"),
        ],
    ),
    _view("joinRequestKeys", [("poolId", "uint32"), ("index", "uint256")], [("", "string")]),
    _view(
        "joinRequests",
        [("poolId", "uint32"), ("peerId", "string")],
        [
            ("account", "address"),
            ("poolId", "uint32"),
            ("timestamp", "uint32"),
            ("status", "uint8"),
            ("approvals", "uint256"),
            ("rejections", "uint256"),
            ("peerId", "string"),
            ("index", "uint32"),
        ],
    ),
    _view("getPoolMembers", [("poolId", "uint32")], [("", "address[]")]),
    _view("getMemberIndex", [("poolId", "uint32"), ("member", "address")], [("", "uint256")]),
    _view("getMemberPeerIds", [("poolId", "uint32"), ("member", "address")], [("", "bytes32[]")]),
    _view("getPeerIdInfo", [("poolId", "uint32"), ("peerId", "bytes32")], [("member", "address"), ("lockedTokens", "uint256")]),
    _function("createPool", [("name", "string"), ("maxMembers", "uint32"), ("requiredTokens", "uint256"), ("peerId", "string")]),
    _function("deletePool", [("poolId", "uint32")]),
    _function("addMember", [("poolId", "uint32"), ("member", "address"), ("peerId", "string")]),
    _function("removeMemberPeerId", [("poolId", "uint32"), ("peerId", "string")]),
    _function("approveJoinRequest", [("poolId", "uint32"), ("peerId", "string")]),
    _function("cancelJoinRequest", [("poolId", "uint32"), ("peerId", "string")]),
    _function("setRequiredTokens", [("poolId", "uint32"), ("newRequired", "uint256")]),
    _function("setCreatePoolLockAmount", [("amount", "uint256")]),
    _function("emergencyRecoverTokens", [("amount", "uint256")]),
]

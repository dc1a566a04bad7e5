from abi.governance_abi import GOVERNANCE_ABI, _error, _event, _function, _view

TGE_INITIATED_EVENT = _event(
    "TGEInitiated",
    ("totalRequiredTokens", "uint256", False),
    ("timestamp", "uint256", False),
)

VESTING_CAP_OUTPUTS = [
    ("totalAllocation", "uint256"),
    ("name", "bytes32"),
    ("cliff", "uint256"),
    ("vestingTerm", "uint256"),
    ("vestingPlan", "uint256"),
    ("initialRelease", "uint256"),
    ("startDate", "uint256"),
    ("allocatedToWallets", "uint256"),
]

VESTING_WALLET_OUTPUTS = [
    ("capId", "uint256"),
    ("name", "bytes32"),
    ("amount", "uint256"),
    ("claimed", "uint256"),
]

_DISTRIBUTION_COMMON = [
    *GOVERNANCE_ABI,
    _view("capIds", [("", "uint256")], [("", "uint256")]),
    _view("getWalletsInCap", [("capId", "uint256")], [("", "address[]")]),
    _function("initiateTGE"),
    _function("transferBackToStorage", [("amount", "uint256")]),
    _error("CliffNotReached", ("currentTime", "uint256"), ("startDate", "uint256"), ("cliffEnd", "uint256")),
    _error("NothingToClaim"),
    _error("CapHasWallets"),
    _error("StartDateNotSet", ("capId", "uint256")),
    TGE_INITIATED_EVENT,
]

DISTRIBUTION_ABI = [
    *_DISTRIBUTION_COMMON,
    _view("vestingCaps", [("", "uint256")], VESTING_CAP_OUTPUTS),
    _view("vestingWallets", [("", "address"), ("", "uint256")], VESTING_WALLET_OUTPUTS),
    _function(
        "addVestingCap",
        [
            ("capId", "uint256"),
            ("name", "bytes32"),
            ("startDate", "uint256"),
            ("totalAllocation", "uint256"),
            ("cliff", "uint256"),
            ("vestingTerm", "uint256"),
            ("vestingPlan", "uint256"),
            ("initialRelease", "uint256"),
        ],
    ),
]

SUBSTRATE_REWARDS_UPDATED_EVENT = _event(
    "SubstrateRewardsUpdated",
    ("wallet", "address", True),
    ("amount", "uint256", False),
)
ADDRESSES_ADDED_EVENT = _event("AddressesAdded", ("count", "uint256", False))
ADDRESS_REMOVED_EVENT = _event("AddressRemoved", ("ethereumAddr", "address", True))

TESTNET_MINING_ABI = [
    *_DISTRIBUTION_COMMON,
    _view("vestingCaps", [("", "uint256")], [*VESTING_CAP_OUTPUTS, ("maxRewardsPerMonth", "uint256"), ("ratio", "uint256")]),
    _view(
        "vestingWallets",
        [("", "address"), ("", "uint256")],
        [*VESTING_WALLET_OUTPUTS, ("monthlyClaimedRewards", "uint256"), ("lastClaimMonth", "uint256")],
    ),
    _function(
        "addVestingCap",
        [
            ("capId", "uint256"),
            ("name", "bytes32"),
            ("startDate", "uint256"),
            ("totalAllocation", "uint256"),
            ("cliff", "uint256"),
            ("vestingTerm", "uint256"),
            ("vestingPlan", "uint256"),
            ("initialRelease", "uint256"),
            ("maxRewardsPerMonth", "uint256"),
            ("ratio", "uint256"),
        ],
    ),
    _view("getSubstrateRewards", [("wallet", "address")], [("lastUpdate", "uint256"), ("amount", "uint256")]),
    _function("updateSubstrateRewards", [("wallet", "address"), ("amount", "uint256")]),
    _function("addAddress", [("ethereumAddr", "address"), ("substrateAddr", "bytes")]),
    _function("batchAddAddresses", [("ethereumAddrs", "address[]"), ("substrateAddrs", "bytes[]")]),
    _function("batchRemoveAddresses", [("ethereumAddrs", "address[]")]),
    SUBSTRATE_REWARDS_UPDATED_EVENT,
    ADDRESSES_ADDED_EVENT,
    ADDRESS_REMOVED_EVENT,
]

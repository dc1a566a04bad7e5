from abi.governance_abi import GOVERNANCE_ABI, _error, _event, _function, _view

WALLET_WHITELISTED_OP_EVENT = _event(
    "WalletWhitelistedOp",
    ("target", "address", True),
    ("operator", "address", True),
    ("whitelistLockTime", "uint64", False),
    ("operation", "uint8", False),
)
BLACKLIST_OP_EVENT = _event(
    "BlackListOp",
    ("account", "address", True),
    ("by", "address", True),
    ("status", "uint8", False),
)
SUPPORTED_CHAIN_CHANGED_EVENT = _event(
    "SupportedChainChanged",
    ("chainId", "uint256", True),
    ("caller", "address", False),
)
BRIDGE_OPERATION_DETAILS_EVENT = _event(
    "BridgeOperationDetails",
    ("operator", "address", True),
    ("opType", "uint8", False),
    ("amount", "uint256", False),
    ("chainId", "uint256", False),
    ("timestamp", "uint256", False),
)

TOKEN_ABI = [
    *GOVERNANCE_ABI,
    _view("timeConfigs", [("", "address")], [
        ("lastActivityTime", "uint64"),
        ("roleChangeTimeLock", "uint64"),
        ("whitelistLockTime", "uint64"),
    ]),
    _function("transferFromContract", [("to", "address"), ("amount", "uint256")]),
    _function("setBridgeOpNonce", [("chainId", "uint256"), ("nonce", "uint256")]),
    _function("bridgeOp", [("amount", "uint256"), ("chainId", "uint256"), ("nonce", "uint256"), ("opType", "uint8")]),
    _error("NotWhitelisted", ("to", "address")),
    _error("LocktimeActive", ("to", "address")),
    _error("ExceedsSupply", ("requested", "uint256"), ("supply", "uint256")),
    _error("LowAllowance", ("limit", "uint256"), ("amount", "uint256")),
    _error("UsedNonce", ("nonce", "uint256")),
    _error("Unsupported", ("chain", "uint256")),
    _error("ExceedsMaximumSupply", ("requested", "uint256"), ("maxSupply", "uint256")),
    _error("AlreadyWhitelisted", ("target", "address")),
    WALLET_WHITELISTED_OP_EVENT,
    BLACKLIST_OP_EVENT,
    SUPPORTED_CHAIN_CHANGED_EVENT,
    BRIDGE_OPERATION_DETAILS_EVENT,
]

# --- Shared multi-role governance module (token, vesting, airdrop, mining, storage pool, reward engine) ---


def _inputs(*params):
    return [{"name": name, "type": type_} for name, type_ in params]


def _function(name, inputs=(), outputs=(), state_mutability="nonpayable"):
    return {
        "inputs": _inputs(*inputs),
        "name": name,
        "outputs": _inputs(*outputs),
        "stateMutability": state_mutability,
        "type": "function",
    }


def _view(name, inputs=(), outputs=()):
    return _function(name, inputs, outputs, "view")


def _error(name, *params):
    return {"inputs": _inputs(*params), "name": name, "type": "error"}


def _event(name, *params):
    return {
        "anonymous": False,
        "inputs": [{"indexed": indexed, "name": n, "type": t} for n, t, indexed in params],
        "name": name,
        "type": "event",
    }


PROPOSAL_CONFIG_COMPONENTS = [
    {"name": "expiryTime", "type": "uint64"},
    {"name": "executionTime", "type": "uint64"},
    {"name": "approvals", "type": "uint16"},
    {"name": "status", "type": "uint8"},
]

PROPOSALS_FUNCTION = {
    "inputs": [{"name": "", "type": "bytes32"}],
    "name": "proposals",
    "outputs": [
        {"name": "proposalType", "type": "uint8"},
        {"name": "target", "type": "address"},
        {"name": "id", "type": "uint40"},
        {"name": "role", "type": "bytes32"},
        {"name": "tokenAddress", "type": "address"},
        {"name": "amount", "type": "uint96"},
        {"name": "config", "type": "tuple", "components": PROPOSAL_CONFIG_COMPONENTS},
    ],
    "stateMutability": "view",
    "type": "function",
}

ROLE_CONFIGS_FUNCTION = _view("roleConfigs", [("role", "bytes32")], [("transactionLimit", "uint240"), ("quorum", "uint16")])

# --- Events ---
PROPOSAL_CREATED_EVENT = _event(
    "ProposalCreated",
    ("proposalId", "bytes32", True),
    ("proposer", "address", True),
    ("proposalType", "uint8", False),
    ("target", "address", False),
    ("amount", "uint96", False),
)
PROPOSAL_APPROVED_EVENT = _event("ProposalApproved", ("proposalId", "bytes32", True), ("approver", "address", True))
PROPOSAL_EXECUTED_EVENT = _event("ProposalExecuted", ("proposalId", "bytes32", True), ("executor", "address", True))
TRANSACTION_LIMIT_UPDATED_EVENT = _event("TransactionLimitUpdated", ("role", "bytes32", True), ("limit", "uint240", False))
QUORUM_UPDATED_EVENT = _event("QuorumUpdated", ("role", "bytes32", True), ("quorum", "uint16", False))

GOVERNANCE_EVENTS_ABI = [
    PROPOSAL_CREATED_EVENT,
    PROPOSAL_APPROVED_EVENT,
    PROPOSAL_EXECUTED_EVENT,
    TRANSACTION_LIMIT_UPDATED_EVENT,
    QUORUM_UPDATED_EVENT,
]

GOVERNANCE_ERRORS_ABI = [
    _error("ExistingActiveProposal", ("target", "address")),
    _error("ProposalErr", ("code", "uint8")),
    _error("InsufficientApprovals", ("approvals", "uint16"), ("quorum", "uint16")),
    _error("InvalidProposalType", ("proposalType", "uint8")),
    _error("ExecutionDelayNotMet", ("executionTime", "uint256")),
    _error("InvalidQuorumErr", ("role", "bytes32"), ("quorum", "uint16")),
    _error("TimeLockActive", ("account", "address")),
    _error("InvalidAddress"),
    _error("AccessControlUnauthorizedAccount", ("account", "address"), ("neededRole", "bytes32")),
    _error("AmountMustBePositive"),
]

GOVERNANCE_ABI = [
    _view("proposalCount", outputs=[("", "uint256")]),
    _view("proposalRegistry", [("", "uint256")], [("", "bytes32")]),
    PROPOSALS_FUNCTION,
    _view("hasProposalApproval", [("proposalId", "bytes32"), ("account", "address")], [("", "bool")]),
    _function(
        "createProposal",
        [
            ("proposalType", "uint8"),
            ("id", "uint40"),
            ("target", "address"),
            ("role", "bytes32"),
            ("amount", "uint96"),
            ("tokenAddress", "address"),
        ],
        [("", "bytes32")],
    ),
    _function("approveProposal", [("proposalId", "bytes32")]),
    _function("executeProposal", [("proposalId", "bytes32")]),
    _function("cleanupExpiredProposals", [("maxProposalsToCheck", "uint256")]),
    ROLE_CONFIGS_FUNCTION,
    _function("setRoleTransactionLimit", [("role", "bytes32"), ("limit", "uint240")]),
    _function("setRoleQuorum", [("role", "bytes32"), ("quorum", "uint16")]),
    _view("hasRole", [("role", "bytes32"), ("account", "address")], [("", "bool")]),
    _function("emergencyAction", [("op", "uint8")]),
    _function("upgradeToAndCall", [("newImplementation", "address"), ("data", "bytes")], state_mutability="payable"),
    _view("pendingImplementation", outputs=[("", "address")]),
    *GOVERNANCE_ERRORS_ABI,
    *GOVERNANCE_EVENTS_ABI,
]

from typing import Any, Dict, Optional


class GovernanceError(Exception):
    """Base class for every failure surfaced by the governance sync/dispatch layer."""


# --- Connectivity ---


class ConnectivityError(GovernanceError):
    pass


class NotConnectedError(ConnectivityError):
    def __init__(self, message: str = "Please connect your wallet"):
        super().__init__(message)


class ContractUnresolvedError(ConnectivityError):
    def __init__(self, contract_type: Optional[str] = None, chain_id: Optional[int] = None):
        self.contract_type = contract_type
        self.chain_id = chain_id
        super().__init__(f"Contract address not found for '{contract_type}' on chain {chain_id}")


class RpcUnavailableError(ConnectivityError):
    pass


# --- Rate limiting / partial reads (recovered locally) ---


class RateLimitError(GovernanceError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class PartialReadFailure(GovernanceError):
    def __init__(self, unit: str, cause: Optional[BaseException] = None):
        self.unit = unit
        self.cause = cause
        super().__init__(f"Failed to read {unit}: {cause}")


# --- Writes ---


class SimulationRevert(GovernanceError):
    """
    Raised when the dry-run of a write would revert.
    `message` is the human readable text; `raw_message` is what the node returned.
    """

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        error_name: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        raw_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.function_name = function_name
        self.error_name = error_name
        self.params = params or {}
        self.raw_message = raw_message


class SubmissionFailure(GovernanceError):
    def __init__(self, message: str, tx_hash: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.tx_hash = tx_hash
        self.status = status


# --- Client side validation ---


class ValidationError(GovernanceError):
    pass


class UnknownRoleError(ValidationError):
    def __init__(self, role: str):
        self.role = role
        super().__init__(f"Invalid role: {role}")


class InvalidQuorumError(ValidationError):
    def __init__(self, quorum: Any):
        self.quorum = quorum
        super().__init__(f"Quorum must be a number between 1 and 65535, got {quorum}")


class InvalidAddressError(ValidationError):
    def __init__(self, address: Any, label: str = "address"):
        self.address = address
        super().__init__(f"Invalid {label}: {address}")


class InvalidAmountError(ValidationError):
    pass


class TransactionNotFoundError(GovernanceError):
    def __init__(self, tx_hash: str):
        self.tx_hash = tx_hash
        super().__init__(
            f"Transaction {tx_hash} not found on the current network. Try entering the nonce directly."
        )

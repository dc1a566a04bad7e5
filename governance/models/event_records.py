from pydantic import BaseModel, ConfigDict


class BridgeOperationRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    operator: str
    op_type: int
    amount: int
    chain_id: int
    timestamp: int
    block_number: int
    log_index: int
    transaction_hash: str | None = None


class NonceRecord(BaseModel):
    """A SupportedChainChanged event. Identity is (chain_id, block_number, log_index)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chain_id: int
    caller: str
    block_number: int
    log_index: int
    transaction_hash: str | None = None


class TgeStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    is_initiated: bool = False
    total_required_tokens: int | None = None
    timestamp: int | None = None
    block_number: int | None = None


class SubstrateRewardRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    wallet: str
    last_update: int = 0
    amount: int = 0


class TimeConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    last_activity_time: int = 0
    role_change_time_lock: int = 0
    whitelist_lock_time: int = 0


class TransactionDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    tx_hash: str
    nonce: int
    sender: str
    status: str

from pydantic import BaseModel, ConfigDict


class AddressSetEntry(BaseModel):
    """Current membership of one address in a whitelist, blacklist or substrate mapping."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    address: str
    status: bool = True
    operator: str | None = None
    lock_time: int | None = None
    amount: int | None = None
    block_number: int = 0
    log_index: int = 0


class SetOperationEvent(BaseModel):
    """One add/remove observation feeding set reconstruction, positioned in chain order."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    address: str
    operation: int
    operator: str | None = None
    lock_time: int | None = None
    amount: int | None = None
    block_number: int = 0
    log_index: int = 0

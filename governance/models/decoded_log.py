from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class DecodedLog(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    event: str
    args: Dict[str, Any] = Field(default_factory=dict)
    address: str | None = None
    block_number: int = 0
    log_index: int = 0
    transaction_hash: str | None = None

    @property
    def chain_position(self) -> tuple:
        return self.block_number, self.log_index

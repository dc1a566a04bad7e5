from pydantic import BaseModel, ConfigDict


class RoleConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    role: str
    role_name: str | None = None
    transaction_limit: int = 0
    quorum: int = 0

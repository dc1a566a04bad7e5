from typing import Tuple

from pydantic import BaseModel, ConfigDict


class VestingWalletInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    cap_id: int
    address: str
    name: str = ""
    amount: int = 0
    claimed: int = 0
    monthly_claimed_rewards: int | None = None
    last_claim_month: int | None = None
    # True when the (wallet, cap) detail read failed and zero values were substituted
    is_placeholder: bool = False


class VestingCap(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    cap_id: int
    name: str = ""
    total_allocation: int = 0
    cliff: int = 0
    vesting_term: int = 0
    vesting_plan: int = 0
    initial_release: int = 0
    start_date: int = 0
    allocated_to_wallets: int = 0
    max_rewards_per_month: int | None = None
    ratio: int | None = None
    wallets: Tuple[str, ...] = ()
    wallet_details: Tuple[VestingWalletInfo, ...] = ()

from typing import Any, List, Sequence

from governance.models.vesting_cap import VestingCap, VestingWalletInfo
from utils.formatter_utils import bytes32_to_string, to_normalized_address

BASE_CAP_FIELDS = 8
MINING_CAP_FIELDS = 10
BASE_WALLET_FIELDS = 4
MINING_WALLET_FIELDS = 6


def _optional_int(values: Sequence[Any], index: int):
    return int(values[index]) if len(values) > index else None


class VestingMapper(object):
    @staticmethod
    def web3_result_to_vesting_cap(
        cap_id: int, raw: Sequence[Any], wallets: List[str], wallet_details: List[VestingWalletInfo]
    ) -> VestingCap:
        # [totalAllocation, name, cliff, vestingTerm, vestingPlan, initialRelease, startDate,
        #  allocatedToWallets, maxRewardsPerMonth?, ratio?]
        values = tuple(raw)
        if len(values) < BASE_CAP_FIELDS:
            raise ValueError(f"Unexpected vesting cap layout for cap {cap_id}: {raw!r}")

        return VestingCap(
            cap_id=int(cap_id),
            total_allocation=int(values[0]),
            name=bytes32_to_string(values[1]),
            cliff=int(values[2]),
            vesting_term=int(values[3]),
            vesting_plan=int(values[4]),
            initial_release=int(values[5]),
            start_date=int(values[6]),
            allocated_to_wallets=int(values[7]),
            max_rewards_per_month=_optional_int(values, 8),
            ratio=_optional_int(values, 9),
            wallets=tuple(to_normalized_address(w) for w in wallets),
            wallet_details=tuple(wallet_details),
        )

    @staticmethod
    def web3_result_to_wallet_info(address: str, cap_id: int, raw: Sequence[Any]) -> VestingWalletInfo:
        # (capId, name, amount, claimed, monthlyClaimedRewards?, lastClaimMonth?)
        values = tuple(raw)
        if len(values) < BASE_WALLET_FIELDS:
            raise ValueError(f"Unexpected vesting wallet layout for {address} in cap {cap_id}: {raw!r}")

        return VestingWalletInfo(
            cap_id=int(values[0]) if values[0] is not None else int(cap_id),
            address=to_normalized_address(address),
            name=bytes32_to_string(values[1]),
            amount=int(values[2]),
            claimed=int(values[3]),
            monthly_claimed_rewards=_optional_int(values, 4),
            last_claim_month=_optional_int(values, 5),
        )

    @staticmethod
    def placeholder_wallet_info(address: str, cap_id: int) -> VestingWalletInfo:
        return VestingWalletInfo(
            cap_id=int(cap_id),
            address=to_normalized_address(address),
            name="",
            amount=0,
            claimed=0,
            is_placeholder=True,
        )

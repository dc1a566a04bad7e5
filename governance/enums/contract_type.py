from enum import Enum


class ContractType(str, Enum):
    TOKEN = "token"
    VESTING = "vesting"
    AIRDROP = "airdrop"
    TESTNET_MINING = "testnet_mining"
    STAKING = "staking"
    STORAGE_POOL = "storage_pool"
    REWARD_ENGINE = "reward_engine"
    STAKING_ENGINE_LINEAR = "staking_engine_linear"


# Targets exposing the proposal registry (proposalCount / proposalRegistry / proposals)
GOVERNED_CONTRACT_TYPES = frozenset(
    {
        ContractType.TOKEN,
        ContractType.VESTING,
        ContractType.AIRDROP,
        ContractType.TESTNET_MINING,
        ContractType.STORAGE_POOL,
        ContractType.REWARD_ENGINE,
    }
)

# Targets that carry a vesting cap table and TGE
DISTRIBUTION_CONTRACT_TYPES = frozenset(
    {
        ContractType.VESTING,
        ContractType.AIRDROP,
        ContractType.TESTNET_MINING,
    }
)

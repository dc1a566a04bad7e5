from abi.distribution_abi import DISTRIBUTION_ABI, TESTNET_MINING_ABI
from abi.governance_abi import GOVERNANCE_ABI
from abi.storage_pool_abi import STORAGE_POOL_ABI
from abi.token_abi import TOKEN_ABI
from governance.enums.contract_type import ContractType

CONTRACT_ABIS = {
    ContractType.TOKEN: TOKEN_ABI,
    ContractType.VESTING: DISTRIBUTION_ABI,
    ContractType.AIRDROP: DISTRIBUTION_ABI,
    ContractType.TESTNET_MINING: TESTNET_MINING_ABI,
    ContractType.STORAGE_POOL: STORAGE_POOL_ABI,
    ContractType.REWARD_ENGINE: DISTRIBUTION_ABI,
    ContractType.STAKING: GOVERNANCE_ABI,
    ContractType.STAKING_ENGINE_LINEAR: GOVERNANCE_ABI,
}


def get_contract_abi(contract_type: ContractType) -> list:
    return CONTRACT_ABIS[ContractType(contract_type)]

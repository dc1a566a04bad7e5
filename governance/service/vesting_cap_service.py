from typing import List

from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.mappers.vesting_mapper import VestingMapper
from governance.models.vesting_cap import VestingCap, VestingWalletInfo
from governance.service.sparse_collection_walker import SparseCollectionWalker, walk_with_placeholders
from utils.exceptions import PartialReadFailure
from utils.logger_utils import get_logger

logger = get_logger("Vesting Cap Service")


class VestingCapService:
    """
    Builds the vesting cap table of a distribution contract.
    Cap ids come from probing `capIds(i)`; each cap's wallet list from `getWalletsInCap`.
    """

    def __init__(self, access_port: BlockchainAccessPort, contract_address: str, abi: List[dict]):
        self._access_port = access_port
        self._contract_address = contract_address
        self._abi = abi

    async def _read(self, function_name: str, *args):
        return await self._access_port.read_contract(self._contract_address, function_name, list(args), self._abi)

    async def read_cap_ids(self) -> List[int]:
        async def read_cap_id(index: int) -> int:
            return int(await self._read("capIds", index))

        return await SparseCollectionWalker(read_cap_id, label="capIds").walk()

    async def read_wallet_info(self, wallet: str, cap_id: int) -> VestingWalletInfo:
        raw = await self._read("vestingWallets", wallet, cap_id)
        return VestingMapper.web3_result_to_wallet_info(wallet, cap_id, raw)

    async def read_cap(self, cap_id: int) -> VestingCap:
        raw_cap = await self._read("vestingCaps", cap_id)
        wallets = list(await self._read("getWalletsInCap", cap_id))

        wallet_details = await walk_with_placeholders(
            wallets,
            lambda wallet: self.read_wallet_info(wallet, cap_id),
            lambda wallet: VestingMapper.placeholder_wallet_info(wallet, cap_id),
            label=f"wallet info in cap {cap_id} for",
        )
        return VestingMapper.web3_result_to_vesting_cap(cap_id, raw_cap, wallets, wallet_details)

    async def read_cap_table(self) -> List[VestingCap]:
        cap_ids = await self.read_cap_ids()
        caps: List[VestingCap] = []
        for cap_id in cap_ids:
            try:
                caps.append(await self.read_cap(cap_id))
            except Exception as e:
                logger.error(str(PartialReadFailure(f"vesting cap {cap_id}", e)))
        logger.info(f"Loaded {len(caps)}/{len(cap_ids)} vesting caps from {self._contract_address}")
        return caps

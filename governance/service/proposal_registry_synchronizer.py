from typing import List

from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.mappers.proposal_mapper import ProposalMapper
from governance.models.proposal import Proposal
from utils.formatter_utils import ZERO_HASH, to_bytes32_hex
from utils.logger_utils import get_logger

logger = get_logger("Proposal Registry Synchronizer")


class ProposalRegistrySynchronizer:
    def __init__(self, access_port: BlockchainAccessPort, contract_address: str, abi: List[dict]):
        self._access_port = access_port
        self._contract_address = contract_address
        self._abi = abi

    async def read_proposal_count(self) -> int:
        return int(await self._access_port.read_contract(self._contract_address, "proposalCount", [], self._abi))

    async def read_proposal_id(self, index: int) -> str:
        raw = await self._access_port.read_contract(self._contract_address, "proposalRegistry", [index], self._abi)
        return to_bytes32_hex(raw)

    async def read_proposal(self, proposal_id: str) -> Proposal:
        raw = await self._access_port.read_contract(self._contract_address, "proposals", [proposal_id], self._abi)
        return ProposalMapper.web3_result_to_proposal(proposal_id, raw)

    async def sync(self) -> List[Proposal]:
        """
        Walks registry slots [0, proposalCount) one by one. A slot that cannot be read or decoded
        is logged and skipped; it never hides the other proposals.
        """
        count = await self.read_proposal_count()
        logger.info(f"Starting to fetch proposals from {self._contract_address}. Total count: {count}")

        proposals: List[Proposal] = []
        for index in range(count):
            try:
                proposal_id = await self.read_proposal_id(index)
                if proposal_id == ZERO_HASH:
                    logger.warning(f"No proposal ID found for index {index}")
                    continue
                proposals.append(await self.read_proposal(proposal_id))
            except Exception as e:
                logger.error(f"Error processing proposal {index}: {e}")

        logger.info(f"Fetched {len(proposals)}/{count} proposals")
        return proposals

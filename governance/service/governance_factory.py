from typing import Optional

from abi.contract_abis import get_contract_abi
from config.settings import Settings
from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.access.web3_access_port import Web3AccessPort
from governance.enums.contract_type import ContractType
from governance.service.chunked_log_fetcher import ChunkedLogFetcher
from governance.service.governance_action_dispatcher import GovernanceActionDispatcher
from governance.service.governance_synchronizer import GovernanceSynchronizer
from governance.service.revert_decoder import RevertDecoder
from utils.logger_utils import get_logger

logger = get_logger("Governance Factory")


class GovernanceContext(object):
    """Access port, synchronizer and dispatcher for one target, sharing one role config cache."""

    def __init__(
        self,
        settings: Settings,
        contract_type: Optional[str] = None,
        access_port: Optional[BlockchainAccessPort] = None,
    ):
        self.contract_type = ContractType(contract_type or settings.governance.active_contract)
        self.contract_address = settings.governance.address_map().get(self.contract_type.value)
        self.access_port = access_port or Web3AccessPort.from_settings(settings.chain)
        abi = get_contract_abi(self.contract_type)

        log_fetcher = ChunkedLogFetcher(
            self.access_port,
            chunk_size=settings.log_fetcher.chunk_size,
            chunk_delay_seconds=settings.log_fetcher.chunk_delay_seconds,
        )
        self.synchronizer = GovernanceSynchronizer(
            self.access_port,
            self.contract_type,
            self.contract_address,
            log_fetcher,
            abi=abi,
            from_block=settings.log_fetcher.from_block,
            quorum_fallback=settings.governance.default_quorum_fallback,
        )
        self.dispatcher = GovernanceActionDispatcher(
            self.access_port,
            self.contract_type,
            self.contract_address,
            abi,
            revert_decoder=RevertDecoder(token_symbol=settings.chain.token_symbol),
            role_config_cache=self.synchronizer.role_config_cache,
            gas_price_bump_percent=settings.governance.cancel_gas_price_bump_percent,
        )
        logger.info(
            f"Governance target {self.contract_type.value} at {self.contract_address or 'unresolved address'} "
            f"on chain {self.access_port.chain_id}"
        )

    async def close(self) -> None:
        close = getattr(self.access_port, "close", None)
        if close is not None:
            await close()

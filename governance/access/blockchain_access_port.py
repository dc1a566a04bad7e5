from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from governance.models.decoded_log import DecodedLog


class BlockchainAccessPort(ABC):
    """
    Everything the governance layer needs from a node and a signer.
    Implementations raise RateLimitError for block-range rejections on `get_logs`,
    RpcUnavailableError when the node cannot be reached, and let contract reverts propagate.
    """

    @property
    @abstractmethod
    def account(self) -> Optional[str]:
        """Signer address, or None when no signing identity is connected."""

    @property
    @abstractmethod
    def chain_id(self) -> int:
        pass

    @abstractmethod
    async def read_contract(self, address: str, function_name: str, args: Sequence[Any], abi: List[dict]) -> Any:
        pass

    @abstractmethod
    async def get_logs(
        self, address: str, event_abi: dict, from_block: int, to_block: int | str
    ) -> List[DecodedLog]:
        pass

    @abstractmethod
    async def get_block_number(self) -> int:
        pass

    @abstractmethod
    async def simulate_contract(
        self,
        address: str,
        function_name: str,
        args: Sequence[Any],
        abi: List[dict],
        account: Optional[str] = None,
        value: int = 0,
    ) -> Dict[str, Any]:
        """Dry-runs the call and returns a prepared transaction; raises the node's revert error."""

    @abstractmethod
    async def send_transaction(self, prepared: Dict[str, Any]) -> str:
        pass

    @abstractmethod
    async def wait_for_receipt(self, tx_hash: str, timeout: int = 120) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def get_bytecode(self, address: str) -> bytes:
        pass

    @abstractmethod
    async def get_gas_price(self) -> int:
        pass

    @abstractmethod
    async def get_transaction(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        pass

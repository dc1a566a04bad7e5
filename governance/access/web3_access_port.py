from typing import Any, Dict, List, Optional, Sequence

from eth_utils import to_checksum_address
from web3 import AsyncWeb3, Web3
from web3.exceptions import TransactionNotFound, Web3Exception

from config.settings import ChainSettings
from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.mappers.event_mapper import EventMapper
from governance.models.decoded_log import DecodedLog
from governance.providers.provider_factory import get_failover_async_provider_from_uris
from utils.async_utils import NETWORK_EXCEPTIONS, async_retry
from utils.exceptions import NotConnectedError, RateLimitError, RpcUnavailableError
from utils.logger_utils import get_logger
from utils.rpc_utils import is_block_range_error

logger = get_logger("Web3 Access Port")


class Web3AccessPort(BlockchainAccessPort):
    def __init__(
        self,
        web3: AsyncWeb3,
        chain_id: int,
        private_key: Optional[str] = None,
        default_account: Optional[str] = None,
    ):
        self._web3 = web3
        self._chain_id = chain_id
        self._signer = web3.eth.account.from_key(private_key) if private_key else None
        self._default_account = to_checksum_address(default_account) if default_account else None

    @classmethod
    def from_settings(cls, chain_settings: ChainSettings) -> "Web3AccessPort":
        provider = get_failover_async_provider_from_uris(chain_settings.provider_uri_list, chain_settings.rpc_timeout)
        private_key = chain_settings.signer_private_key.get_secret_value() if chain_settings.signer_private_key else None
        return cls(AsyncWeb3(provider), chain_settings.chain_id, private_key=private_key)

    @property
    def account(self) -> Optional[str]:
        if self._signer is not None:
            return self._signer.address
        return self._default_account

    @property
    def chain_id(self) -> int:
        return self._chain_id

    def _contract(self, address: str, abi: List[dict]):
        return self._web3.eth.contract(address=to_checksum_address(address), abi=abi)

    async def _call(self, coro_factory, description: str) -> Any:
        try:
            return await self._retrying(coro_factory)
        except NETWORK_EXCEPTIONS as e:
            raise RpcUnavailableError(f"RPC unavailable during {description}: {e}") from e

    @staticmethod
    @async_retry(max_retries=2, initial_delay=0.5)
    async def _retrying(coro_factory) -> Any:
        return await coro_factory()

    async def read_contract(self, address: str, function_name: str, args: Sequence[Any], abi: List[dict]) -> Any:
        function = self._contract(address, abi).functions[function_name](*args)
        return await self._call(function.call, f"{function_name}()")

    async def get_logs(
        self, address: str, event_abi: dict, from_block: int, to_block: int | str
    ) -> List[DecodedLog]:
        event = self._contract(address, [event_abi]).events[event_abi["name"]]()
        try:
            raw_logs = await self._call(
                lambda: event.get_logs(from_block=from_block, to_block=to_block), f"getLogs {event_abi['name']}"
            )
        except (Web3Exception, ValueError) as e:
            if is_block_range_error(e):
                raise RateLimitError(f"Provider rejected block range {from_block}-{to_block}", cause=e) from e
            raise
        return [EventMapper.web3_event_to_decoded_log(log) for log in raw_logs]

    async def get_block_number(self) -> int:
        return await self._call(lambda: self._web3.eth.block_number, "eth_blockNumber")

    async def simulate_contract(
        self,
        address: str,
        function_name: str,
        args: Sequence[Any],
        abi: List[dict],
        account: Optional[str] = None,
        value: int = 0,
    ) -> Dict[str, Any]:
        sender = account or self.account
        if sender is None:
            raise NotConnectedError()
        function = self._contract(address, abi).functions[function_name](*args)
        tx_params = {"from": to_checksum_address(sender), "value": value}

        # eth_call surfaces the revert; build_transaction then estimates gas against the same state
        await self._call(lambda: function.call(tx_params), f"simulate {function_name}()")
        prepared = await self._call(lambda: function.build_transaction(tx_params), f"build {function_name}()")
        logger.debug(f"Simulated {function_name} on {address} from {sender}")
        return dict(prepared)

    async def send_transaction(self, prepared: Dict[str, Any]) -> str:
        tx = dict(prepared)
        sender = tx.get("from") or self.account
        if sender is None:
            raise NotConnectedError()
        tx["from"] = to_checksum_address(sender)
        tx.setdefault("chainId", self._chain_id)

        if self._signer is None:
            tx_hash = await self._call(lambda: self._web3.eth.send_transaction(tx), "eth_sendTransaction")
            return Web3.to_hex(tx_hash)

        if "nonce" not in tx:
            tx["nonce"] = await self._call(
                lambda: self._web3.eth.get_transaction_count(tx["from"], "pending"), "eth_getTransactionCount"
            )
        if "gas" not in tx:
            tx["gas"] = await self._call(lambda: self._web3.eth.estimate_gas(tx), "eth_estimateGas")
        if "gasPrice" not in tx and "maxFeePerGas" not in tx:
            tx["gasPrice"] = await self.get_gas_price()

        signed = self._signer.sign_transaction(tx)
        tx_hash = await self._call(
            lambda: self._web3.eth.send_raw_transaction(signed.raw_transaction), "eth_sendRawTransaction"
        )
        return Web3.to_hex(tx_hash)

    async def wait_for_receipt(self, tx_hash: str, timeout: int = 120) -> Dict[str, Any]:
        receipt = await self._call(
            lambda: self._web3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout), "wait for receipt"
        )
        return dict(receipt)

    async def get_bytecode(self, address: str) -> bytes:
        code = await self._call(lambda: self._web3.eth.get_code(to_checksum_address(address)), "eth_getCode")
        return bytes(code)

    async def get_gas_price(self) -> int:
        return await self._call(lambda: self._web3.eth.gas_price, "eth_gasPrice")

    async def get_transaction(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        try:
            tx = await self._call(lambda: self._web3.eth.get_transaction(tx_hash), "eth_getTransactionByHash")
        except TransactionNotFound:
            return None
        return dict(tx)

    async def close(self) -> None:
        provider = self._web3.provider
        if hasattr(provider, "disconnect"):
            await provider.disconnect()

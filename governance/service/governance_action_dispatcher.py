from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from web3 import Web3
from web3.exceptions import Web3Exception

from constants.governance_constants import (
    CANCEL_GAS_PRICE_BUMP_PERCENT,
    EMPTY_INIT_DATA,
    MAX_ADDRESS_BATCH,
    MAX_CREATE_POOL_LOCK_AMOUNT,
    MAX_INITIAL_RELEASE_PERCENT,
)
from governance.access.blockchain_access_port import BlockchainAccessPort
from governance.enums.contract_type import ContractType
from governance.enums.operation import BridgeOpType, EmergencyOp
from governance.enums.proposal_type import ROLE_PROPOSAL_TYPES, ProposalType
from governance.models.event_records import TransactionDetails
from governance.models.role_config import RoleConfig
from governance.service.revert_decoder import RevertDecoder
from governance.service.role_config_cache import RoleConfigCache
from governance.service.role_hash_resolver import resolve_role
from utils.exceptions import (
    ContractUnresolvedError,
    GovernanceError,
    InvalidAmountError,
    NotConnectedError,
    PartialReadFailure,
    SubmissionFailure,
    TransactionNotFoundError,
    ValidationError,
)
from utils.formatter_utils import (
    ZERO_ADDRESS,
    ZERO_HASH,
    parse_token_amount,
    string_to_bytes32,
    text_to_hex,
    to_bytes32_hex,
    to_normalized_address,
)
from utils.logger_utils import get_logger
from utils.validation_utils import validate_address, validate_batch, validate_positive_amount, validate_quorum

logger = get_logger("Governance Action Dispatcher")

TokenAmount = Union[str, int, Decimal]

MAX_UINT40 = 2**40 - 1
MAX_UINT96 = 2**96 - 1
MAX_UINT240 = 2**240 - 1
CANCEL_TX_GAS = 21000


def _check_bound(value: int, maximum: int, label: str) -> int:
    if value < 0 or value > maximum:
        raise InvalidAmountError(f"{label} out of range: {value}")
    return value


def _proposal_id(proposal_id: str) -> str:
    if not isinstance(proposal_id, str) or not proposal_id.startswith("0x") or len(proposal_id) != 66:
        raise ValidationError(f"Invalid proposal id: {proposal_id}")
    return to_bytes32_hex(proposal_id)


class GovernanceActionDispatcher:
    """
    Write side of one governance target.

    Every write simulates first and only submits when the simulation passes; a would-be revert
    is raised as SimulationRevert before any gas is spent. Client-side validation and the
    signer / address preconditions run before any network call. Amount arguments are whole
    tokens (e.g. "1.5") unless the parameter name says base units.
    """

    def __init__(
        self,
        access_port: BlockchainAccessPort,
        contract_type: ContractType,
        contract_address: Optional[str],
        abi: List[dict],
        revert_decoder: Optional[RevertDecoder] = None,
        role_config_cache: Optional[RoleConfigCache] = None,
        gas_price_bump_percent: int = CANCEL_GAS_PRICE_BUMP_PERCENT,
        receipt_timeout: int = 120,
    ):
        self._access_port = access_port
        self._contract_type = ContractType(contract_type)
        self._contract_address = contract_address
        self._abi = abi
        self._revert_decoder = revert_decoder or RevertDecoder()
        self._role_config_cache = role_config_cache
        self._gas_price_bump_percent = gas_price_bump_percent
        self._receipt_timeout = receipt_timeout

    # --- Protocol ---

    def _require_signer(self) -> str:
        account = self._access_port.account
        if not account:
            raise NotConnectedError()
        return account

    def _require_contract(self) -> str:
        if not self._contract_address:
            raise ContractUnresolvedError(self._contract_type.value, self._access_port.chain_id)
        return self._contract_address

    def _require_ready(self) -> Tuple[str, str]:
        return self._require_signer(), self._require_contract()

    async def _write(self, function_name: str, args: Sequence[Any], value: int = 0) -> str:
        account, contract_address = self._require_ready()

        try:
            prepared = await self._access_port.simulate_contract(
                contract_address, function_name, list(args), self._abi, account=account, value=value
            )
        except GovernanceError:
            raise
        except Exception as e:
            revert = self._revert_decoder.decode(e, function_name)
            logger.error(f"Simulation of {function_name} failed: {revert}")
            raise revert from e

        try:
            tx_hash = await self._access_port.send_transaction(prepared)
        except GovernanceError:
            raise
        except Exception as e:
            raise SubmissionFailure(f"Failed to submit {function_name}: {e}") from e

        logger.info(f"{function_name} submitted to {contract_address}: {tx_hash}")
        return tx_hash

    async def _confirm(self, tx_hash: str, function_name: str) -> Dict[str, Any]:
        receipt = await self._access_port.wait_for_receipt(tx_hash, timeout=self._receipt_timeout)
        status = receipt.get("status")
        if status != 1:
            raise SubmissionFailure(f"Transaction {function_name} failed", tx_hash=tx_hash, status=status)
        logger.info(f"{function_name} confirmed in block {receipt.get('blockNumber')}")
        return receipt

    async def _read(self, function_name: str, args: Sequence[Any]) -> Any:
        contract_address = self._require_contract()
        return await self._access_port.read_contract(contract_address, function_name, list(args), self._abi)

    # --- Proposals ---

    async def _submit_proposal(
        self, proposal_type: int, numeric_id: int, target: str, role_id: str, amount: int, token_address: str
    ) -> str:
        args = [
            int(proposal_type),
            _check_bound(int(numeric_id), MAX_UINT40, "Proposal id"),
            validate_address(target, "target address"),
            role_id,
            _check_bound(int(amount), MAX_UINT96, "Proposal amount"),
            validate_address(token_address, "token address"),
        ]
        return await self._write("createProposal", args)

    async def create_proposal(
        self,
        proposal_type: int,
        numeric_id: int,
        target: str,
        role: str = ZERO_HASH,
        amount: TokenAmount = 0,
        token_address: str = ZERO_ADDRESS,
    ) -> str:
        try:
            proposal_type = ProposalType(int(proposal_type))
        except ValueError:
            raise ValidationError(f"Invalid proposal type: {proposal_type}") from None
        return await self._submit_proposal(
            proposal_type, numeric_id, target, resolve_role(role), parse_token_amount(amount), token_address
        )

    async def create_role_proposal(self, proposal_type: int, target: str, role: str) -> str:
        if proposal_type not in ROLE_PROPOSAL_TYPES:
            raise ValidationError(f"Role proposals must be AddRole (1) or RemoveRole (2), got {proposal_type}")
        target = validate_address(target, "target address")
        return await self._submit_proposal(proposal_type, 0, target, resolve_role(role), 0, ZERO_ADDRESS)

    async def approve_proposal(self, proposal_id: str) -> str:
        return await self._write("approveProposal", [_proposal_id(proposal_id)])

    async def execute_proposal(self, proposal_id: str) -> str:
        return await self._write("executeProposal", [_proposal_id(proposal_id)])

    async def cleanup_expired_proposals(self, max_proposals_to_check: int) -> str:
        validate_positive_amount(int(max_proposals_to_check), "max proposals to check")
        return await self._write("cleanupExpiredProposals", [int(max_proposals_to_check)])

    async def add_to_whitelist(self, address: str) -> str:
        """AddWhitelist proposal; waits for the receipt and fails if the transaction reverted."""
        address = validate_address(address)
        _, contract_address = self._require_ready()

        code = await self._access_port.get_bytecode(contract_address)
        if not code:
            raise ContractUnresolvedError(self._contract_type.value, self._access_port.chain_id)

        tx_hash = await self._submit_proposal(ProposalType.ADD_WHITELIST, 0, address, ZERO_HASH, 0, ZERO_ADDRESS)
        await self._confirm(tx_hash, "createProposal")
        return tx_hash

    async def add_vesting_wallet(self, wallet: str, cap_id: int, amount: TokenAmount, note: str) -> str:
        """AddDistributionWallets proposal. The note travels in the role slot as bytes32 text."""
        wallet = validate_address(wallet, "wallet address")
        note_bytes = to_bytes32_hex(string_to_bytes32(note))
        return await self._submit_proposal(
            ProposalType.ADD_DISTRIBUTION_WALLETS, cap_id, wallet, note_bytes, parse_token_amount(amount), ZERO_ADDRESS
        )

    # --- Role configuration ---

    async def _refresh_role_configs(self, tx_hash: str) -> None:
        # Runs after the write is mined: a failed re-read is reported, never raised
        if self._role_config_cache is None:
            return
        try:
            await self._role_config_cache.refresh()
        except Exception as e:
            failure = PartialReadFailure(f"role configs after {tx_hash}", e)
            logger.warning(f"{failure}. Cached role configs may be stale.")

    async def set_role_transaction_limit(self, role: str, limit_base_units: int) -> str:
        role_id = resolve_role(role)
        limit = _check_bound(int(limit_base_units), MAX_UINT240, "Transaction limit")
        tx_hash = await self._write("setRoleTransactionLimit", [role_id, limit])
        await self._confirm(tx_hash, "setRoleTransactionLimit")
        await self._refresh_role_configs(tx_hash)
        return tx_hash

    async def set_transaction_limit(self, role: str, limit: TokenAmount) -> str:
        return await self.set_role_transaction_limit(role, parse_token_amount(limit))

    async def set_role_quorum(self, role: str, quorum: Any) -> str:
        quorum = validate_quorum(quorum)
        role_id = resolve_role(role)
        tx_hash = await self._write("setRoleQuorum", [role_id, quorum])
        await self._confirm(tx_hash, "setRoleQuorum")
        await self._refresh_role_configs(tx_hash)
        return tx_hash

    async def check_has_role(self, address: str, role: str) -> bool:
        address = validate_address(address)
        return bool(await self._read("hasRole", [resolve_role(role), address]))

    async def check_role_config(self, role: str) -> RoleConfig:
        role_id = resolve_role(role)
        if self._role_config_cache is not None:
            return await self._role_config_cache.read_role_config(role_id)
        transaction_limit, quorum = await self._read("roleConfigs", [role_id])
        return RoleConfig(role=role_id, transaction_limit=int(transaction_limit), quorum=int(quorum))

    # --- Contract administration ---

    async def emergency_action(self, op: int) -> str:
        try:
            op = EmergencyOp(int(op))
        except ValueError:
            raise ValidationError(f"Emergency action must be pause (1) or unpause (2), got {op}") from None
        return await self._write("emergencyAction", [int(op)])

    async def upgrade_contract(self, new_implementation: str) -> Tuple[str, Optional[str]]:
        """Returns the tx hash and the pending implementation read once the upgrade is mined."""
        new_implementation = validate_address(new_implementation, "implementation address")
        tx_hash = await self._write("upgradeToAndCall", [new_implementation, EMPTY_INIT_DATA])
        await self._confirm(tx_hash, "upgradeToAndCall")
        pending = await self.read_pending_implementation()
        if pending is not None:
            logger.info(f"Pending implementation after upgrade: {pending}")
        return tx_hash, pending

    async def read_pending_implementation(self) -> Optional[str]:
        try:
            return to_normalized_address(await self._read("pendingImplementation", []))
        except (GovernanceError, Web3Exception, KeyError, ValueError) as e:
            logger.debug(f"pendingImplementation not readable on {self._contract_address}: {e}")
            return None

    # --- Token / bridge ---

    async def transfer_from_contract(self, to: str, amount: TokenAmount) -> str:
        to = validate_address(to, "recipient address")
        return await self._write("transferFromContract", [to, parse_token_amount(amount)])

    async def set_bridge_op_nonce(self, chain_id: int, nonce: int) -> str:
        return await self._write("setBridgeOpNonce", [int(chain_id), int(nonce)])

    async def bridge_op(self, amount: TokenAmount, chain_id: int, nonce: int, op_type: int) -> str:
        try:
            op_type = BridgeOpType(int(op_type))
        except ValueError:
            raise ValidationError(f"Bridge operation must be mint (1) or burn (2), got {op_type}") from None
        return await self._write("bridgeOp", [parse_token_amount(amount), int(chain_id), int(nonce), int(op_type)])

    # --- Distribution ---

    async def initiate_tge(self) -> str:
        return await self._write("initiateTGE", [])

    async def transfer_back_to_storage(self, amount: TokenAmount) -> str:
        return await self._write("transferBackToStorage", [parse_token_amount(amount)])

    @staticmethod
    def _vesting_cap_args(
        cap_id: int,
        name: str,
        start_date: int,
        total_allocation: TokenAmount,
        cliff: int,
        vesting_term: int,
        vesting_plan: int,
        initial_release: int,
    ) -> List[Any]:
        if int(initial_release) > MAX_INITIAL_RELEASE_PERCENT:
            raise ValidationError("Initial release percentage cannot be greater than 100")
        if int(vesting_plan) >= int(vesting_term):
            raise ValidationError("Vesting plan interval must be less than vesting term")
        allocation = parse_token_amount(total_allocation)
        if allocation <= 0:
            raise InvalidAmountError("Total allocation must be greater than 0")
        return [
            int(cap_id),
            string_to_bytes32(name),
            int(start_date or 0),
            allocation,
            int(cliff),
            int(vesting_term),
            int(vesting_plan),
            int(initial_release),
        ]

    async def add_vesting_cap(
        self,
        cap_id: int,
        name: str,
        start_date: int,
        total_allocation: TokenAmount,
        cliff: int,
        vesting_term: int,
        vesting_plan: int,
        initial_release: int,
    ) -> str:
        args = self._vesting_cap_args(
            cap_id, name, start_date, total_allocation, cliff, vesting_term, vesting_plan, initial_release
        )
        return await self._write("addVestingCap", args)

    async def create_cap(
        self,
        cap_id: int,
        name: str,
        start_date: int,
        total_allocation: TokenAmount,
        cliff: int,
        vesting_term: int,
        vesting_plan: int,
        initial_release: int,
        max_rewards_per_month: TokenAmount,
        ratio: int,
    ) -> str:
        """Testnet mining variant of add_vesting_cap with a monthly reward ceiling and ratio."""
        args = self._vesting_cap_args(
            cap_id, name, start_date, total_allocation, cliff, vesting_term, vesting_plan, initial_release
        )
        args += [parse_token_amount(max_rewards_per_month), int(ratio)]
        return await self._write("addVestingCap", args)

    # --- Substrate mappings ---

    async def add_substrate_address(self, ethereum_address: str, substrate_address: str) -> str:
        ethereum_address = validate_address(ethereum_address, "Ethereum address")
        if not substrate_address:
            raise ValidationError("Invalid Substrate address")
        return await self._write("addAddress", [ethereum_address, text_to_hex(substrate_address)])

    async def batch_add_substrate_addresses(
        self, ethereum_addresses: Sequence[str], substrate_addresses: Sequence[str]
    ) -> str:
        if len(ethereum_addresses) != len(substrate_addresses):
            raise ValidationError("Address arrays must have the same length")
        validate_batch(ethereum_addresses, MAX_ADDRESS_BATCH)
        addresses = [validate_address(address, "Ethereum address") for address in ethereum_addresses]
        hex_strings = [text_to_hex(address) for address in substrate_addresses]
        logger.info(f"Adding batch of {len(addresses)} substrate address mappings")
        return await self._write("batchAddAddresses", [addresses, hex_strings])

    async def batch_remove_addresses(self, ethereum_addresses: Sequence[str]) -> str:
        validate_batch(ethereum_addresses, MAX_ADDRESS_BATCH)
        addresses = [validate_address(address, "Ethereum address") for address in ethereum_addresses]
        logger.info(f"Removing batch of {len(addresses)} substrate address mappings")
        return await self._write("batchRemoveAddresses", [addresses])

    async def update_substrate_rewards(self, wallet: str, amount: TokenAmount) -> str:
        wallet = validate_address(wallet, "wallet address")
        return await self._write("updateSubstrateRewards", [wallet, parse_token_amount(amount)])

    # --- Storage pool ---

    async def create_pool(self, name: str, max_members: int, required_tokens: TokenAmount, peer_id: str) -> str:
        if not name:
            raise ValidationError("Pool name is required")
        return await self._write("createPool", [name, int(max_members), parse_token_amount(required_tokens), peer_id])

    async def delete_pool(self, pool_id: int) -> str:
        return await self._write("deletePool", [int(pool_id)])

    async def add_member(self, pool_id: int, member: str, peer_id: str) -> str:
        member = validate_address(member, "member address")
        return await self._write("addMember", [int(pool_id), member, peer_id])

    async def remove_member_peer_id(self, pool_id: int, peer_id: str) -> str:
        return await self._write("removeMemberPeerId", [int(pool_id), peer_id])

    async def approve_join_request(self, pool_id: int, peer_id: str) -> str:
        return await self._write("approveJoinRequest", [int(pool_id), peer_id])

    async def cancel_join_request(self, pool_id: int, peer_id: str) -> str:
        return await self._write("cancelJoinRequest", [int(pool_id), peer_id])

    async def set_required_tokens(self, pool_id: int, amount: TokenAmount) -> str:
        return await self._write("setRequiredTokens", [int(pool_id), parse_token_amount(amount)])

    async def set_create_pool_lock_amount(self, amount: TokenAmount) -> str:
        lock_amount = parse_token_amount(amount)
        if lock_amount > MAX_CREATE_POOL_LOCK_AMOUNT:
            raise InvalidAmountError("Lock amount cannot exceed 100,000,000 tokens")
        return await self._write("setCreatePoolLockAmount", [lock_amount])

    async def emergency_recover_tokens(self, amount: TokenAmount) -> str:
        return await self._write("emergencyRecoverTokens", [parse_token_amount(amount)])

    # --- Transactions ---

    async def get_transaction_details(self, tx_hash: str) -> TransactionDetails:
        if not tx_hash or not tx_hash.startswith("0x"):
            raise ValidationError("Invalid transaction hash")
        tx = await self._access_port.get_transaction(tx_hash)
        if not tx:
            raise TransactionNotFoundError(tx_hash)
        return TransactionDetails(
            tx_hash=tx_hash,
            nonce=int(tx["nonce"]),
            sender=to_normalized_address(tx["from"]),
            status="Confirmed" if tx.get("blockNumber") else "Pending",
        )

    async def cancel_transaction(self, nonce: int) -> str:
        """
        Best-effort replace-by-fee: a zero-value self-transfer at `nonce` with a higher gas price.
        The original transaction may still be mined first.
        """
        account = self._require_signer()
        gas_price = await self._access_port.get_gas_price()
        bumped_gas_price = gas_price * (100 + self._gas_price_bump_percent) // 100

        tx = {
            "from": account,
            "to": account,
            "value": 0,
            "nonce": int(nonce),
            "gas": CANCEL_TX_GAS,
            "gasPrice": bumped_gas_price,
            "chainId": self._access_port.chain_id,
        }
        try:
            tx_hash = await self._access_port.send_transaction(tx)
        except GovernanceError:
            raise
        except Exception as e:
            raise SubmissionFailure(f"Failed to cancel transaction: {e}") from e

        logger.info(f"Cancellation for nonce {nonce} sent at {Web3.from_wei(bumped_gas_price, 'gwei')} gwei: {tx_hash}")
        return tx_hash

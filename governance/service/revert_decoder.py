"""
Translates the error raised by a failed simulation into a SimulationRevert with a readable message.

Known custom errors are registered once with their parameter types and a formatter. An error is
recognized either by its 4-byte selector in the revert data (parameters decoded with eth_abi)
or by its name in the node / client message, in the `Name(values)` or `Name(types) (values)`
form. Anything unrecognized is surfaced with the raw message.
"""

import math
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector
from web3 import Web3

from constants.governance_constants import SECONDS_PER_DAY
from governance.service.role_hash_resolver import display_name
from utils.exceptions import SimulationRevert
from utils.formatter_utils import format_token_amount, to_bytes32_hex, to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Revert Decoder")

HEX_DATA_PATTERN = re.compile(r"0x[0-9a-fA-F]{8,}")
EXECUTION_REVERTED_PATTERN = re.compile(r"execution reverted:?\s*(.+)", re.IGNORECASE)

Formatter = Callable[[Dict[str, Any], str], str]


class RevertRule(object):
    def __init__(self, error_name: str, params: Sequence[Tuple[str, str]], formatter: Formatter, fallback: str = None):
        self.error_name = error_name
        self.param_types = [param_type for param_type, _ in params]
        self.param_names = [param_name for _, param_name in params]
        self.signature = f"{error_name}({','.join(self.param_types)})"
        self.selector = "0x" + function_signature_to_4byte_selector(self.signature).hex()
        self.formatter = formatter
        self.fallback = fallback
        self._distinctive = sum(1 for c in error_name if c.isupper()) >= 2
        self._name_pattern = re.compile(
            rf"\b{re.escape(error_name)}\((?P<first>[^)]*)\)(?:\s*\((?P<second>[^)]*)\))?"
        )

    def decode_data(self, data: str) -> Dict[str, Any]:
        values = decode(self.param_types, bytes.fromhex(data[10:])) if self.param_types else ()
        return dict(zip(self.param_names, values))

    def match_text(self, message: str) -> Optional[Dict[str, Any]]:
        """None when the error is not named in `message`; {} when named without readable values."""
        match = self._name_pattern.search(message)
        if match is None:
            # One-word names only match in the `Name(...)` form
            if self._distinctive and re.search(rf"\b{re.escape(self.error_name)}\b", message):
                return {}
            return None

        raw_values = match.group("second") if match.group("second") is not None else match.group("first")
        values = [value.strip() for value in raw_values.split(",") if value.strip()]
        if len(values) != len(self.param_types) or any(_looks_like_type(v) for v in values):
            return {}
        return {name: _coerce(param_type, value) for name, param_type, value in zip(self.param_names, self.param_types, values)}

    def format(self, params: Dict[str, Any], token_symbol: str) -> str:
        if len(params) < len(self.param_names) and self.fallback:
            return self.fallback
        try:
            return self.formatter(params, token_symbol)
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Could not format {self.error_name} with {params}: {e}")
            return self.fallback or self.error_name


def _looks_like_type(value: str) -> bool:
    return bool(re.match(r"^(u?int\d*|address|bytes\d*|bool|string)\b", value))


def _coerce(param_type: str, value: str) -> Any:
    value = value.strip().strip('"')
    if param_type.startswith(("uint", "int")):
        try:
            return int(value, 0) if value.startswith("0x") else int(value.rstrip("n"))
        except ValueError:
            return value
    return value


def _amount(value: Any, token_symbol: str) -> str:
    return f"{format_token_amount(value)} {token_symbol}"


def _cliff_message(params: Dict[str, Any], _: str) -> str:
    days_remaining = math.ceil((int(params["cliffEnd"]) - int(params["currentTime"])) / SECONDS_PER_DAY)
    return f"Cliff period not reached. {days_remaining} days remaining until tokens can be claimed."


REVERT_RULES: List[RevertRule] = [
    RevertRule(
        "AccessControlUnauthorizedAccount",
        [("address", "account"), ("bytes32", "neededRole")],
        lambda p, _: (
            f"Account {to_normalized_address(p['account'])} does not have the required role "
            f"{display_name(to_bytes32_hex(p['neededRole']))}"
        ),
        fallback="Account does not have the required role",
    ),
    RevertRule(
        "UsedNonce",
        [("uint256", "nonce")],
        lambda p, _: f"Nonce {p['nonce']} has not been set or has already been used",
        fallback="Nonce unknown has not been set or has already been used",
    ),
    RevertRule("AmountMustBePositive", [], lambda p, _: "Amount must be greater than 0"),
    RevertRule(
        "ExceedsMaximumSupply",
        [("uint256", "requested"), ("uint256", "maxSupply")],
        lambda p, s: (
            f"Operation would exceed maximum supply. Amount: {_amount(p['requested'], s)}, "
            f"Available: {_amount(p['maxSupply'], s)}"
        ),
        fallback="Operation would exceed maximum supply",
    ),
    RevertRule(
        "ExceedsSupply",
        [("uint256", "requested"), ("uint256", "supply")],
        lambda p, s: (
            f"Amount exceeds contract balance. Requested: {_amount(p['requested'], s)}, "
            f"Available: {_amount(p['supply'], s)}"
        ),
        fallback="Amount exceeds contract balance",
    ),
    RevertRule(
        "LowAllowance",
        [("uint256", "limit"), ("uint256", "amount")],
        lambda p, s: (
            f"Amount exceeds transaction limit. Limit: {_amount(p['limit'], s)}, "
            f"Requested: {_amount(p['amount'], s)}"
        ),
        fallback="Amount exceeds transaction limit",
    ),
    RevertRule(
        "Unsupported",
        [("uint256", "chain")],
        lambda p, _: f"Unsupported chain ID: {p['chain']}",
        fallback="Unsupported chain ID",
    ),
    RevertRule(
        "CliffNotReached",
        [("uint256", "currentTime"), ("uint256", "startDate"), ("uint256", "cliffEnd")],
        _cliff_message,
        fallback="The cliff date is set but tokens are not yet claimable.",
    ),
    RevertRule("NothingToClaim", [], lambda p, _: "No tokens available to claim at this time."),
    RevertRule(
        "NotWhitelisted",
        [("address", "to")],
        lambda p, _: f"Address {to_normalized_address(p['to'])} is not whitelisted",
        fallback="Address is not whitelisted",
    ),
    RevertRule(
        "AlreadyWhitelisted",
        [("address", "target")],
        lambda p, _: f"Address {to_normalized_address(p['target'])} is already whitelisted",
        fallback="Address is already whitelisted",
    ),
    RevertRule(
        "ExistingActiveProposal",
        [("address", "target")],
        lambda p, _: f"An active proposal already exists for {to_normalized_address(p['target'])}",
        fallback="An active proposal already exists for this target",
    ),
    RevertRule(
        "InvalidProposalType",
        [("uint8", "proposalType")],
        lambda p, _: f"Invalid proposal type: {p['proposalType']}",
        fallback="Invalid proposal type",
    ),
    RevertRule(
        "TimeLockActive",
        [("address", "account")],
        lambda p, _: f"Time lock is still active for {to_normalized_address(p['account'])}",
        fallback="Time lock is still active",
    ),
    RevertRule(
        "InvalidQuorumErr",
        [("bytes32", "role"), ("uint16", "quorum")],
        lambda p, _: f"Invalid quorum {p['quorum']} for role {display_name(to_bytes32_hex(p['role']))}",
        fallback="Invalid quorum",
    ),
]


class RevertDecoder:
    def __init__(self, rules: Sequence[RevertRule] = REVERT_RULES, token_symbol: str = "FULA"):
        self._rules = list(rules)
        self._rules_by_selector = {rule.selector: rule for rule in self._rules}
        self._token_symbol = token_symbol

    def register(self, rule: RevertRule) -> None:
        self._rules.append(rule)
        self._rules_by_selector[rule.selector] = rule

    @staticmethod
    def _raw_message(error: BaseException) -> str:
        message = getattr(error, "message", None)
        return str(message) if message else str(error)

    @staticmethod
    def _revert_data(error: BaseException, raw_message: str) -> Optional[str]:
        data = getattr(error, "data", None)
        if isinstance(data, (bytes, bytearray)):
            data = Web3.to_hex(data)
        if isinstance(data, str) and data.startswith("0x") and len(data) >= 10:
            return data.lower()
        match = HEX_DATA_PATTERN.search(raw_message)
        return match.group(0).lower() if match else None

    def decode(self, error: BaseException, function_name: Optional[str] = None) -> SimulationRevert:
        raw_message = self._raw_message(error)

        data = self._revert_data(error, raw_message)
        if data:
            rule = self._rules_by_selector.get(data[:10])
            if rule is not None:
                try:
                    params = rule.decode_data(data)
                except (DecodingError, ValueError) as e:
                    logger.debug(f"Could not decode {rule.error_name} parameters from {data}: {e}")
                    params = {}
                return self._build(rule, params, function_name, raw_message)

        for rule in self._rules:
            params = rule.match_text(raw_message)
            if params is not None:
                return self._build(rule, params, function_name, raw_message)

        reason = EXECUTION_REVERTED_PATTERN.search(raw_message)
        message = reason.group(1).strip() if reason else raw_message
        return SimulationRevert(message, function_name=function_name, raw_message=raw_message)

    def _build(
        self, rule: RevertRule, params: Dict[str, Any], function_name: Optional[str], raw_message: str
    ) -> SimulationRevert:
        message = rule.format(params, self._token_symbol)
        logger.debug(f"{function_name or 'call'} reverted with {rule.error_name}: {message}")
        return SimulationRevert(
            message,
            function_name=function_name,
            error_name=rule.error_name,
            params=params,
            raw_message=raw_message,
        )

# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Modified By: governance-admin maintainers
# Change Description: Maps decoded governance events into DecodedLog and projection records.

from typing import Any, Dict, Optional

from governance.models.decoded_log import DecodedLog
from governance.models.event_records import BridgeOperationRecord, NonceRecord, TgeStatus
from utils.formatter_utils import to_bytes32_hex, to_normalized_address


def _to_hex(val: Any) -> Optional[str]:
    if val is None:
        return None
    if isinstance(val, (bytes, bytearray)):
        return "0x" + bytes(val).hex()
    return str(val)


def _normalize_arg(val: Any) -> Any:
    if isinstance(val, (bytes, bytearray)) and len(val) == 32:
        return to_bytes32_hex(val)
    if isinstance(val, (bytes, bytearray)):
        return _to_hex(val)
    if isinstance(val, str) and val.startswith("0x") and len(val) == 42:
        return to_normalized_address(val)
    return val


class EventMapper(object):
    @staticmethod
    def web3_event_to_decoded_log(event_data: Dict[str, Any]) -> DecodedLog:
        # web3.py EventData (AttributeDict) with camelCase keys
        args = event_data.get("args") or {}
        return DecodedLog(
            event=event_data.get("event"),
            args={name: _normalize_arg(value) for name, value in dict(args).items()},
            address=to_normalized_address(event_data.get("address")),
            block_number=int(event_data.get("blockNumber") or 0),
            log_index=int(event_data.get("logIndex") or 0),
            transaction_hash=_to_hex(event_data.get("transactionHash")),
        )

    @staticmethod
    def log_to_bridge_operation(log: DecodedLog) -> BridgeOperationRecord:
        return BridgeOperationRecord(
            operator=to_normalized_address(log.args["operator"]),
            op_type=int(log.args["opType"]),
            amount=int(log.args["amount"]),
            chain_id=int(log.args["chainId"]),
            timestamp=int(log.args["timestamp"]),
            block_number=log.block_number,
            log_index=log.log_index,
            transaction_hash=log.transaction_hash,
        )

    @staticmethod
    def log_to_nonce_record(log: DecodedLog) -> NonceRecord:
        return NonceRecord(
            chain_id=int(log.args["chainId"]),
            caller=to_normalized_address(log.args["caller"]),
            block_number=log.block_number,
            log_index=log.log_index,
            transaction_hash=log.transaction_hash,
        )

    @staticmethod
    def log_to_tge_status(log: DecodedLog) -> TgeStatus:
        return TgeStatus(
            is_initiated=True,
            total_required_tokens=int(log.args["totalRequiredTokens"]),
            timestamp=int(log.args["timestamp"]),
            block_number=log.block_number,
        )

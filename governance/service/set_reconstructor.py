"""
Current set membership (whitelist, blacklist, substrate mappings) as a fold over add/remove events.

`apply_operation` is the pure reducer; `reconstruct_set` orders the events by chain position
and folds them from an empty state. Only the last observed operation per address counts.
"""

from functools import reduce
from typing import Dict, Iterable, List, Mapping, Optional

from governance.enums.operation import SetOperation
from governance.models.address_set import AddressSetEntry, SetOperationEvent
from governance.models.decoded_log import DecodedLog
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Set Reconstructor")

MembershipState = Dict[str, AddressSetEntry]


def apply_operation(state: Mapping[str, AddressSetEntry], event: SetOperationEvent) -> MembershipState:
    key = to_normalized_address(event.address)
    new_state = dict(state)

    if event.operation == SetOperation.ADD:
        # Re-inserting moves the address to the end, so output order follows the latest add
        new_state.pop(key, None)
        new_state[key] = AddressSetEntry(
            address=key,
            status=True,
            operator=to_normalized_address(event.operator),
            lock_time=event.lock_time,
            amount=event.amount,
            block_number=event.block_number,
            log_index=event.log_index,
        )
    elif event.operation == SetOperation.REMOVE:
        new_state.pop(key, None)
    else:
        logger.warning(f"Ignoring unknown set operation {event.operation} for {key} at block {event.block_number}")

    return new_state


def reconstruct_set(events: Iterable[SetOperationEvent]) -> List[AddressSetEntry]:
    ordered = sorted(events, key=lambda e: (e.block_number, e.log_index))
    return list(reduce(apply_operation, ordered, {}).values())


def events_from_logs(
    logs: Iterable[DecodedLog],
    address_field: str,
    operation_field: Optional[str] = None,
    operation: Optional[SetOperation] = None,
    operator_field: Optional[str] = None,
    lock_time_field: Optional[str] = None,
    amount_field: Optional[str] = None,
) -> List[SetOperationEvent]:
    """
    Projects decoded logs onto set operations. Either `operation_field` names the event argument
    carrying the operation code, or `operation` fixes it for every log (e.g. AddressRemoved).
    """
    if (operation_field is None) == (operation is None):
        raise ValueError("Exactly one of operation_field or operation must be given")

    events = []
    for log in logs:
        args = log.args
        events.append(
            SetOperationEvent(
                address=args[address_field],
                operation=int(args[operation_field]) if operation_field else int(operation),
                operator=args.get(operator_field) if operator_field else None,
                lock_time=int(args[lock_time_field]) if lock_time_field and args.get(lock_time_field) is not None else None,
                amount=int(args[amount_field]) if amount_field and args.get(amount_field) is not None else None,
                block_number=log.block_number,
                log_index=log.log_index,
            )
        )
    return events

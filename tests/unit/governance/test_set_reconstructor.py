import random

import pytest

from governance.enums.operation import SetOperation
from governance.models.address_set import SetOperationEvent
from governance.service.set_reconstructor import apply_operation, events_from_logs, reconstruct_set
from tests.unit.governance.fakes import make_log

ALICE = "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
BOB = "0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"


def _event(address, operation, block, log_index=0, **kwargs):
    return SetOperationEvent(address=address, operation=operation, block_number=block, log_index=log_index, **kwargs)


def _addresses(entries):
    return [entry.address.lower() for entry in entries]


def test_last_operation_wins():
    events = [
        _event(ALICE, SetOperation.ADD, 1),
        _event(BOB, SetOperation.ADD, 2),
        _event(ALICE, SetOperation.REMOVE, 3),
        _event(BOB, SetOperation.REMOVE, 4),
        _event(BOB, SetOperation.ADD, 5),
    ]
    assert _addresses(reconstruct_set(events)) == [BOB]


def test_input_order_does_not_matter():
    events = [
        _event(ALICE, SetOperation.ADD, 10, 0),
        _event(ALICE, SetOperation.REMOVE, 10, 1),
        _event(BOB, SetOperation.ADD, 11, 0),
        _event(ALICE, SetOperation.ADD, 12, 3),
    ]
    expected = reconstruct_set(events)

    shuffled = list(events)
    random.Random(7).shuffle(shuffled)
    assert reconstruct_set(shuffled) == expected
    assert _addresses(expected) == [BOB, ALICE]


def test_repeated_operation_is_idempotent():
    add = _event(ALICE, SetOperation.ADD, 1, lock_time=50)
    once = apply_operation({}, add)
    assert apply_operation(once, add) == once

    remove = _event(ALICE, SetOperation.REMOVE, 2)
    assert apply_operation(apply_operation(once, remove), remove) == {}


def test_unknown_operation_leaves_state_untouched():
    state = apply_operation({}, _event(ALICE, SetOperation.ADD, 1))
    assert apply_operation(state, _event(ALICE, 7, 2)) == state


def test_events_from_logs_with_operation_field():
    logs = [
        make_log("WalletWhitelistedOp", 5, 0, target=ALICE, operator=BOB, whitelistLockTime=99, operation=1),
        make_log("WalletWhitelistedOp", 6, 1, target=ALICE, operator=BOB, whitelistLockTime=0, operation=2),
    ]
    events = events_from_logs(
        logs, address_field="target", operation_field="operation", operator_field="operator",
        lock_time_field="whitelistLockTime",
    )
    assert [e.operation for e in events] == [1, 2]
    assert events[0].lock_time == 99
    assert reconstruct_set(events) == []


def test_events_from_logs_with_fixed_operation():
    logs = [make_log("AddressRemoved", 3, ethereumAddr=ALICE)]
    events = events_from_logs(logs, address_field="ethereumAddr", operation=SetOperation.REMOVE)
    assert events[0].operation == SetOperation.REMOVE

    with pytest.raises(ValueError):
        events_from_logs(logs, address_field="ethereumAddr")

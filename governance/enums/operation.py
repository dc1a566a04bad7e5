from enum import IntEnum


class SetOperation(IntEnum):
    """`operation` field of WalletWhitelistedOp / BlackListOp."""

    ADD = 1
    REMOVE = 2


class EmergencyOp(IntEnum):
    PAUSE = 1
    UNPAUSE = 2


class BridgeOpType(IntEnum):
    MINT = 1
    BURN = 2

from enum import IntEnum


class ProposalType(IntEnum):
    NA = 0
    ADD_ROLE = 1
    REMOVE_ROLE = 2
    UPGRADE = 3
    RECOVERY = 4
    ADD_WHITELIST = 5
    REMOVE_WHITELIST = 6
    ADD_DISTRIBUTION_WALLETS = 7
    REMOVE_DISTRIBUTION_WALLET = 8
    ADD_TO_BLACKLIST = 9
    REMOVE_FROM_BLACKLIST = 10
    CHANGE_TREASURY_FEE = 11


ROLE_PROPOSAL_TYPES = frozenset({ProposalType.ADD_ROLE, ProposalType.REMOVE_ROLE})


class ProposalStatus(IntEnum):
    PENDING = 0
    EXECUTED = 1

    @classmethod
    def from_raw(cls, value: int) -> "ProposalStatus":
        # Any non-zero on-chain status is terminal from the dashboard's point of view
        return cls.PENDING if int(value) == 0 else cls.EXECUTED

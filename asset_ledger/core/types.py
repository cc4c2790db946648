from enum import IntEnum


class LifecycleState(IntEnum):
    # Numeric identities are part of the public contract.
    PENDING = 1
    APPROVED = 2
    DECLINED = 3
    ACTIVE = 4
    INACTIVE = 5


# Field bounds enforced by the request layer before an operation runs.
ASSET_ID_MAX_LEN = 36
INTEGRITY_HASH_MAX_LEN = 64
URI_MAX_LEN = 256
PRINCIPAL_MAX_LEN = 128

# Checked-arithmetic ceiling for supplies and balances (signed 64-bit column).
MAX_QUANTITY = 2**63 - 1

# Decimal places of a token; stored in a signed 32-bit column.
MAX_PRECISION = 2**31 - 1

# Importing this package registers every table on Base.metadata.
from asset_ledger.models.asset_record import AssetRecord
from asset_ledger.models.token_spec import TokenSpec
from asset_ledger.models.holder_balance import HolderBalance
from asset_ledger.models.reviewer_grant import ReviewerGrant
from asset_ledger.models.transfer_record import TransferRecord
from asset_ledger.models.ledger_counter import LedgerCounter

__all__ = [
    "AssetRecord",
    "TokenSpec",
    "HolderBalance",
    "ReviewerGrant",
    "TransferRecord",
    "LedgerCounter",
]

"""Asset lifecycle ledger: registration, review, tokenization, transfer, decommissioning."""

__version__ = "0.1.0"

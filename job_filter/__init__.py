"""Job Filter: claims ledger, resume-claim review and deterministic fit scoring."""

__version__ = "0.1.0"

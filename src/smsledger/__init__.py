"""smsledger: offline extraction of bank/wallet transactions from SMS."""

__version__ = "0.1.0"

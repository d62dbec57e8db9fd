"""Receipt Dispatch: send serialized receipts to an external print program."""

__version__ = "0.3.0"

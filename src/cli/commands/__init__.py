"""CLI command groups."""

__all__ = ["config", "ledger", "stores"]

from . import config, ledger, stores

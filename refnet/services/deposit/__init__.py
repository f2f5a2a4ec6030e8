"""Deposit processing and reward distribution."""

from refnet.services.deposit.processor import (
    DepositProcessor,
    DepositResult,
    DepositState,
)


__all__ = ["DepositProcessor", "DepositResult", "DepositState"]

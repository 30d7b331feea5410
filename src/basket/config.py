"""
config.py — Reconciliation policy

The knobs a caller may turn when reconciling a line or a basket. Defaults
reproduce the standard behaviour:

- tax rounded HALF_UP
- tax computed on the discounted net
- delivery charged once per line, whatever the quantity
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .money import RoundingMode


class TaxBasis(Enum):
    """Amount the tax rate is applied to."""
    NET = "net"        # after discount
    GROSS = "gross"    # before discount


@dataclass(frozen=True)
class ReconciliationPolicy:
    rounding: RoundingMode = RoundingMode.HALF_UP
    tax_basis: TaxBasis = TaxBasis.NET
    delivery_per_unit: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.rounding, RoundingMode):
            raise TypeError(f"rounding must be RoundingMode, got {self.rounding!r}")
        if not isinstance(self.tax_basis, TaxBasis):
            raise TypeError(f"tax_basis must be TaxBasis, got {self.tax_basis!r}")


DEFAULT_POLICY = ReconciliationPolicy()

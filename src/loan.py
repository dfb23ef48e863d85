"""Loan configuration shared by every postcode in a recompute pass."""

from dataclasses import dataclass
from enum import Enum

from .mortgage import Mortgage, RepaymentType


DEFAULT_INTEREST_RATE_PERCENT = 6.0
DEFAULT_TERM_YEARS = 30
DEFAULT_DEPOSIT_PERCENT = 20.0
DEFAULT_DEPOSIT_AMOUNT = 100000.0


class DepositMode(Enum):
    PERCENT = "percent"
    AMOUNT = "amount"


@dataclass(frozen=True)
class LoanConfiguration:
    """Immutable snapshot of the user's loan settings."""

    interest_rate_percent: float = DEFAULT_INTEREST_RATE_PERCENT
    term_years: float = DEFAULT_TERM_YEARS
    deposit_mode: DepositMode = DepositMode.PERCENT
    deposit_percent: float = DEFAULT_DEPOSIT_PERCENT  # used in PERCENT mode
    deposit_amount: float = DEFAULT_DEPOSIT_AMOUNT  # used in AMOUNT mode
    repayment_type: RepaymentType = RepaymentType.PRINCIPAL_AND_INTEREST

    def validate(self) -> None:
        """Reject settings the mortgage model is undefined for.

        Raises:
            ValueError: If any field is out of range
        """
        if self.term_years <= 0:
            raise ValueError(f"Loan term must be positive, got {self.term_years}")
        if self.interest_rate_percent < 0:
            raise ValueError(
                f"Interest rate cannot be negative, got {self.interest_rate_percent}"
            )
        if self.deposit_mode == DepositMode.PERCENT:
            if not 0 <= self.deposit_percent <= 100:
                raise ValueError(
                    f"Deposit percent must be between 0 and 100, got {self.deposit_percent}"
                )
        elif self.deposit_amount < 0:
            raise ValueError(f"Deposit amount cannot be negative, got {self.deposit_amount}")

    def deposit_for(self, sale_price: float) -> float:
        """Deposit put down against a given sale price."""
        if self.deposit_mode == DepositMode.PERCENT:
            return sale_price * (self.deposit_percent / 100)
        return self.deposit_amount

    def loan_amount_for(self, sale_price: float) -> float:
        """Amount borrowed, never negative (a deposit above the price borrows nothing)."""
        return max(0.0, sale_price - self.deposit_for(sale_price))

    def mortgage_for(self, sale_price: float) -> Mortgage:
        """Mortgage taken out to buy at the given sale price."""
        return Mortgage(
            principal=self.loan_amount_for(sale_price),
            annual_rate_percent=self.interest_rate_percent,
            term_years=self.term_years,
            repayment_type=self.repayment_type,
        )

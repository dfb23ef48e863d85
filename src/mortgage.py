"""Core mortgage repayment calculations."""

from dataclasses import dataclass
from enum import Enum


MONTHS_PER_YEAR = 12
WEEKS_PER_YEAR = 52


class RepaymentType(Enum):
    PRINCIPAL_AND_INTEREST = "PI"
    INTEREST_ONLY = "IO"


@dataclass(frozen=True)
class MortgagePayment:
    """Monthly repayment and its first-period interest component."""

    payment: float
    interest: float


def monthly_to_weekly(amount: float) -> float:
    """Convert a monthly amount to weekly (annualise, then divide by 52)."""
    return amount * MONTHS_PER_YEAR / WEEKS_PER_YEAR


def calculate_mortgage_payment(
    loan_amount: float,
    annual_rate_percent: float,
    term_years: float,
    repayment_type: RepaymentType = RepaymentType.PRINCIPAL_AND_INTEREST,
) -> MortgagePayment:
    """Calculate the monthly repayment for a loan.

    M = P * [r(1+r)^n] / [(1+r)^n - 1]

    Args:
        loan_amount: Amount borrowed (clamped to zero by the caller)
        annual_rate_percent: Annual interest rate as a percentage, e.g. 6.0
        term_years: Loan term in years, must be positive
        repayment_type: Principal & interest or interest only

    Returns:
        MortgagePayment with the monthly payment and the interest charged
        in the first month
    """
    if loan_amount <= 0:
        return MortgagePayment(payment=0.0, interest=0.0)

    num_payments = term_years * MONTHS_PER_YEAR

    if annual_rate_percent == 0:
        return MortgagePayment(payment=loan_amount / num_payments, interest=0.0)

    r = annual_rate_percent / 100 / MONTHS_PER_YEAR
    monthly_interest = loan_amount * r

    if repayment_type == RepaymentType.INTEREST_ONLY:
        return MortgagePayment(payment=monthly_interest, interest=monthly_interest)

    factor = (1 + r)**num_payments
    payment = monthly_interest * factor / (factor - 1)
    return MortgagePayment(payment=payment, interest=monthly_interest)


@dataclass
class Mortgage:
    """Represents a loan against a single purchase price."""

    principal: float
    annual_rate_percent: float  # as percentage, e.g., 6.0 for 6%
    term_years: float
    repayment_type: RepaymentType = RepaymentType.PRINCIPAL_AND_INTEREST

    @property
    def _payment(self) -> MortgagePayment:
        return calculate_mortgage_payment(
            self.principal,
            self.annual_rate_percent,
            self.term_years,
            self.repayment_type,
        )

    @property
    def monthly_payment(self) -> float:
        return self._payment.payment

    @property
    def monthly_interest(self) -> float:
        """Interest charged in the first month."""
        return self._payment.interest

    @property
    def weekly_payment(self) -> float:
        return monthly_to_weekly(self.monthly_payment)

    @property
    def weekly_interest(self) -> float:
        return monthly_to_weekly(self.monthly_interest)

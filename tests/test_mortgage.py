"""Tests for core mortgage calculations."""

import pytest

from src.mortgage import (
    Mortgage,
    MortgagePayment,
    RepaymentType,
    calculate_mortgage_payment,
    monthly_to_weekly,
)


class TestCalculateMortgagePayment:
    """Tests for the standalone payment function."""

    def test_principal_and_interest_payment(self):
        """Test standard amortization formula."""
        # $500,000 at 6% for 30 years
        result = calculate_mortgage_payment(500000, 6, 30, RepaymentType.PRINCIPAL_AND_INTEREST)

        # Expected: ~$2,997.75
        assert abs(result.payment - 2997.75) < 0.01
        assert result.interest == pytest.approx(2500.0)

    def test_zero_loan_amount(self):
        """Test that a zero loan costs nothing for any rate, term or type."""
        for rate in [0, 3.5, 12]:
            for term in [1, 25, 30]:
                for repayment_type in RepaymentType:
                    result = calculate_mortgage_payment(0, rate, term, repayment_type)
                    assert result == MortgagePayment(payment=0.0, interest=0.0)

    def test_negative_loan_amount_treated_as_zero(self):
        """Test that a loan below zero is not charged."""
        result = calculate_mortgage_payment(-1000, 5, 30)

        assert result.payment == 0.0
        assert result.interest == 0.0

    def test_zero_rate_is_straight_line(self):
        """Test edge case of 0% interest."""
        result = calculate_mortgage_payment(120000, 0, 10)

        assert result.payment == 120000 / 120
        assert result.interest == 0.0

    def test_zero_rate_interest_only(self):
        """Test that 0% interest-only still repays straight-line."""
        result = calculate_mortgage_payment(120000, 0, 10, RepaymentType.INTEREST_ONLY)

        assert result.payment == 1000.0
        assert result.interest == 0.0

    def test_interest_only_payment_equals_interest(self):
        """Test that interest-only payment is exactly the interest."""
        for rate in [0.5, 4.875, 6, 15]:
            result = calculate_mortgage_payment(640000, rate, 25, RepaymentType.INTEREST_ONLY)
            assert result.payment == result.interest

    def test_interest_only_ignores_term(self):
        """Test that interest-only payment does not depend on term."""
        short = calculate_mortgage_payment(400000, 5, 10, RepaymentType.INTEREST_ONLY)
        long = calculate_mortgage_payment(400000, 5, 30, RepaymentType.INTEREST_ONLY)

        assert short == long

    def test_principal_and_interest_exceeds_interest(self):
        """Test that amortizing payments include some principal."""
        for rate in [1, 6, 12]:
            for term in [1, 15, 30]:
                result = calculate_mortgage_payment(300000, rate, term)
                assert result.payment > result.interest

    def test_interest_is_first_month_only(self):
        """Test that interest component is the first period's interest."""
        result = calculate_mortgage_payment(300000, 6, 30)

        assert result.interest == pytest.approx(300000 * 0.005)

    def test_shorter_term_costs_more_per_month(self):
        """Test that 15-year loan has higher payment than 30-year."""
        payment_30 = calculate_mortgage_payment(300000, 6, 30).payment
        payment_15 = calculate_mortgage_payment(300000, 6, 15).payment

        assert payment_15 > payment_30

    def test_fractional_term(self):
        """Test that non-integer terms are accepted."""
        result = calculate_mortgage_payment(100000, 0, 2.5)

        assert result.payment == pytest.approx(100000 / 30)


class TestMonthlyToWeekly:
    """Tests for monthly to weekly conversion."""

    def test_conversion_factor(self):
        """Test that weekly is monthly * 12 / 52."""
        assert monthly_to_weekly(5200) == pytest.approx(1200.0)

    def test_worked_example(self):
        """Test weekly figure for $500,000 at 6% over 30 years."""
        monthly = calculate_mortgage_payment(500000, 6, 30).payment

        assert abs(monthly_to_weekly(monthly) - 691.79) < 0.01


class TestMortgage:
    """Tests for Mortgage class."""

    def test_matches_standalone_function(self):
        """Test that class properties match the standalone function."""
        mortgage = Mortgage(principal=250000, annual_rate_percent=7, term_years=30)
        standalone = calculate_mortgage_payment(250000, 7, 30)

        assert mortgage.monthly_payment == standalone.payment
        assert mortgage.monthly_interest == standalone.interest

    def test_weekly_figures(self):
        """Test weekly payment and interest conversions."""
        mortgage = Mortgage(
            principal=640000,
            annual_rate_percent=5,
            term_years=25,
            repayment_type=RepaymentType.INTEREST_ONLY,
        )

        assert abs(mortgage.weekly_payment - 615.38) < 0.01
        assert mortgage.weekly_payment == mortgage.weekly_interest

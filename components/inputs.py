"""Streamlit input components for loan settings."""

import streamlit as st
from typing import Optional

from src.loan import DepositMode, LoanConfiguration
from src.mortgage import RepaymentType


REPAYMENT_LABELS = {
    RepaymentType.PRINCIPAL_AND_INTEREST: "Principal & Interest",
    RepaymentType.INTEREST_ONLY: "Interest Only",
}

DEPOSIT_LABELS = {
    DepositMode.PERCENT: "Percent of price",
    DepositMode.AMOUNT: "Fixed amount",
}


def loan_configuration_form(
    key_prefix: str = "loan",
    initial: Optional[LoanConfiguration] = None,
) -> Optional[LoanConfiguration]:
    """Create sidebar inputs for the loan applied to every postcode.

    Returns LoanConfiguration or None if inputs are invalid.
    """
    initial = initial or LoanConfiguration()
    sidebar = st.sidebar

    sidebar.subheader("Loan Settings")

    repayment_type = sidebar.selectbox(
        "Repayment Type",
        options=list(REPAYMENT_LABELS),
        index=list(REPAYMENT_LABELS).index(initial.repayment_type),
        format_func=REPAYMENT_LABELS.get,
        key=f"{key_prefix}_repayment_type",
        help="Interest-only payments never reduce the loan",
    )

    interest_rate = sidebar.number_input(
        "Interest Rate (%)",
        min_value=0.0,
        max_value=20.0,
        value=float(initial.interest_rate_percent),
        step=0.05,
        format="%.2f",
        key=f"{key_prefix}_rate",
        help="Annual interest rate as a percentage",
    )

    # Term input is hidden for interest-only loans
    term_years = initial.term_years
    if repayment_type == RepaymentType.PRINCIPAL_AND_INTEREST:
        term_years = sidebar.slider(
            "Loan Term (years)",
            min_value=1,
            max_value=40,
            value=int(term_years),
            key=f"{key_prefix}_term",
        )

    deposit_mode = sidebar.radio(
        "Deposit",
        options=list(DEPOSIT_LABELS),
        index=list(DEPOSIT_LABELS).index(initial.deposit_mode),
        format_func=DEPOSIT_LABELS.get,
        horizontal=True,
        key=f"{key_prefix}_deposit_mode",
    )

    deposit_percent = initial.deposit_percent
    deposit_amount = initial.deposit_amount
    if deposit_mode == DepositMode.PERCENT:
        deposit_percent = sidebar.number_input(
            "Deposit (%)",
            min_value=0.0,
            max_value=100.0,
            value=float(initial.deposit_percent),
            step=1.0,
            format="%.1f",
            key=f"{key_prefix}_deposit_percent",
        )
    else:
        deposit_amount = sidebar.number_input(
            "Deposit ($)",
            min_value=0.0,
            max_value=10000000.0,
            value=float(initial.deposit_amount),
            step=10000.0,
            format="%.0f",
            key=f"{key_prefix}_deposit_amount",
            help="The same deposit is applied to every postcode",
        )

    config = LoanConfiguration(
        interest_rate_percent=interest_rate,
        term_years=term_years,
        deposit_mode=deposit_mode,
        deposit_percent=deposit_percent,
        deposit_amount=deposit_amount,
        repayment_type=repayment_type,
    )

    try:
        config.validate()
    except ValueError as e:
        sidebar.error(str(e))
        return None

    return config


def table_search_input(key_prefix: str = "table") -> str:
    """Search box filtering the table by suburb or postcode."""
    return st.text_input(
        "Search",
        value="",
        placeholder="Suburb or postcode",
        key=f"{key_prefix}_search",
    )

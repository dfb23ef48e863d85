"""Streamlit table display components."""


import pandas as pd
import streamlit as st

from src.affordability import AffordabilityIndex
from src.bands import LEGEND_ORDER, RatioBand, classify_ratio
from src.mortgage import RepaymentType
from src.table import (
    SORT_COLUMNS,
    AffordabilityTable,
    format_currency,
    format_ratio,
    shorten_suburb_list,
)
from components.charts import cost_range_series, create_cost_range_chart


COLUMN_LABELS = {
    'suburb': 'Suburbs',
    'postcode': 'Postcode',
    'ratio': 'Rent/Payment',
    'rent': 'Weekly Rent',
    'payment': 'Weekly Payment',
}


def sort_controls(table: AffordabilityTable, key_prefix: str = "table") -> None:
    """Column buttons that sort the table, toggling direction on repeat clicks.

    The chosen sort survives reruns through session state and is reapplied
    to the freshly projected rows.
    """
    state_key = f"{key_prefix}_sort"
    if state_key in st.session_state:
        table.apply_sort(*st.session_state[state_key])

    cols = st.columns(len(SORT_COLUMNS))
    for col, column in zip(cols, SORT_COLUMNS):
        label = COLUMN_LABELS[column]
        if column == table.sort_column:
            label += " ▲" if table.ascending else " ▼"
        with col:
            if st.button(label, key=f"{key_prefix}_sort_{column}", use_container_width=True):
                table.sort_by(column)
                st.session_state[state_key] = (table.sort_column, table.ascending)
                st.rerun()


def display_affordability_table(
    table: AffordabilityTable,
    query: str = "",
    title: str = "Postcodes",
) -> pd.DataFrame:
    """Display the filtered table with formatted values.

    Args:
        table: Rows in their current sort order
        query: Suburb or postcode search text
        title: Table title

    Returns:
        The unformatted DataFrame of visible rows
    """
    st.subheader(title)

    visible = table.filter(query)
    df = table.to_dataframe(visible)

    display_df = df.copy()
    display_df['ratio'] = display_df['ratio'].apply(format_ratio)
    display_df['rent'] = display_df['rent'].apply(format_currency)
    display_df['payment'] = display_df['payment'].apply(format_currency)
    display_df = display_df.rename(columns=COLUMN_LABELS)

    st.caption(f"Showing {len(visible)} of {len(table)} postcodes")
    st.dataframe(
        display_df,
        use_container_width=True,
        hide_index=True,
    )

    return df


def display_legend() -> None:
    """Display the ratio band legend."""
    st.markdown("**Rent/Payment Ratio**")
    for band in LEGEND_ORDER + [RatioBand.NO_DATA]:
        st.markdown(
            f'<span style="background:{band.color};display:inline-block;'
            f'width:12px;height:12px;margin-right:6px;border:1px solid #777"></span>{band.label}',
            unsafe_allow_html=True,
        )


def display_area_detail(
    index: AffordabilityIndex,
    postcode: str,
    repayment_type: RepaymentType,
) -> None:
    """Display the figures and cost ranges for one postcode."""
    record = index.records.get(postcode)
    if record is None:
        st.info(f"No data for postcode {postcode}")
        return

    fields = index.computed(postcode)
    suburbs = index.suburb_label(postcode)

    st.markdown(f"**{shorten_suburb_list(suburbs)}**", help=suburbs)
    st.caption(f"Postcode: {postcode}")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Median Rent (weekly)", format_currency(record.median_weekly_rent))
        sale_price = record.median_sale_price or 0
        st.metric(
            "Median Sale Price ($000s)",
            f"{sale_price / 1000:,.0f}" if sale_price > 0 else "N/A",
        )

    with col2:
        if repayment_type == RepaymentType.INTEREST_ONLY:
            st.metric(
                "Interest Payment (weekly)",
                format_currency(fields.weekly_interest if fields else None),
            )
        else:
            st.metric(
                "Mortgage Payment (weekly)",
                format_currency(fields.weekly_payment if fields else None),
            )
            st.metric(
                "Interest Component (weekly)",
                format_currency(fields.weekly_interest if fields else None),
            )

    with col3:
        ratio = fields.ratio if fields else None
        st.metric("Rent/Payment Ratio", format_ratio(ratio))
        st.caption(classify_ratio(ratio).label)

    for label, _, stats in cost_range_series(record, fields, repayment_type):
        if stats is None:
            st.caption(f"{label}: Range data not available.")

    fig = create_cost_range_chart(record, fields, repayment_type)
    if fig.data:
        st.plotly_chart(fig, use_container_width=True)

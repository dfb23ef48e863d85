"""Plotly chart components for the rent vs mortgage map."""

import plotly.graph_objects as go
import plotly.express as px
import pandas as pd
import numpy as np
from typing import List, Optional, Tuple

from src.affordability import AffordabilityIndex, AreaRecord, ComputedFields
from src.bands import BAND_THRESHOLDS, LEGEND_ORDER, RatioBand, classify_ratio
from src.data import POSTCODE_PROPERTY
from src.mortgage import RepaymentType
from src.table import DisplayRow, format_currency, format_ratio


RENT_COLOR = '#22c55e'
PAYMENT_COLOR = '#ef4444'


def create_affordability_map(boundaries: dict, index: AffordabilityIndex) -> go.Figure:
    """Create choropleth of postcodes coloured by rent/payment ratio band."""
    postcodes = [
        feature['properties'][POSTCODE_PROPERTY]
        for feature in boundaries.get('features', [])
        if feature.get('properties', {}).get(POSTCODE_PROPERTY)
    ]

    records = []
    for postcode in postcodes:
        ratio = index.ratio(postcode)
        fields = index.computed(postcode)
        record = index.records.get(postcode)
        records.append({
            'postcode': postcode,
            'suburb': index.suburb_label(postcode),
            'band': classify_ratio(ratio).label,
            'ratio': format_ratio(ratio),
            'rent': format_currency(record.median_weekly_rent if record else None),
            'payment': format_currency(fields.weekly_payment if fields else None),
        })
    df_map = pd.DataFrame(records, columns=['postcode', 'suburb', 'band', 'ratio', 'rent', 'payment'])

    bands = LEGEND_ORDER + [RatioBand.NO_DATA]
    fig = px.choropleth(
        df_map,
        geojson=boundaries,
        locations='postcode',
        featureidkey=f'properties.{POSTCODE_PROPERTY}',
        color='band',
        color_discrete_map={band.label: band.color for band in bands},
        category_orders={'band': [band.label for band in bands]},
        hover_name='suburb',
        hover_data={'postcode': True, 'ratio': True, 'rent': True, 'payment': True, 'band': False},
        projection='mercator',
    )
    fig.update_geos(fitbounds='geojson', visible=False)
    fig.update_traces(marker_line_color='white', marker_line_width=1)
    fig.update_layout(
        height=600,
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(
            title='Rent/Payment Ratio',
            yanchor='bottom',
            y=0.01,
            xanchor='right',
            x=0.99,
        ),
    )

    return fig


def create_ratio_histogram(rows: List[DisplayRow]) -> go.Figure:
    """Create histogram of finite ratios with the band thresholds marked."""
    ratios = np.array([row.ratio for row in rows if row.ratio is not None], dtype=float)
    finite = ratios[np.isfinite(ratios)]

    fig = go.Figure()

    fig.add_trace(go.Histogram(
        x=finite,
        nbinsx=50,
        name='Postcodes',
        marker_color='#1f77b4',
        opacity=0.7,
        hovertemplate='Ratio %{x}<br>Postcodes: %{y}<extra></extra>',
    ))

    for threshold, band in BAND_THRESHOLDS:
        fig.add_vline(
            x=threshold,
            line_dash='dash',
            line_color=band.color,
        )

    if len(finite) > 0:
        median = np.median(finite)
        fig.add_vline(
            x=median,
            line_color='#333',
            annotation_text=f'Median: {median:.2f}',
            annotation_position='top',
        )

    fig.update_layout(
        title='Rent/Payment Ratio Across Postcodes',
        xaxis_title='Weekly Rent / Weekly Payment',
        yaxis_title='Postcodes',
        showlegend=False,
    )

    return fig


def box_stats(
    q1: Optional[float],
    median: Optional[float],
    q3: Optional[float],
) -> Optional[Tuple[float, float, float]]:
    """Quartile triple for a box plot, None if any value is missing.

    Inverted quartiles are swapped.
    """
    if q1 is None or median is None or q3 is None:
        return None
    if q1 > q3:
        q1, q3 = q3, q1
    return q1, median, q3


def cost_range_axis_max(record: AreaRecord, fields: Optional[ComputedFields]) -> float:
    """Shared axis maximum for the rent and payment box plots."""
    rent_q3 = record.third_quartile_weekly_rent or record.median_weekly_rent or 0
    payment_q3 = 0
    if fields is not None:
        payment_q3 = fields.third_quartile_weekly_payment or fields.weekly_payment or 0

    max_cost = max(rent_q3, payment_q3) * 1.1
    if max_cost == 0:
        max_cost = 100
    return max_cost


def cost_range_series(
    record: AreaRecord,
    fields: Optional[ComputedFields],
    repayment_type: RepaymentType,
) -> List[Tuple[str, str, Optional[Tuple[float, float, float]]]]:
    """Label, colour and quartile triple for the rent and payment series.

    The triple is None where any of Q1, median or Q3 is missing.
    """
    payment_label = 'P+I' if repayment_type == RepaymentType.PRINCIPAL_AND_INTEREST else 'I.O.'

    payment_stats = None
    if fields is not None:
        payment_stats = box_stats(
            fields.first_quartile_weekly_payment,
            fields.weekly_payment,
            fields.third_quartile_weekly_payment,
        )

    return [
        ('Rent', RENT_COLOR, box_stats(
            record.first_quartile_weekly_rent,
            record.median_weekly_rent,
            record.third_quartile_weekly_rent,
        )),
        (payment_label, PAYMENT_COLOR, payment_stats),
    ]


def create_cost_range_chart(
    record: AreaRecord,
    fields: Optional[ComputedFields],
    repayment_type: RepaymentType,
) -> go.Figure:
    """Create horizontal box plots of weekly rent and weekly payment ranges.

    Series without a full Q1/median/Q3 triple are left out.
    """
    fig = go.Figure()

    for label, color, stats in cost_range_series(record, fields, repayment_type):
        if stats is None:
            continue
        q1, median, q3 = stats
        fig.add_trace(go.Box(
            y=[label],
            q1=[q1],
            median=[median],
            q3=[q3],
            lowerfence=[q1],
            upperfence=[q3],
            name=label,
            orientation='h',
            marker_color=color,
            line=dict(color=color),
            fillcolor=color,
            opacity=0.5,
            hovertemplate=f'{label}<br>Q1: ${q1:,.0f}<br>Median: ${median:,.0f}<br>Q3: ${q3:,.0f}<extra></extra>',
        ))

    fig.update_layout(
        title='Weekly Cost Range (25th - 75th percentile)',
        xaxis=dict(
            range=[0, cost_range_axis_max(record, fields)],
            tickformat='$,.0f',
        ),
        height=220,
        margin=dict(l=10, r=10, t=40, b=10),
        showlegend=False,
    )

    return fig

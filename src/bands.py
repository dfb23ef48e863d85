"""Rent/payment ratio bands used to colour the map."""

import math
from enum import Enum
from typing import Optional


class RatioBand(Enum):
    """Five fixed ratio ranges plus a no-data band.

    Each member carries (colour, legend label).
    """

    NO_DATA = ("#ccc", "No Data")
    RENT_MUCH_CHEAPER = ("#0f766e", "≤ 0.75 (Rent Much Cheaper)")
    RENT_CHEAPER = ("#22c55e", "0.75 – 0.95 (Rent Cheaper)")
    EQUAL_COST = ("#fbbf24", "0.95 – 1.05 (Equal Cost)")
    MORTGAGE_CHEAPER = ("#f97316", "1.05 – 1.25 (Mortgage Cheaper)")
    MORTGAGE_MUCH_CHEAPER = ("#ef4444", "≥ 1.25 (Mortgage Much Cheaper)")

    @property
    def color(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]


# Lower bound of each band, checked highest first
BAND_THRESHOLDS = [
    (1.25, RatioBand.MORTGAGE_MUCH_CHEAPER),
    (1.05, RatioBand.MORTGAGE_CHEAPER),
    (0.95, RatioBand.EQUAL_COST),
    (0.75, RatioBand.RENT_CHEAPER),
]

LEGEND_ORDER = [
    RatioBand.RENT_MUCH_CHEAPER,
    RatioBand.RENT_CHEAPER,
    RatioBand.EQUAL_COST,
    RatioBand.MORTGAGE_CHEAPER,
    RatioBand.MORTGAGE_MUCH_CHEAPER,
]


def classify_ratio(ratio: Optional[float]) -> RatioBand:
    """Map a rent/payment ratio to its band.

    An infinite ratio (rent against a zero payment) falls in the top band.
    """
    if ratio is None or math.isnan(ratio):
        return RatioBand.NO_DATA

    for lower_bound, band in BAND_THRESHOLDS:
        if ratio >= lower_bound:
            return band

    return RatioBand.RENT_MUCH_CHEAPER

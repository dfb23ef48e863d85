"""Rent versus mortgage affordability per postcode."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from .loan import LoanConfiguration
from .table import DisplayRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AreaRecord:
    """Raw sales and rent figures for one postcode.

    Sale prices are in dollars, rents are weekly.
    """

    postcode: str
    median_sale_price: Optional[float] = None
    median_weekly_rent: Optional[float] = None
    first_quartile_sale_price: Optional[float] = None
    third_quartile_sale_price: Optional[float] = None
    first_quartile_weekly_rent: Optional[float] = None
    third_quartile_weekly_rent: Optional[float] = None


@dataclass(frozen=True)
class ComputedFields:
    """Modeled weekly figures for one postcode under one loan configuration."""

    weekly_payment: float
    weekly_interest: float
    ratio: Optional[float]  # rent / payment, math.inf when payment is zero
    first_quartile_weekly_payment: Optional[float] = None
    third_quartile_weekly_payment: Optional[float] = None


def calculate_ratio(rent: Optional[float], weekly_payment: float) -> Optional[float]:
    """Rent to payment ratio.

    No rent gives no ratio. Rent against a zero payment (e.g. the deposit
    covers the whole price) is infinitely skewed towards buying.
    """
    if not rent:
        return None
    if weekly_payment > 0:
        return rent / weekly_payment
    return math.inf


def _quartile_weekly_payment(
    sale_price: Optional[float],
    config: LoanConfiguration,
) -> Optional[float]:
    """Weekly payment for a quartile price, with the deposit resolved against that price."""
    if not sale_price:
        return None
    return config.mortgage_for(sale_price).weekly_payment


def compute_area(record: AreaRecord, config: LoanConfiguration) -> Optional[ComputedFields]:
    """Model the weekly repayment for a postcode.

    Args:
        record: Raw figures for the postcode
        config: Loan settings applied to every price

    Returns:
        ComputedFields, or None when the postcode has no sale price to model
    """
    sale_price = record.median_sale_price
    if not sale_price:
        return None

    mortgage = config.mortgage_for(sale_price)
    weekly_payment = mortgage.weekly_payment

    return ComputedFields(
        weekly_payment=weekly_payment,
        weekly_interest=mortgage.weekly_interest,
        ratio=calculate_ratio(record.median_weekly_rent, weekly_payment),
        first_quartile_weekly_payment=_quartile_weekly_payment(
            record.first_quartile_sale_price, config
        ),
        third_quartile_weekly_payment=_quartile_weekly_payment(
            record.third_quartile_sale_price, config
        ),
    )


def recompute(
    records: Mapping[str, AreaRecord],
    config: LoanConfiguration,
) -> Dict[str, ComputedFields]:
    """Compute fields for every postcode that has a sale price.

    Postcodes without one are absent from the result.
    """
    computed = {}
    for postcode, record in records.items():
        fields = compute_area(record, config)
        if fields is not None:
            computed[postcode] = fields
    return computed


def project_rows(
    records: Mapping[str, AreaRecord],
    computed: Mapping[str, ComputedFields],
    suburbs: Mapping[str, str],
) -> List[DisplayRow]:
    """Build table rows, best ratio first.

    A postcode is listed if it has suburb names, a rent or a sale price.
    Postcodes without a ratio sort as if their ratio were -1.
    """
    rows = []
    for postcode, record in records.items():
        if not (suburbs.get(postcode) or record.median_weekly_rent or record.median_sale_price):
            continue

        fields = computed.get(postcode)
        rows.append(DisplayRow(
            postcode=postcode,
            suburb=suburbs.get(postcode) or f"Postcode {postcode}",
            ratio=fields.ratio if fields else None,
            rent=record.median_weekly_rent,
            payment=fields.weekly_payment if fields else None,
        ))

    rows.sort(key=lambda row: row.ratio if row.ratio is not None else -1, reverse=True)
    return rows


class AffordabilityIndex:
    """Postcode records and their computed fields under the current loan settings."""

    def __init__(self, records: Mapping[str, AreaRecord], suburbs: Optional[Mapping[str, str]] = None):
        self.records: Dict[str, AreaRecord] = dict(records)
        self.suburbs: Dict[str, str] = dict(suburbs or {})
        self._computed: Dict[str, ComputedFields] = {}
        self.config: Optional[LoanConfiguration] = None

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, postcode: str) -> bool:
        return postcode in self.records

    def recompute(self, config: LoanConfiguration) -> None:
        """Recompute every postcode for a new configuration.

        The new results replace the old ones in a single assignment, so a
        rejected configuration leaves the previous results in place.

        Raises:
            ValueError: If the configuration is invalid
        """
        config.validate()
        computed = recompute(self.records, config)

        self._computed = computed
        self.config = config

        logger.debug(
            "Recomputed %d of %d postcodes (%d without a sale price)",
            len(computed), len(self.records), len(self.records) - len(computed),
        )

    def computed(self, postcode: str) -> Optional[ComputedFields]:
        """Computed fields for a postcode, None if it has no modeled payment."""
        return self._computed.get(postcode)

    def ratio(self, postcode: str) -> Optional[float]:
        fields = self._computed.get(postcode)
        return fields.ratio if fields else None

    def suburb_label(self, postcode: str) -> str:
        return self.suburbs.get(postcode) or f"Postcode {postcode}"

    def project_rows(self) -> List[DisplayRow]:
        return project_rows(self.records, self._computed, self.suburbs)

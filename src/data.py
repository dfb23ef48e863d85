"""Loading of the sales/rent, suburb and boundary datasets."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pandas as pd

from .affordability import AreaRecord

logger = logging.getLogger(__name__)

# Data directory, overridable for deployments that keep data elsewhere
DEFAULT_DATA_DIR = Path(os.environ.get("HOUSING_MAP_DATA_DIR", "data"))

BOUNDARIES_FILE = "POA_2021_NSW.geojson"
SUBURBS_FILE = "postcode_to_suburbs.csv"
AGGREGATED_DATA_FILE = "aggregated_yearly_data.csv"

POSTCODE_PROPERTY = "POA_CODE21"

# Source column -> (AreaRecord field, multiplier). Sale prices are published in $000s.
HOUSING_COLUMNS = {
    "yearly_median_sales_price_000s": ("median_sale_price", 1000),
    "yearly_median_weekly_rent": ("median_weekly_rent", 1),
    "yearly_first_quartile_sales_000s": ("first_quartile_sale_price", 1000),
    "yearly_third_quartile_sales_000s": ("third_quartile_sale_price", 1000),
    "yearly_first_quartile_weekly_rent": ("first_quartile_weekly_rent", 1),
    "yearly_third_quartile_weekly_rent": ("third_quartile_weekly_rent", 1),
}


@dataclass
class HousingDataset:
    """Everything the map needs, keyed by postcode."""

    records: dict[str, AreaRecord]
    suburbs: dict[str, str]
    boundaries: dict = field(default_factory=dict)


def _normalize_postcode(value) -> str | None:
    """Postcode as a string; numeric CSV values like 2000.0 become '2000'."""
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return None
    text = str(value).strip()
    if not text or text.lower() in ("null", "nan"):
        return None
    if text.endswith(".0") and text[:-2].isdigit():
        text = text[:-2]
    return text


def _read_csv(path) -> pd.DataFrame:
    try:
        return pd.read_csv(path, dtype={"Postcode": str}, skip_blank_lines=True)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Failed to read {path}: {e}") from e


def records_from_frame(df: pd.DataFrame) -> dict[str, AreaRecord]:
    """Convert the aggregated sales/rent table to AreaRecords.

    Rows without a postcode are dropped. Missing columns or values become None.
    Later rows for the same postcode replace earlier ones.
    """
    if "Postcode" not in df.columns:
        raise RuntimeError("Housing data has no 'Postcode' column")

    values = {}
    for column, (attr, multiplier) in HOUSING_COLUMNS.items():
        if column in df.columns:
            values[attr] = pd.to_numeric(df[column], errors="coerce") * multiplier
        else:
            logger.warning("Housing data is missing column %s", column)
            values[attr] = pd.Series(np.nan, index=df.index)

    records = {}
    dropped = 0
    for idx, raw_postcode in df["Postcode"].items():
        postcode = _normalize_postcode(raw_postcode)
        if postcode is None:
            dropped += 1
            continue

        fields = {}
        for attr, series in values.items():
            value = series[idx]
            fields[attr] = None if pd.isna(value) else float(value)

        records[postcode] = AreaRecord(postcode=postcode, **fields)

    if dropped:
        logger.warning("Dropped %d housing rows without a postcode", dropped)

    return records


def suburbs_from_frame(df: pd.DataFrame) -> dict[str, str]:
    """Postcode -> comma-joined suburb names, skipping rows with no names."""
    if "Postcode" not in df.columns or "Suburbs" not in df.columns:
        raise RuntimeError("Suburb data needs 'Postcode' and 'Suburbs' columns")

    lookup = {}
    for raw_postcode, names in zip(df["Postcode"], df["Suburbs"]):
        postcode = _normalize_postcode(raw_postcode)
        if postcode is None or pd.isna(names) or not str(names).strip():
            continue
        lookup[postcode] = str(names).strip()

    return lookup


def load_housing_data(path) -> dict[str, AreaRecord]:
    """Load the aggregated yearly sales/rent CSV.

    Raises:
        RuntimeError: If the file cannot be read or lacks a Postcode column
    """
    records = records_from_frame(_read_csv(path))
    logger.info("Loaded %d postcodes from %s", len(records), path)
    return records


def load_suburb_lookup(path) -> dict[str, str]:
    """Load the postcode to suburb names CSV.

    Raises:
        RuntimeError: If the file cannot be read or lacks the needed columns
    """
    lookup = suburbs_from_frame(_read_csv(path))
    logger.info("Loaded suburb names for %d postcodes from %s", len(lookup), path)
    return lookup


def load_postcode_boundaries(path) -> dict:
    """Load postal area boundaries as a GeoJSON FeatureCollection.

    Raises:
        RuntimeError: If the file is missing or not valid GeoJSON
    """
    try:
        with open(path) as f:
            geojson = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise RuntimeError(f"Failed to load boundaries from {path}: {e}") from e

    if geojson.get("type") != "FeatureCollection":
        raise RuntimeError(f"{path} is not a GeoJSON FeatureCollection")

    for feature in geojson.get("features", []):
        props = feature.setdefault("properties", {})
        props[POSTCODE_PROPERTY] = _normalize_postcode(props.get(POSTCODE_PROPERTY))

    logger.info("Loaded %d boundaries from %s", len(geojson.get("features", [])), path)
    return geojson


def load_dataset(data_dir: Path | None = None, include_boundaries: bool = True) -> HousingDataset:
    """Load all datasets from a directory.

    Either every file loads or a RuntimeError is raised, nothing is
    returned half-built.
    """
    data_dir = Path(data_dir or DEFAULT_DATA_DIR)

    records = load_housing_data(data_dir / AGGREGATED_DATA_FILE)
    suburbs = load_suburb_lookup(data_dir / SUBURBS_FILE)
    boundaries = (
        load_postcode_boundaries(data_dir / BOUNDARIES_FILE) if include_boundaries else {}
    )

    return HousingDataset(records=records, suburbs=suburbs, boundaries=boundaries)

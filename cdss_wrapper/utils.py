"""Utility functions for the CDSS API client"""
from datetime import date, datetime
from typing import Optional, Any, List, Tuple, Sequence
import logging
import math

import pandas as pd
from pydantic import BaseModel

# Set up logging
logger = logging.getLogger(__name__)

# Fallbacks tried after ISO-8601 parsing fails
_TIMESTAMP_FORMATS = ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y", "%m-%d-%Y")


def safe_float(value: Any) -> Optional[float]:
    """Convert value to float, returning None instead of raising

    NaN and infinite values count as missing.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return result if math.isfinite(result) else None


def safe_int(value: Any) -> Optional[int]:
    """Convert value to int, returning None instead of raising

    Fractional values such as "1.5" or 5.7 are rejected rather than truncated.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a CDSS datetime string

    Handles ISO-8601 with a "T" or a space separator (the API's
    spaceSepToSeconds form), "Z" and numeric UTC offsets, and a few
    US-style date forms.

    Returns:
        Parsed datetime, or None when the value is missing or malformed
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        pass

    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(value: Optional[date], slash_escaped: bool = False) -> Optional[str]:
    """
    Format a date the way CDSS query filters expect (MM-DD-YYYY)

    Args:
        value: Date or datetime to format
        slash_escaped: Use an escaped "/" (%2F) instead of "-"

    Returns:
        Formatted date, or None if value is None
    """
    if value is None:
        return None
    formatted = value.strftime("%m-%d-%Y")
    return formatted.replace("-", "%2F") if slash_escaped else formatted


def batch_dates(
    start_date: Optional[date],
    end_date: Optional[date]
) -> List[Tuple[date, date]]:
    """
    Split a date range into calendar-year chunks

    Missing bounds default to 1900-01-01 and today.

    Example:
        batch_dates(date(2020, 1, 1), date(2022, 6, 30)) ->
        [(2020-01-01, 2020-12-31), (2021-01-01, 2021-12-31), (2022-01-01, 2022-06-30)]
    """
    start_date = start_date or date(1900, 1, 1)
    end_date = end_date or date.today()
    if start_date.year == end_date.year:
        return [(start_date, end_date)]

    ranges = [(start_date, date(start_date.year, 12, 31))]
    for year in range(start_date.year + 1, end_date.year):
        ranges.append((date(year, 1, 1), date(year, 12, 31)))
    ranges.append((date(end_date.year, 1, 1), end_date))
    return ranges


def records_to_dataframe(
    records: Sequence[BaseModel],
    include_metadata: bool = False
) -> pd.DataFrame:
    """
    Convert parsed CDSS records into a DataFrame, one row per record

    Args:
        records: Models returned by any CdssClient method
        include_metadata: Keep the free-form metadata column

    Returns:
        DataFrame whose columns are the model attributes
    """
    if not records:
        return pd.DataFrame()

    exclude = None if include_metadata else {'metadata'}
    rows = [record.model_dump(exclude=exclude) for record in records]
    logger.debug(f"Converted {len(rows)} records to DataFrame")
    return pd.DataFrame(rows)

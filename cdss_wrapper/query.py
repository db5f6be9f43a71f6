"""Query string construction for CDSS endpoints"""
from datetime import date
from enum import Enum
from typing import Optional, Dict, Any, Mapping, FrozenSet
from collections.abc import Sequence
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict

from .config import DEFAULT_RADIUS, RESPONSE_FORMAT, DATE_FORMAT_DIRECTIVE
from .exceptions import CdssValidationError
from .types import ListJoin
from .utils import format_date, safe_float


class QueryOptions(BaseModel):
    """Per-endpoint rules for turning filters into query values"""
    model_config = ConfigDict(frozen=True)

    list_join: ListJoin = ListJoin.COMMA
    date_format_directive: bool = True
    slash_dates: bool = False
    encode_values: bool = False
    plus_spaces: FrozenSet[str] = frozenset()


def resolve_aoi(aoi: Any, radius: Optional[float] = None) -> Dict[str, Any]:
    """
    Resolve an area-of-interest filter into latitude/longitude/radius

    Args:
        aoi: Mapping with 'latitude' and 'longitude' keys, or a
            two-element [longitude, latitude] sequence
        radius: Search radius in miles (default 20)

    Returns:
        Dict with latitude, longitude and radius

    Raises:
        CdssValidationError: If aoi has any other shape or its
            coordinates are not numbers
    """
    if isinstance(aoi, Mapping):
        latitude, longitude = aoi.get('latitude'), aoi.get('longitude')
    elif isinstance(aoi, Sequence) and not isinstance(aoi, (str, bytes)) and len(aoi) == 2:
        longitude, latitude = aoi
    else:
        raise CdssValidationError(f"Invalid 'aoi' parameter: {aoi!r}")

    latitude, longitude = safe_float(latitude), safe_float(longitude)
    if latitude is None or longitude is None:
        raise CdssValidationError(
            f"Invalid 'aoi' parameter: {aoi!r} needs numeric latitude and longitude"
        )

    return {
        "latitude": latitude,
        "longitude": longitude,
        "radius": DEFAULT_RADIUS if radius is None else radius
    }


class QueryBuilder:
    """Builds wire-format query mappings from logical filters"""

    def __init__(self, options: Optional[QueryOptions] = None):
        self.options = options or QueryOptions()

    def build(
        self,
        filters: Mapping[str, Any],
        aoi: Any = None,
        radius: Optional[float] = None
    ) -> Dict[str, str]:
        """
        Build the query for one request

        Args:
            filters: Wire parameter name -> value (None, scalar, list or date)
            aoi: Optional area of interest, see resolve_aoi
            radius: Radius used with aoi

        Returns:
            Query mapping with string values, starting with format=json
        """
        query = {"format": RESPONSE_FORMAT}
        if self.options.date_format_directive:
            query["dateFormat"] = DATE_FORMAT_DIRECTIVE

        params = dict(filters)
        if aoi is not None:
            params.update(resolve_aoi(aoi, radius))

        for key, value in params.items():
            formatted = self.format_value(key, value)
            if not formatted:
                continue
            query[key] = quote_plus(formatted) if self.options.encode_values else formatted

        return query

    def format_value(self, key: str, value: Any) -> Optional[str]:
        """Format a single filter value, None when it should be omitted"""
        if value is None:
            return None
        if isinstance(value, (list, tuple, set, frozenset)):
            parts = [self._format_scalar(item) for item in value if item is not None]
            formatted = self.options.list_join.value.join(parts)
        else:
            formatted = self._format_scalar(value)

        if key in self.options.plus_spaces:
            formatted = formatted.replace(" ", "+")
        return formatted

    def _format_scalar(self, value: Any) -> str:
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, date):
            return format_date(value, slash_escaped=self.options.slash_dates)
        if isinstance(value, str):
            return value
        return str(value)

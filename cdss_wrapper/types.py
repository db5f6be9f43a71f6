from enum import Enum
from typing import Optional, List, Dict, Iterable, Union
from pydantic import BaseModel, Field, field_validator

from .config import (
    PRODUCTION_BASE_URL, DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT, DEFAULT_PARAMETER
)
from .exceptions import CdssValidationError


class Timescale(str, Enum):
    """Temporal aggregation of a reading"""
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    RAW = "raw"
    HOUR = "hour"

    @classmethod
    def aliases(cls) -> Dict["Timescale", List[str]]:
        """Spellings accepted from callers for each timescale"""
        return {
            cls.DAY: ["day", "days", "daily", "d"],
            cls.MONTH: ["month", "months", "monthly", "mon", "m"],
            cls.YEAR: [
                "wyear", "water_year", "wyears", "water_years", "wateryear",
                "wateryears", "wy", "year", "years", "yearly", "annual",
                "annually", "yr", "y"
            ],
            cls.RAW: ["raw"],
            cls.HOUR: ["hour"],
        }

    @classmethod
    def from_alias(
        cls,
        value: Union[str, "Timescale"],
        allowed: Optional[Iterable["Timescale"]] = None
    ) -> "Timescale":
        """
        Resolve a caller supplied timescale token

        Args:
            value: Timescale or one of its aliases (case-insensitive)
            allowed: Timescales the calling endpoint supports (default: all)

        Returns:
            The matching Timescale

        Raises:
            CdssValidationError: If the token is unknown or not allowed
        """
        allowed = list(allowed) if allowed is not None else list(cls)
        token = value.value if isinstance(value, Timescale) else str(value).lower()
        for timescale in allowed:
            if token in cls.aliases()[timescale]:
                return timescale

        valid = [alias for timescale in allowed for alias in cls.aliases()[timescale]]
        raise CdssValidationError(
            f"Invalid timescale: '{value}'. Valid values are: {', '.join(valid)}"
        )


class DiversionRecordType(str, Enum):
    """Shapes of structure diversion records"""
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    STAGE_VOLUME = "stage_volume"


class WaterRightType(str, Enum):
    """Shapes of water rights records"""
    NET_AMOUNT = "net_amount"
    TRANSACTION = "transaction"


class AnalysisType(str, Enum):
    """Keys a call analysis can be run against"""
    WDID = "wdid"
    GNIS = "gnis"


class ClimateReadingType(str, Enum):
    """Shapes of climate station readings"""
    FROST_DATES = "frost_dates"
    DAILY = "daily"
    MONTHLY = "monthly"


class ClimateParameter(str, Enum):
    """Measurement types reported by climate stations"""
    EVAP = "Evap"
    FROST_DATE = "FrostDate"
    MAX_TEMP = "MaxTemp"
    MEAN_TEMP = "MeanTemp"
    MIN_TEMP = "MinTemp"
    PRECIP = "Precip"
    SNOW = "Snow"
    SNOW_DEPTH = "SnowDepth"
    SNOW_SWE = "SnowSWE"
    SOLAR = "Solar"
    VP = "VP"
    WIND = "Wind"


class ReferenceTableName(str, Enum):
    """Lookup tables served under /referencetables/"""
    COUNTY = "county"
    WATER_DISTRICTS = "waterdistricts"
    WATER_DIVISIONS = "waterdivisions"
    DESIGNATED_BASINS = "designatedbasins"
    MANAGEMENT_DISTRICTS = "managementdistricts"
    TELEMETRY_PARAMS = "telemetryparams"
    CLIMATE_PARAMS = "climateparams"
    DIVRECTYPES = "divrectypes"
    FLAGS = "flags"


class ListJoin(str, Enum):
    """Separators used to send list filters as a single query value"""
    COMMA = ","
    ESCAPED_COMMA_SPACE = "%2C+"
    SPACE = " "


class CdssConfig(BaseModel):
    """Configuration for CDSS API client"""
    api_key: Optional[str] = Field(default=None, description="Optional API key for authentication")
    base_url: str = Field(
        default=PRODUCTION_BASE_URL,
        description="Base URL for the CDSS REST API"
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header value")
    default_parameter: str = Field(
        default=DEFAULT_PARAMETER,
        description="Telemetry parameter used when none is given"
    )
    debug: bool = Field(default=False, description="Log every request at INFO level")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL is an http(s) URL"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip('/')


# Configuration used when a client is built without one
DEFAULT_CONFIG = CdssConfig()

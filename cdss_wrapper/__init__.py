"""
A lightweight Python wrapper for the Colorado Decision Support Systems (CDSS) REST API.
"""

from .client import CdssClient, format_wc_identifier
from .exceptions import (
    CdssError, CdssValidationError,
    CdssAPIError, CdssConnectionError
)
from .models import (
    Station, ClimateStation, Reading, ClimateReading, Well,
    WellMeasurement, LogPick, AdminCall, CallAnalysis, SourceRoute,
    RouteAnalysis, Structure, DiversionRecord, WaterClass, WaterRight,
    ReferenceTable
)
from .paginator import Paginator
from .query import QueryBuilder, QueryOptions, resolve_aoi
from .transport import HttpTransport
from .types import (
    CdssConfig, Timescale, DiversionRecordType, WaterRightType,
    AnalysisType, ClimateReadingType, ClimateParameter,
    ReferenceTableName, ListJoin
)
from .utils import records_to_dataframe

__all__ = [
    'CdssClient',
    'CdssConfig',
    'HttpTransport',
    'Paginator',
    'QueryBuilder',
    'QueryOptions',
    'resolve_aoi',
    'format_wc_identifier',
    'records_to_dataframe',
    'Timescale',
    'DiversionRecordType',
    'WaterRightType',
    'AnalysisType',
    'ClimateReadingType',
    'ClimateParameter',
    'ReferenceTableName',
    'ListJoin',
    'Station',
    'ClimateStation',
    'Reading',
    'ClimateReading',
    'Well',
    'WellMeasurement',
    'LogPick',
    'AdminCall',
    'CallAnalysis',
    'SourceRoute',
    'RouteAnalysis',
    'Structure',
    'DiversionRecord',
    'WaterClass',
    'WaterRight',
    'ReferenceTable',
    'CdssError',
    'CdssValidationError',
    'CdssAPIError',
    'CdssConnectionError'
]

__version__ = "0.1.0"

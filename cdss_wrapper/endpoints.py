"""
CDSS endpoint registry.

Each endpoint pins down its path and the query conventions the upstream
service has been observed to accept: list separator, value encoding and
whether the spaceSepToSeconds date directive is sent.
"""
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict

from .query import QueryBuilder, QueryOptions
from .types import (
    ListJoin, Timescale, DiversionRecordType,
    ReferenceTableName
)


class Endpoint(BaseModel):
    """An API resource path plus its query formatting rules"""
    model_config = ConfigDict(frozen=True)

    path: str
    options: QueryOptions = QueryOptions()

    def query_builder(self) -> QueryBuilder:
        return QueryBuilder(self.options)


_PLAIN = QueryOptions(date_format_directive=False)
_STRUCTURE_LISTS = QueryOptions(
    date_format_directive=False,
    list_join=ListJoin.ESCAPED_COMMA_SPACE
)
_GROUND_WATER = QueryOptions(
    plus_spaces=frozenset({"county", "designatedBasin", "managementDistrict"})
)

# Administrative calls (values are double-decoded upstream)
ADMIN_CALLS_ACTIVE = Endpoint(
    path="/administrativecalls/active/",
    options=QueryOptions(encode_values=True)
)
ADMIN_CALLS_HISTORICAL = Endpoint(
    path="/administrativecalls/historical/",
    options=QueryOptions(encode_values=True)
)

# Analysis services
CALL_ANALYSIS_WDID = Endpoint(path="/analysisservices/callanalysisbywdid/", options=_PLAIN)
CALL_ANALYSIS_GNIS = Endpoint(path="/analysisservices/callanalysisbygnisid/", options=_PLAIN)
SOURCE_ROUTE_FRAMEWORK = Endpoint(path="/analysisservices/watersourcerouteframework/")
SOURCE_ROUTE_ANALYSIS = Endpoint(path="/analysisservices/watersourcerouteanalysis/", options=_PLAIN)

# Climate
CLIMATE_STATIONS = Endpoint(path="/climatedata/climatestations/")
CLIMATE_FROST_DATES = Endpoint(path="/climatedata/climatestationfrostdates/")
CLIMATE_TS_DAY = Endpoint(path="/climatedata/climatestationtsday/")
CLIMATE_TS_MONTH = Endpoint(path="/climatedata/climatestationtsmonth/")

# Ground water
WATER_LEVEL_WELLS = Endpoint(path="/groundwater/waterlevels/wells/", options=_GROUND_WATER)
WELL_MEASUREMENTS = Endpoint(path="/groundwater/waterlevels/wellmeasurements/")
GEOPHYSICAL_LOG_WELLS = Endpoint(path="/groundwater/geophysicallogs/wells/", options=_GROUND_WATER)
GEOPHYSICAL_LOG_PICKS = Endpoint(path="/groundwater/geophysicallogs/geoplogpicks/")

# Structures
STRUCTURES = Endpoint(path="/structures/", options=_STRUCTURE_LISTS)
WATER_CLASSES = Endpoint(path="/structures/divrec/waterclasses/", options=_STRUCTURE_LISTS)
DIVERSION_RECORDS: Dict[DiversionRecordType, Endpoint] = {
    DiversionRecordType.DAY: Endpoint(path="/structures/divrec/divrecday/", options=_STRUCTURE_LISTS),
    DiversionRecordType.MONTH: Endpoint(path="/structures/divrec/divrecmonth/", options=_STRUCTURE_LISTS),
    DiversionRecordType.YEAR: Endpoint(path="/structures/divrec/divrecyear/", options=_STRUCTURE_LISTS),
    DiversionRecordType.STAGE_VOLUME: Endpoint(path="/structures/divrec/stagevolume/", options=_STRUCTURE_LISTS),
}

# Surface water
SURFACE_WATER_STATIONS = Endpoint(path="/surfacewater/surfacewaterstations/")
SURFACE_WATER_TS: Dict[Timescale, Endpoint] = {
    Timescale.DAY: Endpoint(path="/surfacewater/surfacewatertsday/"),
    Timescale.MONTH: Endpoint(path="/surfacewater/surfacewatertsmonth/"),
    Timescale.YEAR: Endpoint(path="/surfacewater/surfacewatertswateryear/"),
}

# Telemetry
TELEMETRY_STATIONS = Endpoint(path="/telemetrystations/telemetrystation/")
TELEMETRY_TS: Dict[Timescale, Endpoint] = {
    Timescale.DAY: Endpoint(path="/telemetrystations/telemetrytimeseriesday/"),
    Timescale.HOUR: Endpoint(path="/telemetrystations/telemetrytimeserieshour/"),
    Timescale.RAW: Endpoint(path="/telemetrystations/telemetrytimeseriesraw/"),
}

# Water rights
WATER_RIGHTS_NET_AMOUNTS = Endpoint(path="/waterrights/netamount/")
WATER_RIGHTS_TRANSACTIONS = Endpoint(path="/waterrights/transaction/")

# Reference tables: endpoint plus keyword filter -> wire parameter
REFERENCE_TABLES: Dict[ReferenceTableName, Tuple[Endpoint, Dict[str, str]]] = {
    ReferenceTableName.COUNTY: (
        Endpoint(path="/referencetables/county/", options=_PLAIN),
        {"county": "county"}
    ),
    ReferenceTableName.WATER_DISTRICTS: (
        Endpoint(path="/referencetables/waterdistrict/", options=_PLAIN),
        {"division": "division", "water_district": "waterDistrict"}
    ),
    ReferenceTableName.WATER_DIVISIONS: (
        Endpoint(path="/referencetables/waterdivision/", options=_PLAIN),
        {"division": "division"}
    ),
    ReferenceTableName.MANAGEMENT_DISTRICTS: (
        Endpoint(path="/referencetables/managementdistrict/", options=_PLAIN),
        {"management_district": "managementDistrictName"}
    ),
    ReferenceTableName.DESIGNATED_BASINS: (
        Endpoint(path="/referencetables/designatedbasin/", options=_PLAIN),
        {"designated_basin": "designatedBasinName"}
    ),
    ReferenceTableName.TELEMETRY_PARAMS: (
        Endpoint(path="/referencetables/telemetryparams/", options=_PLAIN),
        {"param": "parameter"}
    ),
    ReferenceTableName.CLIMATE_PARAMS: (
        Endpoint(path="/referencetables/climatestationmeastype/", options=_PLAIN),
        {"param": "measType"}
    ),
    ReferenceTableName.DIVRECTYPES: (
        Endpoint(path="/referencetables/divrectypes/", options=_PLAIN),
        {"divrectype": "divRecType"}
    ),
    ReferenceTableName.FLAGS: (
        Endpoint(path="/referencetables/stationflags/", options=_PLAIN),
        {"flag": "flag"}
    ),
}

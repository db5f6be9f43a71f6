"""
Translation of CDSS JSON records into typed models.

Each ``build_*`` function turns one raw record into one model; the
shape-discriminated builders take the shape explicitly and never infer it
from the record. ``parse_*`` functions apply a builder to a whole page
envelope.
"""
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from .exceptions import CdssValidationError
from .models import (
    Station, ClimateStation, Reading, ClimateReading, Well,
    WellMeasurement, LogPick, AdminCall, CallAnalysis, SourceRoute,
    RouteAnalysis, Structure, DiversionRecord, WaterClass, WaterRight,
    ReferenceTable
)
from .types import (
    Timescale, DiversionRecordType, WaterRightType,
    AnalysisType, ClimateReadingType
)
from .utils import safe_float, safe_int, parse_timestamp

T = TypeVar('T')
Record = Dict[str, Any]

RESULT_LIST_KEY = "ResultList"


def parse_collection(envelope: Optional[Dict[str, Any]], build: Callable[[Record], T]) -> List[T]:
    """Apply build to every record of a page envelope

    A missing envelope or record list yields an empty list.
    """
    if not envelope:
        return []
    records = envelope.get(RESULT_LIST_KEY) or []
    return [build(record) for record in records]


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _shape(enum_cls, value: Any, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise CdssValidationError(
            f"Invalid {label}: {value!r}. Valid values are: {valid}"
        ) from None


# Stations

def build_station(data: Record) -> Station:
    return Station(
        station_num=_text(data.get("stationNum")),
        abbrev=_text(data.get("abbrev")),
        usgs_site_id=_text(data.get("usgsSiteId") or data.get("usgsStationId")),
        name=_text(data.get("stationName")),
        agency=_text(data.get("dataSource")),
        latitude=safe_float(data.get("latitude")),
        longitude=safe_float(data.get("longitude")),
        utm_x=safe_float(data.get("utmX")),
        utm_y=safe_float(data.get("utmY")),
        location_accuracy=_text(data.get("locationAccuracy")),
        division=safe_int(data.get("division")),
        water_district=safe_int(data.get("waterDistrict")),
        county=_text(data.get("county")),
        state=_text(data.get("state")),
        start_date=parse_timestamp(data.get("startDate")),
        end_date=parse_timestamp(data.get("endDate")),
        modified=parse_timestamp(data.get("modified")),
        more_information=_text(data.get("moreInformation")),
        meas_unit=_text(data.get("measUnit")),
    )


def build_climate_station(data: Record) -> ClimateStation:
    parameter_types = data.get("parameterTypes") or []
    if isinstance(parameter_types, str):
        parameter_types = [p.strip() for p in parameter_types.split(",") if p.strip()]

    return ClimateStation(
        station_number=_text(data.get("stationNum")),
        station_name=_text(data.get("stationName")),
        site_id=_text(data.get("siteId")),
        division=safe_int(data.get("division")),
        water_district=safe_int(data.get("waterDistrict")),
        county=_text(data.get("county")),
        state=_text(data.get("state")),
        latitude=safe_float(data.get("latitude")),
        longitude=safe_float(data.get("longitude")),
        utm_x=safe_float(data.get("utmX")),
        utm_y=safe_float(data.get("utmY")),
        elevation=safe_float(data.get("elevation")),
        data_source=_text(data.get("dataSource")),
        start_date=parse_timestamp(data.get("startDate")),
        end_date=parse_timestamp(data.get("endDate")),
        modified=parse_timestamp(data.get("modified")),
        more_information=_text(data.get("moreInformation")),
        parameter_types=[_text(p) for p in parameter_types],
    )


# Readings

def _flags(data: Record, names: str) -> Dict[str, Optional[str]]:
    return {f"flag_{name.lower()}": _text(data.get(f"flag{name}")) for name in names}


def _flow_statistics(data: Record) -> Dict[str, Optional[float]]:
    return {
        "min_q_cfs": safe_float(data.get("minQCfs")),
        "max_q_cfs": safe_float(data.get("maxQCfs")),
        "avg_q_cfs": safe_float(data.get("avgQCfs")),
        "total_q_af": safe_float(data.get("totalQAf")),
    }


def build_reading(data: Record, timescale: Union[Timescale, str]) -> Reading:
    """
    Build a station reading for the given timescale

    Args:
        data: Raw API record
        timescale: Timescale the record was requested at

    Raises:
        CdssValidationError: If timescale is not a Timescale value
    """
    timescale = _shape(Timescale, timescale, "timescale")

    params: Dict[str, Any] = {
        "timescale": timescale,
        "station_num": _text(data.get("stationNum")),
        "abbrev": _text(data.get("abbrev")),
        "parameter": _text(data.get("parameter")),
        "usgs_site_id": _text(data.get("usgsSiteId")),
        "meas_type": _text(data.get("measType")),
        "meas_unit": _text(data.get("measUnit")),
        "meas_count": safe_int(data.get("measCount")),
        "meas_value": safe_float(data.get("measValue")),
        "meas_date": parse_timestamp(data.get("measDate")),
        "meas_date_time": parse_timestamp(data.get("measDateTime")),
        "data_source": _text(data.get("dataSource")),
        "modified": parse_timestamp(data.get("modified")),
    }

    if timescale is Timescale.DAY:
        params["value"] = safe_float(data.get("value"))
        params["flags"] = _flags(data, "ABCD")
    elif timescale is Timescale.MONTH:
        params["cal_year"] = safe_int(data.get("calYear"))
        params["cal_month_num"] = safe_int(data.get("calMonNum"))
        params.update(_flow_statistics(data))
    elif timescale is Timescale.YEAR:
        params["water_year"] = safe_int(data.get("waterYear"))
        params.update(_flow_statistics(data))
    else:
        params["flags"] = _flags(data, "AB")

    return Reading(**params)


def build_climate_reading(data: Record, reading_type: Union[ClimateReadingType, str]) -> ClimateReading:
    """Build a climate reading of the given type (frost_dates, daily, monthly)"""
    reading_type = _shape(ClimateReadingType, reading_type, "climate reading type")

    params: Dict[str, Any] = {
        "reading_type": reading_type,
        "station_number": _text(data.get("stationNum")),
        "site_id": _text(data.get("siteId")),
        "meas_type": _text(data.get("measType")),
        "data_source": _text(data.get("dataSource")),
        "modified": parse_timestamp(data.get("modified")),
    }

    if reading_type is ClimateReadingType.FROST_DATES:
        params.update(
            cal_year=safe_int(data.get("calYear")),
            spring_frost_date=parse_timestamp(data.get("springFrostDate")),
            fall_frost_date=parse_timestamp(data.get("fallFrostDate")),
            frost_date_28f_spring=parse_timestamp(data.get("l28s")),
            frost_date_28f_fall=parse_timestamp(data.get("f28f")),
            frost_date_32f_spring=parse_timestamp(data.get("l32s")),
            frost_date_32f_fall=parse_timestamp(data.get("f32f")),
        )
    elif reading_type is ClimateReadingType.DAILY:
        params.update(
            meas_date=parse_timestamp(data.get("measDate")),
            value=safe_float(data.get("value")),
            flag=_text(data.get("flag")),
            units=_text(data.get("units")),
        )
    else:
        params.update(
            cal_year=safe_int(data.get("calYear")),
            cal_month=safe_int(data.get("calMonth")),
            value=safe_float(data.get("value")),
            flag=_text(data.get("flag")),
            units=_text(data.get("units")),
        )

    return ClimateReading(**params)


# Ground water

def _well_params(data: Record) -> Dict[str, Any]:
    return {
        "well_id": _text(data.get("wellId")),
        "well_name": _text(data.get("wellName")),
        "latitude": safe_float(data.get("latitude")),
        "longitude": safe_float(data.get("longitude")),
        "location_accuracy": _text(data.get("locationAccuracy")),
        "county": _text(data.get("county")),
        "designated_basin": _text(data.get("designatedBasin")),
        "management_district": _text(data.get("managementDistrict")),
        "division": safe_int(data.get("division")),
        "water_district": safe_int(data.get("waterDistrict")),
        "modified": parse_timestamp(data.get("modified")),
    }


def build_well(data: Record) -> Well:
    return Well(**_well_params(data))


def build_geophysical_well(data: Record) -> Well:
    """Build a geophysical log well, which also carries depth and elevation"""
    return Well(
        depth=safe_float(data.get("totalDepth")),
        elevation=safe_float(data.get("groundElevation")),
        **_well_params(data)
    )


def build_well_measurement(data: Record) -> WellMeasurement:
    return WellMeasurement(
        well_id=_text(data.get("wellId")),
        well_name=_text(data.get("wellName")),
        division=safe_int(data.get("division")),
        water_district=safe_int(data.get("waterDistrict")),
        county=_text(data.get("county")),
        management_district=_text(data.get("managementDistrict")),
        designated_basin=_text(data.get("designatedBasin")),
        publication=_text(data.get("publication")),
        measurement_date=parse_timestamp(data.get("measurementDate")),
        depth_to_water=safe_float(data.get("depthToWater")),
        measuring_point_above_land_surface=safe_float(data.get("measuringPointAboveLandSurface")),
        depth_water_below_land_surface=safe_float(data.get("depthWaterBelowLandSurface")),
        elevation_of_water=safe_float(data.get("elevationOfWater")),
        delta=safe_float(data.get("delta")),
        data_source=_text(data.get("dataSource")),
        published=data.get("published"),
        modified=parse_timestamp(data.get("modified")),
    )


def build_log_pick(data: Record) -> LogPick:
    return LogPick(
        well_id=_text(data.get("wellId")),
        aquifer=_text(data.get("aquifer")),
        g_log_top_depth=safe_float(data.get("gLogTopDepth")),
        g_log_base_depth=safe_float(data.get("gLogBaseDepth")),
        g_log_top_elev=safe_float(data.get("gLogTopElev")),
        g_log_base_elev=safe_float(data.get("gLogBaseElev")),
        g_log_thickness=safe_float(data.get("gLogThickness")),
        comment=_text(data.get("comment")),
        modified=parse_timestamp(data.get("modified")),
    )


# Administrative calls and analysis services

def build_admin_call(data: Record) -> AdminCall:
    return AdminCall(
        call_number=safe_int(data.get("callNumber")),
        call_type=_text(data.get("callType")),
        date_time_set=parse_timestamp(data.get("dateTimeSet")),
        date_time_released=parse_timestamp(data.get("dateTimeReleased")),
        water_source_name=_text(data.get("waterSourceName")),
        location_wdid=_text(data.get("locationWdid")),
        location_wdid_streammile=safe_float(data.get("locationWdidStreammile")),
        location_structure_name=_text(data.get("locationStructureName")),
        priority_wdid=_text(data.get("priorityWdid")),
        priority_structure_name=_text(data.get("priorityStructureName")),
        priority_admin_number=safe_float(data.get("priorityAdminNumber")),
        priority_order_number=safe_int(data.get("priorityOrderNumber")),
        priority_date=parse_timestamp(data.get("priorityDate")),
        priority_number=safe_int(data.get("priorityNumber")),
        bounding_wdid=_text(data.get("boundingWdid")),
        bounding_structure_name=_text(data.get("boundingStructureName")),
        set_comments=_text(data.get("setComments")),
        release_comment=_text(data.get("releaseComment")),
        division=safe_int(data.get("division")),
        location_structure_latitude=safe_float(data.get("locationStructureLatitude")),
        location_structure_longitude=safe_float(data.get("locationStructureLongitude")),
        bounding_structure_latitude=safe_float(data.get("boundingStructureLatitude")),
        bounding_structure_longitude=safe_float(data.get("boundingStructureLongitude")),
        modified=parse_timestamp(data.get("modified")),
        more_information=_text(data.get("moreInformation")),
    )


def build_call_analysis(data: Record, analysis_type: Union[AnalysisType, str]) -> CallAnalysis:
    """
    Build a call analysis record

    WDID analyses identify the analysed structure by ``wdid``; GNIS
    analyses by ``gnis_id`` and ``stream_mile``. Details of the
    controlling call that have no attribute of their own are kept in
    metadata.
    """
    analysis_type = _shape(AnalysisType, analysis_type, "analysis type")

    if analysis_type is AnalysisType.WDID:
        location = {"wdid": _text(data.get("analysisWdid"))}
    else:
        location = {
            "gnis_id": _text(data.get("analysisGnisId")),
            "stream_mile": safe_float(data.get("analysisStreamMile")),
        }

    metadata = {
        "division": safe_int(data.get("division")),
        "date_time_released": parse_timestamp(data.get("dateTimeReleased")),
        "water_source_name": _text(data.get("waterSourceName")),
        "location_structure": _text(data.get("locationStructure")),
        "priority_order_no": safe_int(data.get("priorityOrderNo")),
        "priority_no": _text(data.get("priorityNo")),
        "bounding_wdid": _text(data.get("boundingWdid")),
        "bounding_structure_name": _text(data.get("boundingStructureName")),
        "set_comments": _text(data.get("setComments")),
        "release_comment": _text(data.get("releaseComment")),
    }

    return CallAnalysis(
        analysis_type=analysis_type,
        analysis_date=parse_timestamp(data.get("analysisDate")),
        admin_number=safe_float(data.get("analysisWrAdminNo")),
        percent_time_out_of_priority=safe_float(data.get("analysisOutOfPriorityPercentOfDay")),
        downstream_call_wdid=_text(data.get("locationWdid")),
        downstream_call_right=_text(data.get("priorityStructure")),
        downstream_call_stream_mile=safe_float(data.get("locationWdidStreamMile")),
        downstream_call_admin_number=safe_float(data.get("priorityAdminNo")),
        downstream_call_appropriation_date=parse_timestamp(data.get("priorityDate")),
        downstream_call_status=_text(data.get("callType")),
        modified=parse_timestamp(data.get("dateTimeSet")),
        metadata={key: value for key, value in metadata.items() if value is not None},
        **location,
    )


def build_source_route(data: Record) -> SourceRoute:
    return SourceRoute(
        gnis_id=_text(data.get("gnisId")),
        gnis_name=_text(data.get("gnisName")),
        division=safe_int(data.get("division")),
        water_district=safe_int(data.get("waterDistrict")),
        stream_length=safe_float(data.get("streamLength")),
        tributary_to_level=safe_int(data.get("tributaryToLevel")),
        tributary_to_gnis_id=_text(data.get("tributaryToGnisId") or data.get("TributaryToGnisId")),
        tributary_gnis_name=_text(data.get("tribGnisName")),
        tributary_to_stream_mile=safe_float(data.get("tributaryToStreamMile")),
    )


def build_route_analysis(data: Record) -> RouteAnalysis:
    return RouteAnalysis(
        wdid=_text(data.get("wdid")),
        structure_name=_text(data.get("structureName")),
        stream_mile=safe_float(data.get("streamMile")),
        structure_type=_text(data.get("structureType")),
        decreed_amount=safe_float(data.get("decreedAmount")),
        decreed_unit=_text(data.get("decreedUnit")),
        appropriation_date=parse_timestamp(data.get("appropriationDate")),
        admin_number=safe_float(data.get("adminNo")),
        modified=parse_timestamp(data.get("modified")),
    )


# Structures

def build_structure(data: Record) -> Structure:
    return Structure(
        wdid=_text(data.get("wdid")),
        structure_name=_text(data.get("structureName")),
        structure_type=_text(data.get("structureType")),
        water_source=_text(data.get("waterSource")),
        gnis_id=_text(data.get("gnisId")),
        stream_mile=safe_float(data.get("streamMile")),
        division=safe_int(data.get("division")),
        water_district=safe_int(data.get("waterDistrict")),
        county=_text(data.get("county")),
        designated_basin=_text(data.get("designatedBasin")),
        management_district=_text(data.get("managementDistrict")),
        latitude=safe_float(data.get("latitude")),
        longitude=safe_float(data.get("longitude")),
        utm_x=safe_float(data.get("utmX")),
        utm_y=safe_float(data.get("utmY")),
        stream_num=_text(data.get("streamNum")),
        structure_num=_text(data.get("structureNum")),
        ciu_code=_text(data.get("ciuCode")),
        ciucode_desc=_text(data.get("ciucodeDesc")),
        more_information=_text(data.get("moreInformation")),
        modified=parse_timestamp(data.get("modified")),
    )


def _data_meas_date(value: Any, record_type: DiversionRecordType):
    # Monthly and yearly records report "YYYY-MM" and "YYYY"
    value = _text(value)
    if value is None:
        return None
    if record_type is DiversionRecordType.YEAR:
        return parse_timestamp(f"{value}-01-01 00:00:00")
    if record_type is DiversionRecordType.MONTH:
        return parse_timestamp(f"{value}-01 00:00:00")
    return parse_timestamp(value)


def build_diversion_record(data: Record, record_type: Union[DiversionRecordType, str]) -> DiversionRecord:
    """Build a diversion record of the given type (day, month, year, stage_volume)"""
    record_type = _shape(DiversionRecordType, record_type, "diversion record type")

    params: Dict[str, Any] = {
        "record_type": record_type,
        "wdid": _text(data.get("wdid")),
        "data_meas_date": _data_meas_date(data.get("dataMeasDate"), record_type),
        "data_value": safe_float(data.get("dataValue")),
        "meas_units": _text(data.get("measUnits")),
        "approval_status": _text(data.get("approvalStatus")),
        "modified": parse_timestamp(data.get("modified")),
    }

    if record_type is DiversionRecordType.STAGE_VOLUME:
        params.update(
            stage=safe_float(data.get("stage")),
            volume=safe_float(data.get("volume")),
        )
    else:
        params.update(
            water_class_num=safe_int(data.get("waterClassNum")),
            wc_identifier=_text(data.get("wcIdentifier")),
            meas_interval=_text(data.get("measInterval")),
            meas_count=safe_int(data.get("measCount")),
        )
        if record_type is DiversionRecordType.DAY:
            params["obs_code"] = _text(data.get("obsCode"))

    return DiversionRecord(**params)


def build_water_class(data: Record) -> WaterClass:
    return WaterClass(
        wdid=_text(data.get("wdid")),
        wc_identifier=_text(data.get("wcIdentifier")),
        por_start=parse_timestamp(data.get("porStart")),
        por_end=parse_timestamp(data.get("porEnd")),
        div_type=_text(data.get("divrectype")),
        timestep=_text(data.get("timestep")),
        units=_text(data.get("units")),
        source_code=_text(data.get("sourceCode")),
        use_code=_text(data.get("useCode")),
        op_code=_text(data.get("opCode")),
        modified=parse_timestamp(data.get("modified")),
    )


# Water rights

def _water_right_base(data: Record) -> Dict[str, Any]:
    return {
        "wdid": _text(data.get("wdid")),
        "water_right_name": _text(data.get("waterRightName")),
        "admin_number": safe_float(data.get("adminNumber")),
        "adj_date": parse_timestamp(data.get("adjDate")),
        "order_number": _text(data.get("orderNumber")),
        "prior_cases": _text(data.get("priorCases")),
        "decreed_uses": _text(data.get("decreedUses")),
        "decreed_amount": safe_float(data.get("decreedAmount")),
        "decreed_units": _text(data.get("decreedUnits")),
        "county": _text(data.get("county")),
        "water_district": safe_int(data.get("waterDistrict")),
        "division": safe_int(data.get("division")),
        "modified": parse_timestamp(data.get("modified")),
    }


def build_water_right(data: Record, right_type: Union[WaterRightType, str]) -> WaterRight:
    """Build a water right as a net amount or a transaction"""
    right_type = _shape(WaterRightType, right_type, "water rights type")
    params = _water_right_base(data)

    if right_type is WaterRightType.NET_AMOUNT:
        params.update(
            appropriation_date=parse_timestamp(data.get("appropriationDate")),
            padj_date=parse_timestamp(data.get("padjDate")),
            adj_type=_text(data.get("adjType")),
            status=_text(data.get("status")),
            stream_mile=safe_float(data.get("streamMile")),
            structure_type=_text(data.get("structureType")),
            latitude=safe_float(data.get("latitude")),
            longitude=safe_float(data.get("longitude")),
        )
    else:
        params.update(
            trans_id=_text(data.get("transId")),
            trans_type=_text(data.get("transType")),
            case_number=_text(data.get("caseNumber")),
            action_comment=_text(data.get("actionComment")),
            action_update=_text(data.get("actionUpdate")),
        )

    return WaterRight(**params)


# Reference tables

def build_reference_table(data: Record) -> ReferenceTable:
    return ReferenceTable(
        name=_text(data.get("name")),
        code=_text(data.get("code")),
        description=_text(data.get("description")),
        division=safe_int(data.get("division")),
        division_name=_text(data.get("divisionName")),
        water_district=safe_int(data.get("waterDistrict")),
        water_district_name=_text(data.get("waterDistrictName")),
        county=_text(data.get("county")),
        management_district=_text(data.get("managementDistrict")),
        management_district_name=_text(data.get("managementDistrictName")),
        designated_basin=_text(data.get("designatedBasin")),
        designated_basin_name=_text(data.get("designatedBasinName")),
        parameter=_text(data.get("parameter") or data.get("measType")),
        flag=_text(data.get("flag")),
        flag_column=_text(data.get("flagColumn")),
        divrectype=_text(data.get("divRecType")),
        div_rec_type_long=_text(data.get("divRecTypeLong")),
        additional_info=_text(data.get("additionalInfo")),
        data_source=_text(data.get("dataSource")),
        publication_name=_text(data.get("publicationName")),
        action_name=_text(data.get("actionName")),
        action_descr=_text(data.get("actionDescr")),
        ciu_code=_text(data.get("ciuCode")),
        ciu_code_long=_text(data.get("ciuCodeLong")),
        obs_code=_text(data.get("obsCode")),
        obs_code_long=_text(data.get("obsCodeLong")),
        obs_descr=_text(data.get("obsDescr")),
        start_iyr=safe_int(data.get("startIyr")),
        end_iyr=safe_int(data.get("endIyr")),
        not_used_code=_text(data.get("notUsedCode")),
        not_used_code_descr=_text(data.get("notUsedCodeDescr")),
        submission_type=_text(data.get("submissionType")),
    )


# Envelope parsers

def parse_stations(envelope: Dict[str, Any]) -> List[Station]:
    return parse_collection(envelope, build_station)


def parse_climate_stations(envelope: Dict[str, Any]) -> List[ClimateStation]:
    return parse_collection(envelope, build_climate_station)


def parse_readings(envelope: Dict[str, Any], timescale: Union[Timescale, str]) -> List[Reading]:
    timescale = _shape(Timescale, timescale, "timescale")
    return parse_collection(envelope, lambda data: build_reading(data, timescale))


def parse_climate_readings(
    envelope: Dict[str, Any],
    reading_type: Union[ClimateReadingType, str]
) -> List[ClimateReading]:
    reading_type = _shape(ClimateReadingType, reading_type, "climate reading type")
    return parse_collection(envelope, lambda data: build_climate_reading(data, reading_type))


def parse_wells(envelope: Dict[str, Any]) -> List[Well]:
    return parse_collection(envelope, build_well)


def parse_geophysical_wells(envelope: Dict[str, Any]) -> List[Well]:
    return parse_collection(envelope, build_geophysical_well)


def parse_well_measurements(envelope: Dict[str, Any]) -> List[WellMeasurement]:
    return parse_collection(envelope, build_well_measurement)


def parse_log_picks(envelope: Dict[str, Any]) -> List[LogPick]:
    return parse_collection(envelope, build_log_pick)


def parse_admin_calls(envelope: Dict[str, Any]) -> List[AdminCall]:
    return parse_collection(envelope, build_admin_call)


def parse_call_analyses(
    envelope: Dict[str, Any],
    analysis_type: Union[AnalysisType, str]
) -> List[CallAnalysis]:
    analysis_type = _shape(AnalysisType, analysis_type, "analysis type")
    return parse_collection(envelope, lambda data: build_call_analysis(data, analysis_type))


def parse_source_routes(envelope: Dict[str, Any]) -> List[SourceRoute]:
    return parse_collection(envelope, build_source_route)


def parse_route_analyses(envelope: Dict[str, Any]) -> List[RouteAnalysis]:
    return parse_collection(envelope, build_route_analysis)


def parse_structures(envelope: Dict[str, Any]) -> List[Structure]:
    return parse_collection(envelope, build_structure)


def parse_diversion_records(
    envelope: Dict[str, Any],
    record_type: Union[DiversionRecordType, str]
) -> List[DiversionRecord]:
    record_type = _shape(DiversionRecordType, record_type, "diversion record type")
    return parse_collection(envelope, lambda data: build_diversion_record(data, record_type))


def parse_water_classes(envelope: Dict[str, Any]) -> List[WaterClass]:
    return parse_collection(envelope, build_water_class)


def parse_water_rights(
    envelope: Dict[str, Any],
    right_type: Union[WaterRightType, str]
) -> List[WaterRight]:
    right_type = _shape(WaterRightType, right_type, "water rights type")
    return parse_collection(envelope, lambda data: build_water_right(data, right_type))


def parse_reference_table(envelope: Dict[str, Any]) -> List[ReferenceTable]:
    return parse_collection(envelope, build_reference_table)

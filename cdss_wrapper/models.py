"""
Typed records returned by the CDSS client.

Records are immutable once built. Attributes that the API did not send,
or sent in a form that could not be coerced, are None. Every record has
a ``metadata`` dict for fields that are not promoted to attributes.
"""
from datetime import datetime
from typing import Optional, Dict, List, Any, Set

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .types import (
    Timescale, DiversionRecordType, AnalysisType, ClimateReadingType
)


class CdssModel(BaseModel):
    """Base for all CDSS records"""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    metadata: Dict[str, Any] = Field(default_factory=dict)


class Station(CdssModel):
    """Surface water or telemetry station"""
    station_num: Optional[str] = None
    abbrev: Optional[str] = None
    usgs_site_id: Optional[str] = None
    name: Optional[str] = None
    agency: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    utm_x: Optional[float] = None
    utm_y: Optional[float] = None
    location_accuracy: Optional[str] = None
    division: Optional[int] = None
    water_district: Optional[int] = None
    county: Optional[str] = None
    state: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    modified: Optional[datetime] = None
    more_information: Optional[str] = None
    meas_unit: Optional[str] = None


class ClimateStation(CdssModel):
    """Climate monitoring station"""
    station_number: Optional[str] = None
    station_name: Optional[str] = None
    site_id: Optional[str] = None
    division: Optional[int] = None
    water_district: Optional[int] = None
    county: Optional[str] = None
    state: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    utm_x: Optional[float] = None
    utm_y: Optional[float] = None
    elevation: Optional[float] = None
    data_source: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    modified: Optional[datetime] = None
    more_information: Optional[str] = None
    parameter_types: List[str] = Field(default_factory=list)


# Timescale-specific attributes of a Reading. A field may belong to more
# than one group (flow statistics are shared by month and year).
_READING_GROUPS: Dict[Timescale, Set[str]] = {
    Timescale.DAY: {"value", "flags"},
    Timescale.MONTH: {"cal_year", "cal_month_num", "min_q_cfs", "max_q_cfs", "avg_q_cfs", "total_q_af"},
    Timescale.YEAR: {"water_year", "min_q_cfs", "max_q_cfs", "avg_q_cfs", "total_q_af"},
    Timescale.RAW: {"flags"},
    Timescale.HOUR: {"flags"},
}


class Reading(CdssModel):
    """
    Station time series value.

    Which attributes beyond the shared station/parameter identity are
    populated depends on ``timescale``:

    - day: value, flags (flag_a..flag_d)
    - month: cal_year, cal_month_num, min/max/avg_q_cfs, total_q_af
    - year: water_year, min/max/avg_q_cfs, total_q_af
    - raw, hour: flags (flag_a, flag_b)
    """
    timescale: Timescale

    station_num: Optional[str] = None
    abbrev: Optional[str] = None
    parameter: Optional[str] = None
    usgs_site_id: Optional[str] = None
    meas_type: Optional[str] = None
    meas_unit: Optional[str] = None
    meas_count: Optional[int] = None
    meas_value: Optional[float] = None
    meas_date: Optional[datetime] = None
    meas_date_time: Optional[datetime] = None
    data_source: Optional[str] = None
    modified: Optional[datetime] = None

    value: Optional[float] = None
    flags: Optional[Dict[str, Optional[str]]] = None

    cal_year: Optional[int] = None
    cal_month_num: Optional[int] = None
    water_year: Optional[int] = None
    min_q_cfs: Optional[float] = None
    max_q_cfs: Optional[float] = None
    avg_q_cfs: Optional[float] = None
    total_q_af: Optional[float] = None

    @model_validator(mode='after')
    def validate_timescale_fields(self) -> "Reading":
        """Reject attributes that belong to another timescale"""
        allowed = _READING_GROUPS[self.timescale]
        grouped = set().union(*_READING_GROUPS.values())
        stray = sorted(
            name for name in grouped - allowed
            if getattr(self, name) is not None
        )
        if stray:
            raise ValueError(
                f"Fields {stray} are not valid for {self.timescale.value} readings"
            )
        return self


class ClimateReading(CdssModel):
    """Climate station frost date, daily or monthly value"""
    reading_type: ClimateReadingType

    station_number: Optional[str] = None
    site_id: Optional[str] = None
    meas_type: Optional[str] = None
    data_source: Optional[str] = None
    modified: Optional[datetime] = None

    cal_year: Optional[int] = None
    cal_month: Optional[int] = None
    meas_date: Optional[datetime] = None
    value: Optional[float] = None
    flag: Optional[str] = None
    units: Optional[str] = None

    spring_frost_date: Optional[datetime] = None
    fall_frost_date: Optional[datetime] = None
    frost_date_28f_spring: Optional[datetime] = None
    frost_date_28f_fall: Optional[datetime] = None
    frost_date_32f_spring: Optional[datetime] = None
    frost_date_32f_fall: Optional[datetime] = None


class Well(CdssModel):
    """Water level or geophysical log well"""
    well_id: Optional[str] = None
    well_name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location_accuracy: Optional[str] = None
    county: Optional[str] = None
    designated_basin: Optional[str] = None
    management_district: Optional[str] = None
    division: Optional[int] = None
    water_district: Optional[int] = None
    depth: Optional[float] = None
    elevation: Optional[float] = None
    modified: Optional[datetime] = None


class WellMeasurement(CdssModel):
    """Water level measurement taken at a well"""
    well_id: Optional[str] = None
    well_name: Optional[str] = None
    division: Optional[int] = None
    water_district: Optional[int] = None
    county: Optional[str] = None
    management_district: Optional[str] = None
    designated_basin: Optional[str] = None
    publication: Optional[str] = None
    measurement_date: Optional[datetime] = None
    depth_to_water: Optional[float] = None
    measuring_point_above_land_surface: Optional[float] = None
    depth_water_below_land_surface: Optional[float] = None
    elevation_of_water: Optional[float] = None
    delta: Optional[float] = None
    data_source: Optional[str] = None
    published: Any = None
    modified: Optional[datetime] = None

    @property
    def has_water_level(self) -> bool:
        return self.depth_to_water is not None or self.elevation_of_water is not None


class LogPick(CdssModel):
    """Aquifer pick from a geophysical well log"""
    well_id: Optional[str] = None
    aquifer: Optional[str] = None
    g_log_top_depth: Optional[float] = None
    g_log_base_depth: Optional[float] = None
    g_log_top_elev: Optional[float] = None
    g_log_base_elev: Optional[float] = None
    g_log_thickness: Optional[float] = None
    comment: Optional[str] = None
    modified: Optional[datetime] = None


class AdminCall(CdssModel):
    """Water administration call"""
    call_number: Optional[int] = None
    call_type: Optional[str] = None
    date_time_set: Optional[datetime] = None
    date_time_released: Optional[datetime] = None
    water_source_name: Optional[str] = None
    location_wdid: Optional[str] = None
    location_wdid_streammile: Optional[float] = None
    location_structure_name: Optional[str] = None
    priority_wdid: Optional[str] = None
    priority_structure_name: Optional[str] = None
    priority_admin_number: Optional[float] = None
    priority_order_number: Optional[int] = None
    priority_date: Optional[datetime] = None
    priority_number: Optional[int] = None
    bounding_wdid: Optional[str] = None
    bounding_structure_name: Optional[str] = None
    set_comments: Optional[str] = None
    release_comment: Optional[str] = None
    division: Optional[int] = None
    location_structure_latitude: Optional[float] = None
    location_structure_longitude: Optional[float] = None
    bounding_structure_latitude: Optional[float] = None
    bounding_structure_longitude: Optional[float] = None
    modified: Optional[datetime] = None
    more_information: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.date_time_released is None


class CallAnalysis(CdssModel):
    """Daily out-of-priority percentage for a water right"""
    analysis_type: AnalysisType
    analysis_date: Optional[datetime] = None
    wdid: Optional[str] = None
    gnis_id: Optional[str] = None
    stream_mile: Optional[float] = None
    admin_number: Optional[float] = None
    percent_time_out_of_priority: Optional[float] = None
    downstream_call_wdid: Optional[str] = None
    downstream_call_right: Optional[str] = None
    downstream_call_stream_mile: Optional[float] = None
    downstream_call_admin_number: Optional[float] = None
    downstream_call_decreed_amount: Optional[float] = None
    downstream_call_decreed_unit: Optional[str] = None
    downstream_call_appropriation_date: Optional[datetime] = None
    downstream_call_status: Optional[str] = None
    modified: Optional[datetime] = None


class SourceRoute(CdssModel):
    """Stream segment in the water source route framework"""
    gnis_id: Optional[str] = None
    gnis_name: Optional[str] = None
    division: Optional[int] = None
    water_district: Optional[int] = None
    stream_length: Optional[float] = None
    tributary_to_level: Optional[int] = None
    tributary_to_gnis_id: Optional[str] = None
    tributary_gnis_name: Optional[str] = None
    tributary_to_stream_mile: Optional[float] = None


class RouteAnalysis(CdssModel):
    """Structure found along a water source route"""
    wdid: Optional[str] = None
    structure_name: Optional[str] = None
    stream_mile: Optional[float] = None
    structure_type: Optional[str] = None
    decreed_amount: Optional[float] = None
    decreed_unit: Optional[str] = None
    appropriation_date: Optional[datetime] = None
    admin_number: Optional[float] = None
    modified: Optional[datetime] = None


class StructureBase(CdssModel):
    """Identity shared by structures and their records"""
    wdid: Optional[str] = None
    modified: Optional[datetime] = None


class Structure(StructureBase):
    """Physical water structure (ditch, reservoir, well field, ...)"""
    structure_name: Optional[str] = None
    structure_type: Optional[str] = None
    water_source: Optional[str] = None
    gnis_id: Optional[str] = None
    stream_mile: Optional[float] = None
    division: Optional[int] = None
    water_district: Optional[int] = None
    county: Optional[str] = None
    designated_basin: Optional[str] = None
    management_district: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    utm_x: Optional[float] = None
    utm_y: Optional[float] = None
    stream_num: Optional[str] = None
    structure_num: Optional[str] = None
    ciu_code: Optional[str] = None
    ciucode_desc: Optional[str] = None
    more_information: Optional[str] = None


class DiversionRecord(StructureBase):
    """
    Diversion, release or stage-volume value for a structure.

    Water class and observation attributes are only set for
    day/month/year records; stage and volume only for stage_volume
    records.
    """
    record_type: DiversionRecordType
    data_meas_date: Optional[datetime] = None
    data_value: Optional[float] = None
    meas_units: Optional[str] = None
    approval_status: Optional[str] = None

    water_class_num: Optional[int] = None
    wc_identifier: Optional[str] = None
    meas_interval: Optional[str] = None
    meas_count: Optional[int] = None
    obs_code: Optional[str] = None

    stage: Optional[float] = None
    volume: Optional[float] = None


class WaterClass(StructureBase):
    """Water class recorded for a structure"""
    wc_identifier: Optional[str] = None
    por_start: Optional[datetime] = None
    por_end: Optional[datetime] = None
    div_type: Optional[str] = None
    timestep: Optional[str] = None
    units: Optional[str] = None
    source_code: Optional[str] = None
    use_code: Optional[str] = None
    op_code: Optional[str] = None


class WaterRight(CdssModel):
    """Water right net amount or transaction"""
    wdid: Optional[str] = None
    water_right_name: Optional[str] = None
    admin_number: Optional[float] = None
    appropriation_date: Optional[datetime] = None
    padj_date: Optional[datetime] = None
    adj_type: Optional[str] = None
    adj_date: Optional[datetime] = None
    order_number: Optional[str] = None
    prior_cases: Optional[str] = None
    status: Optional[str] = None
    trans_id: Optional[str] = None
    trans_type: Optional[str] = None
    case_number: Optional[str] = None
    decreed_uses: Optional[str] = None
    decreed_amount: Optional[float] = None
    decreed_units: Optional[str] = None
    action_comment: Optional[str] = None
    action_update: Optional[str] = None
    county: Optional[str] = None
    water_district: Optional[int] = None
    division: Optional[int] = None
    stream_mile: Optional[float] = None
    structure_type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    modified: Optional[datetime] = None


class ReferenceTable(CdssModel):
    """Row of one of the CDSS lookup tables"""
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    division: Optional[int] = None
    division_name: Optional[str] = None
    water_district: Optional[int] = None
    water_district_name: Optional[str] = None
    county: Optional[str] = None
    management_district: Optional[str] = None
    management_district_name: Optional[str] = None
    designated_basin: Optional[str] = None
    designated_basin_name: Optional[str] = None
    parameter: Optional[str] = None
    flag: Optional[str] = None
    flag_column: Optional[str] = None
    divrectype: Optional[str] = None
    div_rec_type_long: Optional[str] = None
    additional_info: Optional[str] = None
    data_source: Optional[str] = None
    publication_name: Optional[str] = None
    action_name: Optional[str] = None
    action_descr: Optional[str] = None
    ciu_code: Optional[str] = None
    ciu_code_long: Optional[str] = None
    obs_code: Optional[str] = None
    obs_code_long: Optional[str] = None
    obs_descr: Optional[str] = None
    start_iyr: Optional[int] = None
    end_iyr: Optional[int] = None
    not_used_code: Optional[str] = None
    not_used_code_descr: Optional[str] = None
    submission_type: Optional[str] = None

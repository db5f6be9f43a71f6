from datetime import datetime

import pytest
from pydantic import ValidationError

from cdss_wrapper import (
    Reading, Timescale, ClimateReadingType, DiversionRecordType,
    WaterRightType, AnalysisType, CdssValidationError
)
from cdss_wrapper.parsers import (
    parse_collection, parse_readings, parse_structures,
    build_reading, build_climate_station, build_climate_reading,
    build_well, build_geophysical_well, build_well_measurement,
    build_log_pick, build_admin_call, build_call_analysis,
    build_diversion_record, build_water_right, build_reference_table,
    build_station, build_source_route
)


@pytest.fixture
def reading_record():
    """Raw record carrying both day and month attributes"""
    return {
        "stationNum": 123,
        "abbrev": "PLACHECO",
        "parameter": "DISCHRG",
        "measDate": "2023-05-01 00:00:00",
        "measUnit": "cfs",
        "value": "42.5",
        "flagA": "A",
        "flagB": None,
        "calYear": 2023,
        "calMonNum": 5,
        "minQCfs": 10,
        "maxQCfs": 80,
        "avgQCfs": 42.5,
        "totalQAf": 2600,
        "waterYear": 2023
    }


def test_parse_collection():
    """Test envelope handling"""
    assert parse_collection({"ResultList": [{"a": 1}, {"a": 2}]}, lambda d: d["a"]) == [1, 2]
    assert parse_collection({"ResultList": None}, lambda d: d) == []
    assert parse_collection({}, lambda d: d) == []
    assert parse_collection(None, lambda d: d) == []


def test_reading_day_shape(reading_record):
    """Test day readings only carry day attributes"""
    reading = build_reading(reading_record, Timescale.DAY)

    assert reading.timescale is Timescale.DAY
    assert reading.station_num == "123"
    assert reading.value == 42.5
    assert reading.flags == {"flag_a": "A", "flag_b": None, "flag_c": None, "flag_d": None}
    assert reading.meas_date == datetime(2023, 5, 1)
    assert reading.cal_year is None
    assert reading.avg_q_cfs is None
    assert reading.water_year is None


def test_reading_month_shape(reading_record):
    """Test month readings only carry month attributes"""
    reading = build_reading(reading_record, "month")

    assert reading.timescale is Timescale.MONTH
    assert reading.cal_year == 2023
    assert reading.cal_month_num == 5
    assert reading.min_q_cfs == 10.0
    assert reading.total_q_af == 2600.0
    assert reading.value is None
    assert reading.flags is None
    assert reading.water_year is None


def test_reading_year_and_raw_shapes(reading_record):
    """Test water year and raw readings"""
    year = build_reading(reading_record, Timescale.YEAR)
    assert year.water_year == 2023
    assert year.max_q_cfs == 80.0
    assert year.cal_year is None

    raw = build_reading(reading_record, Timescale.RAW)
    assert raw.flags == {"flag_a": "A", "flag_b": None}
    assert raw.value is None


def test_reading_rejects_foreign_fields():
    """Test a reading cannot hold another timescale's attributes"""
    with pytest.raises(ValidationError):
        Reading(timescale=Timescale.DAY, cal_year=2023)
    with pytest.raises(ValidationError):
        Reading(timescale=Timescale.MONTH, value=1.0)


def test_reading_is_immutable(reading_record):
    """Test records cannot be modified after parsing"""
    reading = build_reading(reading_record, Timescale.DAY)
    with pytest.raises(ValidationError):
        reading.value = 1.0


def test_invalid_shape_tags():
    """Test unknown shape tags are rejected"""
    with pytest.raises(CdssValidationError):
        build_reading({}, "weekly")
    with pytest.raises(CdssValidationError):
        build_climate_reading({}, "hourly")
    with pytest.raises(CdssValidationError):
        build_diversion_record({}, "decade")
    with pytest.raises(CdssValidationError):
        build_water_right({}, "lease")
    with pytest.raises(CdssValidationError):
        build_call_analysis({}, "huc")
    with pytest.raises(CdssValidationError):
        parse_readings({"ResultList": []}, "weekly")


def test_malformed_values_become_none():
    """Test bad scalars never fail a parse"""
    station = build_station({
        "abbrev": "PLACHECO",
        "latitude": "not-a-number",
        "division": "",
        "modified": "someday"
    })
    assert station.abbrev == "PLACHECO"
    assert station.latitude is None
    assert station.division is None
    assert station.modified is None
    assert station.metadata == {}


def test_station_usgs_fallback():
    """Test telemetry stations report usgsStationId"""
    station = build_station({"usgsStationId": "09080400", "stationName": "ROARING FORK"})
    assert station.usgs_site_id == "09080400"
    assert station.name == "ROARING FORK"


def test_climate_station_parameter_types():
    """Test parameter types are accepted as a list or a comma string"""
    station = build_climate_station({"stationNum": "USC00051528", "parameterTypes": "Precip, MaxTemp"})
    assert station.parameter_types == ["Precip", "MaxTemp"]

    station = build_climate_station({"parameterTypes": ["Snow"]})
    assert station.parameter_types == ["Snow"]

    assert build_climate_station({}).parameter_types == []


def test_climate_readings():
    """Test frost date, daily and monthly climate readings"""
    frost = build_climate_reading({
        "stationNum": "USC00051528",
        "calYear": 2020,
        "l28s": "2020-04-28 00:00:00",
        "f28f": "2020-10-12 00:00:00",
        "l32s": "2020-05-10 00:00:00",
        "f32f": "2020-09-09 00:00:00"
    }, ClimateReadingType.FROST_DATES)
    assert frost.cal_year == 2020
    assert frost.frost_date_28f_fall == datetime(2020, 10, 12)
    assert frost.frost_date_32f_spring == datetime(2020, 5, 10)
    assert frost.value is None

    daily = build_climate_reading({
        "measType": "Precip", "measDate": "2020-01-02 00:00:00", "value": 0.1, "flag": "T"
    }, "daily")
    assert daily.meas_date == datetime(2020, 1, 2)
    assert daily.value == 0.1
    assert daily.flag == "T"
    assert daily.cal_month is None

    monthly = build_climate_reading({"calYear": 2020, "calMonth": 2, "value": 3}, "monthly")
    assert monthly.cal_month == 2
    assert monthly.value == 3.0


def test_wells():
    """Test water level and geophysical log wells"""
    data = {
        "wellId": 1234,
        "wellName": "TEST WELL",
        "county": "WELD",
        "totalDepth": "310",
        "groundElevation": 4850.5
    }
    well = build_well(data)
    assert well.well_id == "1234"
    assert well.depth is None

    log_well = build_geophysical_well(data)
    assert log_well.depth == 310.0
    assert log_well.elevation == 4850.5
    assert log_well.county == "WELD"


def test_well_measurement_and_log_pick():
    measurement = build_well_measurement({
        "wellId": "1234",
        "measurementDate": "1999-05-01 00:00:00",
        "depthToWater": "55.2",
        "published": True
    })
    assert measurement.depth_to_water == 55.2
    assert measurement.has_water_level
    assert not build_well_measurement({"wellId": "1"}).has_water_level

    pick = build_log_pick({"wellId": "1234", "aquifer": "Laramie-Fox Hills", "gLogTopDepth": 100})
    assert pick.aquifer == "Laramie-Fox Hills"
    assert pick.g_log_top_depth == 100.0


def test_admin_call():
    call = build_admin_call({
        "callNumber": "9001",
        "callType": "Priority",
        "dateTimeSet": "2023-06-01 08:00:00",
        "locationWdid": "0200811",
        "priorityAdminNumber": "30000.00000"
    })
    assert call.call_number == 9001
    assert call.date_time_set == datetime(2023, 6, 1, 8, 0)
    assert call.priority_admin_number == 30000.0
    assert call.is_active

    released = build_admin_call({"dateTimeReleased": "2023-07-01 08:00:00"})
    assert not released.is_active


def test_call_analysis_by_type():
    """Test each analysis keeps its own location keys"""
    data = {
        "analysisDate": "2023-06-01 00:00:00",
        "analysisWdid": "0200811",
        "analysisGnisId": "00178234",
        "analysisStreamMile": "12.3",
        "analysisOutOfPriorityPercentOfDay": 100,
        "locationWdid": "0200500",
        "division": 2
    }

    by_wdid = build_call_analysis(data, AnalysisType.WDID)
    assert by_wdid.wdid == "0200811"
    assert by_wdid.gnis_id is None
    assert by_wdid.percent_time_out_of_priority == 100.0
    assert by_wdid.downstream_call_wdid == "0200500"
    assert by_wdid.metadata == {"division": 2}

    by_gnis = build_call_analysis(data, "gnis")
    assert by_gnis.wdid is None
    assert by_gnis.gnis_id == "00178234"
    assert by_gnis.stream_mile == 12.3


def test_source_route():
    route = build_source_route({"gnisId": "00178234", "TributaryToGnisId": "00205018", "streamLength": 85.1})
    assert route.tributary_to_gnis_id == "00205018"
    assert route.stream_length == 85.1


def test_diversion_records():
    """Test diversion dates per timescale and stage volume attributes"""
    month = build_diversion_record(
        {"wdid": "0100578", "dataMeasDate": "2020-05", "dataValue": 12, "waterClassNum": 7},
        DiversionRecordType.MONTH
    )
    assert month.data_meas_date == datetime(2020, 5, 1)
    assert month.water_class_num == 7
    assert month.obs_code is None

    year = build_diversion_record({"dataMeasDate": 2020}, "year")
    assert year.data_meas_date == datetime(2020, 1, 1)

    day = build_diversion_record({"dataMeasDate": "2020-05-03 00:00:00", "obsCode": "*"}, "day")
    assert day.data_meas_date == datetime(2020, 5, 3)
    assert day.obs_code == "*"

    stage = build_diversion_record({"stage": "5.5", "volume": "1200", "waterClassNum": 7}, "stage_volume")
    assert stage.stage == 5.5
    assert stage.volume == 1200.0
    assert stage.water_class_num is None


def test_water_rights():
    data = {
        "wdid": "0100578",
        "adminNumber": "11992.00000",
        "appropriationDate": "1882-10-31 00:00:00",
        "transId": 555,
        "decreedAmount": "3.5"
    }
    net = build_water_right(data, WaterRightType.NET_AMOUNT)
    assert net.appropriation_date == datetime(1882, 10, 31)
    assert net.admin_number == 11992.0
    assert net.trans_id is None

    transaction = build_water_right(data, "transaction")
    assert transaction.trans_id == "555"
    assert transaction.appropriation_date is None
    assert transaction.decreed_amount == 3.5


def test_reference_table():
    row = build_reference_table({"measType": "Precip", "division": "1", "divisionName": "South Platte"})
    assert row.parameter == "Precip"
    assert row.division == 1
    assert row.division_name == "South Platte"


def test_parse_structures():
    structures = parse_structures({"ResultList": [{"wdid": "0100578"}, {"wdid": "0100579"}]})
    assert [s.wdid for s in structures] == ["0100578", "0100579"]


def test_non_finite_values_become_none():
    """Test NaN and infinite text is treated as missing"""
    reading = build_reading({"value": "NaN", "measValue": "inf"}, Timescale.DAY)
    assert reading.value is None
    assert reading.meas_value is None

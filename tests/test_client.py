from datetime import date, datetime, timezone
from urllib.parse import urlparse, parse_qs
from typing import Dict, Any, List

import pytest
import requests
import responses
from pydantic import ValidationError

from cdss_wrapper import (
    CdssClient, CdssConfig, Structure, Reading, Timescale,
    CdssValidationError, CdssAPIError, CdssConnectionError,
    format_wc_identifier
)

BASE_URL = "https://dwr.state.co.us/Rest/GET/api/v2"


@pytest.fixture
def client():
    """Create a test client with default config"""
    return CdssClient()


@pytest.fixture
def mock_structure_response() -> Dict[str, Any]:
    """Create a mock /structures/ response"""
    return {
        "PageNumber": 1,
        "PageCount": 1,
        "ResultCount": 1,
        "ResultList": [
            {
                "wdid": "0100578",
                "structureName": "GEORGE WOOD DITCH",
                "structureType": "DITCH",
                "waterSource": "SOUTH PLATTE RIVER",
                "gnisId": "00205018",
                "streamMile": 283.62,
                "division": 1,
                "waterDistrict": 1,
                "county": "MORGAN",
                "latitude": 40.26,
                "longitude": -103.49,
                "utmX": 543592.3,
                "utmY": 4456786.1,
                "ciuCode": "A",
                "modified": "2010-03-04T07:36:20Z"
            }
        ]
    }


def add_result(path: str, records: List[Dict[str, Any]], status: int = 200):
    responses.add(
        responses.GET,
        f"{BASE_URL}{path}",
        json={"ResultList": records},
        status=status
    )


def last_query(index: int = -1) -> Dict[str, List[str]]:
    """Query parameters of a recorded request"""
    return parse_qs(urlparse(responses.calls[index].request.url).query)


def test_client_initialization():
    """Test client initialization with different configs"""
    client = CdssClient()
    assert client.config.api_key is None
    assert client.config.base_url == BASE_URL
    assert client.config.timeout == 30
    assert client.config.default_parameter == "DISCHRG"

    config = CdssConfig(
        api_key="test_key",
        base_url="https://test.url/",
        timeout=60
    )
    client = CdssClient(config)
    assert client.config.api_key == "test_key"
    assert client.config.base_url == "https://test.url"
    assert client.config.timeout == 60

    with pytest.raises(ValidationError):
        CdssConfig(timeout=-1)


@responses.activate
def test_get_structures(client, mock_structure_response):
    """Test the structures endpoint end to end"""
    responses.add(
        responses.GET,
        f"{BASE_URL}/structures/",
        json=mock_structure_response,
        status=200
    )

    result = client.get_structures(wdid="0100578")

    assert len(result) == 1
    structure = result[0]
    assert isinstance(structure, Structure)
    assert structure.wdid == "0100578"
    assert structure.structure_name == "GEORGE WOOD DITCH"
    assert structure.division == 1
    assert structure.utm_x == 543592.3
    assert structure.stream_mile == 283.62
    assert structure.modified == datetime(2010, 3, 4, 7, 36, 20, tzinfo=timezone.utc)
    assert structure.metadata == {}

    query = last_query()
    assert query["format"] == ["json"]
    assert query["wdid"] == ["0100578"]
    assert query["units"] == ["miles"]
    assert query["pageSize"] == ["50000"]
    assert query["pageIndex"] == ["1"]
    assert "dateFormat" not in query


@responses.activate
def test_get_structures_string_values(client):
    """Test numeric strings and offset timestamps are coerced through the client"""
    add_result("/structures/", [
        {
            "wdid": "0100578",
            "structureName": "GEORGE WOOD DITCH",
            "division": "1",
            "waterDistrict": "1",
            "utmX": "543592.3",
            "utmY": "4456786.1",
            "streamMile": "283.62",
            "modified": "2010-03-04T07:36:20+00:00"
        }
    ])

    structure = client.get_structures(wdid="0100578")[0]

    assert structure.wdid == "0100578"
    assert structure.division == 1
    assert structure.water_district == 1
    assert structure.utm_x == 543592.3
    assert structure.stream_mile == 283.62
    assert structure.modified == datetime(2010, 3, 4, 7, 36, 20, tzinfo=timezone.utc)
    assert structure.metadata == {}


@responses.activate
def test_get_structures_multiple_wdids_and_aoi(client):
    """Test list and area filters on structures"""
    add_result("/structures/", [{"wdid": "0100578"}, {"wdid": "0100579"}])

    result = client.get_structures(
        aoi={"latitude": 40.26, "longitude": -103.49},
        wdid=["0100578", "0100579"]
    )

    assert [s.wdid for s in result] == ["0100578", "0100579"]
    query = last_query()
    assert query["wdid"] == ["0100578%2C+0100579"]
    assert query["latitude"] == ["40.26"]
    assert query["longitude"] == ["-103.49"]
    assert query["radius"] == ["20"]


@responses.activate
def test_api_key_headers():
    """Test the API key is sent as a header and a parameter"""
    client = CdssClient(CdssConfig(api_key="secret"))
    add_result("/structures/", [])

    assert client.get_structures(division=1) == []

    request = responses.calls[0].request
    assert request.headers["Token"] == "secret"
    assert request.headers["User-Agent"] == "cdss-wrapper/0.1.0"
    assert last_query()["apiKey"] == ["secret"]


@responses.activate
def test_get_sw_ts_timescales(client):
    """Test surface water series use per-timescale endpoints and filters"""
    add_result("/surfacewater/surfacewatertsday/", [
        {"abbrev": "PLACHECO", "measDate": "2023-01-01 00:00:00", "value": 40, "flagA": "P"}
    ])
    add_result("/surfacewater/surfacewatertsmonth/", [
        {"abbrev": "PLACHECO", "calYear": 2023, "calMonNum": 1, "avgQCfs": 41.5}
    ])
    add_result("/surfacewater/surfacewatertswateryear/", [
        {"abbrev": "PLACHECO", "waterYear": 2023, "totalQAf": 30000}
    ])

    day = client.get_sw_ts(abbrev="PLACHECO", start_date=date(2023, 1, 1), end_date=date(2023, 1, 31))
    assert day[0].timescale is Timescale.DAY
    assert day[0].value == 40.0
    assert day[0].flags["flag_a"] == "P"
    query = last_query()
    assert query["min-measDate"] == ["01-01-2023"]
    assert query["max-measDate"] == ["01-31-2023"]
    assert query["dateFormat"] == ["spaceSepToSeconds"]

    month = client.get_sw_ts(abbrev="PLACHECO", start_date=date(2020, 1, 1), timescale="monthly")
    assert month[0].timescale is Timescale.MONTH
    assert month[0].avg_q_cfs == 41.5
    assert month[0].value is None
    assert last_query()["min-calYear"] == ["2020"]
    assert "max-calYear" not in last_query()

    year = client.get_sw_ts(abbrev="PLACHECO", end_date=date(2023, 9, 30), timescale="wyear")
    assert isinstance(year[0], Reading)
    assert year[0].water_year == 2023
    assert last_query()["max-waterYear"] == ["2023"]


def test_invalid_timescale(client):
    """Test unsupported timescales are rejected before any request"""
    with pytest.raises(CdssValidationError):
        client.get_sw_ts(abbrev="PLACHECO", timescale="hour")
    with pytest.raises(CdssValidationError):
        client.get_telemetry_ts(abbrev="PLACHECO", timescale="month")
    with pytest.raises(CdssValidationError):
        client.get_diversion_records_ts(wdid="0100578", timescale="raw")
    with pytest.raises(CdssValidationError):
        client.get_climate_ts(param="Precip", station_number="1", timescale="year")


@responses.activate
def test_get_telemetry_ts(client):
    """Test telemetry series default parameter and third party flag"""
    add_result("/telemetrystations/telemetrytimeseriesraw/", [
        {"abbrev": "PLACHECO", "parameter": "DISCHRG", "measDateTime": "2023-01-01 00:15:00", "measValue": 38.2}
    ])

    result = client.get_telemetry_ts(abbrev="PLACHECO", timescale="raw", start_date=date(2023, 1, 1))

    assert result[0].timescale is Timescale.RAW
    assert result[0].meas_value == 38.2
    assert result[0].meas_date_time == datetime(2023, 1, 1, 0, 15)
    query = last_query()
    assert query["parameter"] == ["DISCHRG"]
    assert query["includeThirdParty"] == ["true"]
    assert query["startDate"] == ["01-01-2023"]
    assert "endDate" not in query


@responses.activate
def test_get_telemetry_stations(client):
    add_result("/telemetrystations/telemetrystation/", [{"abbrev": "PLACHECO", "division": "1"}])

    result = client.get_telemetry_stations(aoi=[-104.9, 39.7], radius=5, county="PUEBLO")

    assert result[0].division == 1
    query = last_query()
    assert query["includeThirdParty"] == ["true"]
    assert query["units"] == ["miles"]
    assert query["radius"] == ["5"]
    assert query["county"] == ["PUEBLO"]


@responses.activate
def test_get_diversion_records_ts(client):
    """Test diversion record queries and water class identifiers"""
    add_result("/structures/divrec/divrecmonth/", [
        {"wdid": "0100578", "dataMeasDate": "2020-05", "dataValue": 120.5, "wcIdentifier": "0100578 Total (Diversion)"}
    ])

    result = client.get_diversion_records_ts(
        wdid=["0100578", "0100579"],
        wc_identifier="div",
        start_date=date(2020, 1, 1),
        timescale="month"
    )

    assert result[0].record_type.value == "month"
    assert result[0].data_meas_date == datetime(2020, 5, 1)
    assert result[0].data_value == 120.5
    query = last_query()
    assert query["wdid"] == ["0100578%2C+0100579"]
    assert query["wcIdentifier"] == ["diversion"]
    assert query["min-dataMeasDate"] == ["01-01-2020"]


def test_format_wc_identifier():
    assert format_wc_identifier(None) == "*diversion*"
    assert format_wc_identifier("Releases") == "release"
    assert format_wc_identifier("d") == "diversion"
    assert format_wc_identifier("Total") == "*Total*"


@responses.activate
def test_get_stage_volume_ts(client):
    add_result("/structures/divrec/stagevolume/", [{"wdid": "0303732", "stage": 10.2, "volume": 5000}])

    result = client.get_stage_volume_ts(wdid="0303732", end_date=date(2021, 12, 31))

    assert result[0].volume == 5000.0
    assert last_query()["max-dataMeasDate"] == ["12-31-2021"]


@responses.activate
def test_get_water_classes(client):
    add_result("/structures/divrec/waterclasses/", [{"wdid": "0100578", "wcIdentifier": "0100578 S:1 F: U:1 T:0 G: To:"}])

    result = client.get_water_classes(wdid="0100578", start_date=date(2000, 1, 1))

    assert result[0].wc_identifier.startswith("0100578")
    query = last_query()
    assert query["wcIdentifier"] == ["*diversion*"]
    assert query["min-porStart"] == ["01-01-2000"]
    assert "units" not in query


@responses.activate
def test_get_admin_calls(client):
    """Test active and historical admin call endpoints"""
    add_result("/administrativecalls/active/", [{"callNumber": 1, "locationWdid": "0200811"}])
    add_result("/administrativecalls/historical/", [{"callNumber": 2, "dateTimeReleased": "2020-07-01 00:00:00"}])

    active = client.get_admin_calls(division=2, location_wdid="0200811")
    assert active[0].is_active
    assert last_query()["locationWdid"] == ["0200811"]

    historical = client.get_admin_calls(division=2, start_date=date(2020, 1, 1), active=False)
    assert not historical[0].is_active
    assert last_query()["min-dateTimeSet"] == ["01-01-2020"]


@responses.activate
def test_call_analysis_batch(client):
    """Test batched call analysis requests one calendar year at a time"""
    add_result("/analysisservices/callanalysisbywdid/", [
        {"analysisWdid": "0200811", "analysisDate": "2020-06-01 00:00:00", "analysisOutOfPriorityPercentOfDay": 50}
    ])

    result = client.get_call_analysis_wdid(
        wdid="0200811",
        admin_no=30000.0,
        start_date=date(2020, 6, 1),
        end_date=date(2021, 3, 1),
        batch=True
    )

    assert len(result) == 2
    assert len(responses.calls) == 2
    assert last_query(0)["startDate"] == ["06-01-2020"]
    assert last_query(0)["endDate"] == ["12-31-2020"]
    assert last_query(1)["startDate"] == ["01-01-2021"]
    assert last_query(1)["endDate"] == ["03-01-2021"]
    assert last_query(0)["adminNo"] == ["30000.0"]
    assert result[0].wdid == "0200811"
    assert result[0].percent_time_out_of_priority == 50.0


@responses.activate
def test_call_analysis_gnis(client):
    add_result("/analysisservices/callanalysisbygnisid/", [
        {"analysisGnisId": "00178234", "analysisStreamMile": 12.3}
    ])

    result = client.get_call_analysis_gnisid(gnis_id="00178234", admin_no="30000.00000", stream_mile=12.3)

    assert result[0].gnis_id == "00178234"
    assert result[0].analysis_type.value == "gnis"
    query = last_query()
    assert query["streamMile"] == ["12.3"]
    assert query["adminNo"] == ["30000.00000"]


@responses.activate
def test_source_route_services(client):
    add_result("/analysisservices/watersourcerouteframework/", [{"gnisId": "00178234", "gnisName": "CACHE LA POUDRE RIVER"}])
    add_result("/analysisservices/watersourcerouteanalysis/", [{"wdid": "0300915", "streamMile": 40.2}])

    framework = client.get_source_route_framework(division=1)
    assert framework[0].gnis_name == "CACHE LA POUDRE RIVER"

    analysis = client.get_source_route_analysis(
        lt_gnis_id="00178234", lt_stream_mile=0,
        ut_gnis_id="00178234", ut_stream_mile=45.5
    )
    assert analysis[0].stream_mile == 40.2
    query = last_query()
    assert query["ltStreamMile"] == ["0"]
    assert query["utStreamMile"] == ["45.5"]


@responses.activate
def test_climate_endpoints(client):
    """Test climate stations, frost dates and time series"""
    add_result("/climatedata/climatestations/", [{"stationNum": "USC00051528", "parameterTypes": ["Precip"]}])
    add_result("/climatedata/climatestationfrostdates/", [{"calYear": 2020, "f32f": "2020-09-09 00:00:00"}])
    add_result("/climatedata/climatestationtsday/", [{"measType": "Precip", "value": 0.2}])
    add_result("/climatedata/climatestationtsmonth/", [{"measType": "Precip", "calMonth": 3, "value": 1.2}])

    stations = client.get_climate_stations(county="LARIMER")
    assert stations[0].parameter_types == ["Precip"]
    assert last_query()["units"] == ["miles"]

    frost = client.get_climate_frost_dates("USC00051528", start_date=date(2015, 1, 1))
    assert frost[0].frost_date_32f_fall == datetime(2020, 9, 9)
    assert last_query()["min-calYear"] == ["2015"]

    daily = client.get_climate_ts(param="Precip", station_number="USC00051528", start_date=date(2020, 1, 1))
    assert daily[0].value == 0.2
    assert last_query()["measType"] == ["Precip"]
    assert last_query()["min-measDate"] == ["01-01-2020"]

    monthly = client.get_climate_ts(param="Precip", site_id="X", end_date=date(2021, 1, 1), timescale="month")
    assert monthly[0].cal_month == 3
    assert last_query()["max-calYear"] == ["2021"]


def test_climate_invalid_parameter(client):
    with pytest.raises(CdssValidationError):
        client.get_climate_ts(param="Rain", station_number="USC00051528")


@responses.activate
def test_ground_water_endpoints(client):
    """Test ground water place names are upper-cased and use '+'"""
    add_result("/groundwater/waterlevels/wells/", [{"wellId": 1, "county": "SAN LUIS"}])
    add_result("/groundwater/waterlevels/wellmeasurements/", [{"wellId": 1, "depthToWater": 20}])
    add_result("/groundwater/geophysicallogs/wells/", [{"wellId": 2, "totalDepth": 300}])
    add_result("/groundwater/geophysicallogs/geoplogpicks/", [{"wellId": 2, "aquifer": "Arapahoe"}])

    wells = client.get_water_level_wells(county="San Luis", designated_basin="upper big sandy")
    assert wells[0].well_id == "1"
    query = last_query()
    assert query["county"] == ["SAN+LUIS"]
    assert query["designatedBasin"] == ["UPPER+BIG+SANDY"]

    measurements = client.get_well_measurements(wellid="1", start_date=date(2000, 1, 1))
    assert measurements[0].depth_to_water == 20.0
    assert last_query()["min-measurementDate"] == ["01-01-2000"]

    log_wells = client.get_geophysical_log_wells(division=1)
    assert log_wells[0].depth == 300.0

    picks = client.get_geophysical_log_picks(wellid="2")
    assert picks[0].aquifer == "Arapahoe"
    assert last_query()["wellId"] == ["2"]


def test_log_picks_require_wellid(client):
    with pytest.raises(CdssValidationError):
        client.get_geophysical_log_picks(wellid="")


@responses.activate
def test_water_rights(client):
    add_result("/waterrights/netamount/", [{"wdid": "0100578", "appropriationDate": "1882-10-31 00:00:00"}])
    add_result("/waterrights/transaction/", [{"wdid": "0100578", "transId": 12}])

    net = client.get_water_rights_net_amounts(wdid="0100578")
    assert net[0].appropriation_date == datetime(1882, 10, 31)
    assert last_query()["units"] == ["miles"]

    transactions = client.get_water_rights_transactions(aoi=[-103.49, 40.26], radius=2)
    assert transactions[0].trans_id == "12"
    assert last_query()["radius"] == ["2"]


@responses.activate
def test_get_sw_stations(client):
    add_result("/surfacewater/surfacewaterstations/", [{"abbrev": "PLACHECO", "stationName": "ARKANSAS RIVER"}])

    result = client.get_sw_stations(abbrev=["PLACHECO", "ALTCANCO"])

    assert result[0].name == "ARKANSAS RIVER"
    assert last_query()["abbrev"] == ["PLACHECO,ALTCANCO"]


@responses.activate
def test_get_reference_table(client):
    """Test reference table filters map to wire parameters"""
    add_result("/referencetables/waterdistrict/", [{"waterDistrict": 1, "division": 1, "waterDistrictName": "SOUTH PLATTE"}])

    result = client.get_reference_table("waterdistricts", division=1)

    assert result[0].water_district == 1
    assert result[0].water_district_name == "SOUTH PLATTE"
    query = last_query()
    assert query["division"] == ["1"]
    assert "dateFormat" not in query


def test_get_reference_table_invalid(client):
    with pytest.raises(CdssValidationError):
        client.get_reference_table("rivers")
    with pytest.raises(CdssValidationError):
        client.get_reference_table("county", division=1)


@responses.activate
def test_api_error(client):
    """Test non-success statuses raise CdssAPIError"""
    add_result("/structures/", [], status=500)

    with pytest.raises(CdssAPIError) as exc_info:
        client.get_structures(division=1)

    assert exc_info.value.status_code == 500


@responses.activate
def test_connection_errors(client):
    """Test network failures raise CdssConnectionError"""
    responses.add(
        responses.GET,
        f"{BASE_URL}/structures/",
        body=requests.exceptions.Timeout("timed out")
    )
    with pytest.raises(CdssConnectionError):
        client.get_structures(division=1)

    responses.replace(
        responses.GET,
        f"{BASE_URL}/structures/",
        body=requests.exceptions.ConnectionError("refused")
    )
    with pytest.raises(CdssConnectionError):
        client.get_structures(division=1)


def test_context_manager():
    with CdssClient() as client:
        assert isinstance(client, CdssClient)

import pytest

from cocoro.enums import ValueType
from cocoro.exceptions import MalformedValueError
from cocoro.models import (
    BinaryProperty,
    BinaryPropertyStatus,
    DeviceProperties,
    QueryBoxesResponse,
    RangeProperty,
    RangePropertyStatus,
    SingleProperty,
    SinglePropertyStatus,
    parse_properties,
    parse_statuses,
)


def test_properties_parse_into_variants(aircon_property_records):
    props = parse_properties(aircon_property_records)

    assert [type(p) for p in props] == [
        SingleProperty,
        SingleProperty,
        SingleProperty,
        RangeProperty,
        BinaryProperty,
        SingleProperty,
    ]
    power = props[0]
    assert power.kind is ValueType.SINGLE
    assert power.gettable and power.settable and power.notify
    assert power.codes == ["30", "31"]
    assert props[3].value_range.min == -10
    assert props[3].settable is False


def test_single_property_without_table_accepts_any_code():
    prop = SingleProperty(status_code="A0")
    assert prop.accepts("99")


def test_statuses_parse_into_variants(aircon_status_records):
    statuses = parse_statuses(aircon_status_records)

    assert isinstance(statuses[0], SinglePropertyStatus)
    assert statuses[0].value == "30"
    assert isinstance(statuses[3], RangePropertyStatus)
    assert statuses[3].value == 26
    assert isinstance(statuses[4], BinaryPropertyStatus)
    assert len(statuses[4].value) == 16


def test_payload_must_match_value_type():
    with pytest.raises(MalformedValueError):
        parse_statuses(
            [
                {
                    "statusCode": "80",
                    "valueType": "valueSingle",
                    "valueRange": {"code": "30"},
                }
            ]
        )


def test_unknown_value_type_rejected():
    with pytest.raises(MalformedValueError):
        parse_properties([{"statusCode": "80", "valueType": "valueFloat"}])


def test_status_to_wire():
    status = RangePropertyStatus.from_value("BB", 7, width=2)
    assert status.to_wire() == {
        "statusCode": "BB",
        "valueType": "valueRange",
        "valueRange": {"code": "07"},
    }


def test_binary_status_from_value_validates_hex():
    with pytest.raises(MalformedValueError):
        BinaryPropertyStatus.from_value("F1", "XYZ0")


@pytest.mark.parametrize("code", ["--", " 25"])
def test_range_status_with_bad_code_raises_on_read(code):
    status = parse_statuses(
        [
            {
                "statusCode": "BB",
                "valueType": "valueRange",
                "valueRange": {"code": code},
            }
        ]
    )[0]
    with pytest.raises(MalformedValueError):
        status.value


def test_device_properties_alias(aircon_property_records, aircon_status_records):
    props = DeviceProperties.model_validate(
        {"property": aircon_property_records, "status": aircon_status_records}
    )
    assert len(props.properties) == 6
    assert len(props.status) == 5


def test_box_listing(box_record):
    response = QueryBoxesResponse.model_validate(
        {"box": [box_record], "extra": "ignored"}
    )
    echonet = response.box[0].echonet_data[0]
    assert echonet.device_id == 1234
    assert echonet.label_data.name == "Living room"
    assert echonet.serial_number == "SN0001"

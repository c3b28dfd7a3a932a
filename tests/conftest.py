"""Shared fixtures for cocoro tests."""

from typing import Any

import pytest

from cocoro import AirConditioner, Box, parse_properties, parse_statuses
from cocoro.devices.purifier import AirPurifier

# Bytes: AB | 03 (power+swing) | 02 (mode) | 18 (24°C) | 41 (windspeed)
# | 11 bytes of filler
STATE_DETAIL_CODE = "AB030218410102030405060708090A0B"


@pytest.fixture
def aircon_property_records() -> list[dict[str, Any]]:
    """Capability records as returned by deviceProperty for an aircon."""
    return [
        {
            "statusCode": "80",
            "statusName": "Operation status",
            "valueType": "valueSingle",
            "get": True,
            "set": True,
            "inf": True,
            "valueSingle": [
                {"code": "30", "name": "ON"},
                {"code": "31", "name": "OFF"},
            ],
        },
        {
            "statusCode": "B0",
            "statusName": "Operation mode",
            "valueType": "valueSingle",
            "get": True,
            "set": True,
            "valueSingle": [
                {"code": "41", "name": "Auto"},
                {"code": "42", "name": "Cool"},
                {"code": "43", "name": "Heat"},
            ],
        },
        {
            "statusCode": "A0",
            "statusName": "Air flow rate",
            "valueType": "valueSingle",
            "get": True,
            "set": True,
        },
        {
            "statusCode": "BB",
            "statusName": "Room temperature",
            "valueType": "valueRange",
            "get": True,
            "set": False,
            "valueRange": {"min": -10, "max": 50, "step": 1},
        },
        {
            "statusCode": "F1",
            "statusName": "State detail",
            "valueType": "valueBinary",
            "get": True,
            "set": True,
            "valueBinary": {},
        },
        {
            "statusCode": "88",
            "statusName": "Fault status",
            "valueType": "valueSingle",
            "get": True,
            "set": False,
        },
    ]


@pytest.fixture
def aircon_status_records() -> list[dict[str, Any]]:
    return [
        {
            "statusCode": "80",
            "valueType": "valueSingle",
            "valueSingle": {"code": "30"},
        },
        {
            "statusCode": "B0",
            "valueType": "valueSingle",
            "valueSingle": {"code": "42"},
        },
        {
            "statusCode": "A0",
            "valueType": "valueSingle",
            "valueSingle": {"code": "41"},
        },
        {
            "statusCode": "BB",
            "valueType": "valueRange",
            "valueRange": {"code": "26"},
        },
        {
            "statusCode": "F1",
            "valueType": "valueBinary",
            "valueBinary": {"code": STATE_DETAIL_CODE},
        },
    ]


@pytest.fixture
def box_record() -> dict[str, Any]:
    return {
        "boxId": "https://db.cloudlabs.sharp.co.jp/clpf/key/box-1",
        "echonetData": [
            {
                "deviceId": 1234,
                "echonetNode": "node-1",
                "echonetObject": "013001",
                "labelData": {"name": "Living room"},
                "maker": "SHARP",
                "model": "AY-L40P",
                "serialNumber": "SN0001",
            }
        ],
    }


@pytest.fixture
def box(box_record: dict[str, Any]) -> Box:
    return Box.model_validate(box_record)


@pytest.fixture
def aircon(
    aircon_property_records: list[dict[str, Any]],
    aircon_status_records: list[dict[str, Any]],
    box: Box,
) -> AirConditioner:
    return AirConditioner(
        name="Living room",
        device_id=1234,
        echonet_node="node-1",
        echonet_object="013001",
        properties=parse_properties(aircon_property_records),
        status=parse_statuses(aircon_status_records),
        box=box,
    )


@pytest.fixture
def purifier() -> AirPurifier:
    return AirPurifier(
        name="Bedroom",
        device_id=77,
        echonet_node="node-2",
        echonet_object="013501",
        properties=parse_properties(
            [
                {
                    "statusCode": "80",
                    "valueType": "valueSingle",
                    "get": True,
                    "set": True,
                },
                {
                    "statusCode": "F3",
                    "valueType": "valueBinary",
                    "get": True,
                    "set": True,
                },
            ]
        ),
        status=[],
    )


@pytest.fixture
def state_detail_code() -> str:
    return STATE_DETAIL_CODE

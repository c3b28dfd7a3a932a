"""Enumerations shared by every Cocoro device family.

Family-specific status codes and value tables live in
:mod:`cocoro.devices`.
"""

from enum import Enum


class ValueType(str, Enum):
    """Wire encoding of a property value.

    The member values are the ``valueType`` strings used by the cloud API,
    and also the name of the payload key that carries the value.
    """

    SINGLE = "valueSingle"  # one enumerated code
    RANGE = "valueRange"  # integer encoded as a decimal string
    BINARY = "valueBinary"  # fixed-width hex string


class StatusCode(str, Enum):
    """Status codes common to all supported devices."""

    POWER = "80"
    STATE_DETAIL = "F1"


class ValueSingle(str, Enum):
    """Enumerated codes common to all supported devices."""

    POWER_ON = "30"
    POWER_OFF = "31"


class DeviceType(str, Enum):
    """Device family, derived from the echonet object class."""

    AIR_CONDITIONER = "air_conditioner"
    AIR_PURIFIER = "air_purifier"
    UNKNOWN = "unknown"

    @classmethod
    def from_echonet_object(cls, echonet_object: str) -> "DeviceType":
        """Map an echonet object code (e.g. ``013001``) to a device type.

        Example:
            >>> DeviceType.from_echonet_object("013501")
            <DeviceType.AIR_PURIFIER: 'air_purifier'>
        """
        class_code = echonet_object[:4].upper()
        if class_code == "0130":
            return cls.AIR_CONDITIONER
        if class_code == "0135":
            return cls.AIR_PURIFIER
        return cls.UNKNOWN

import pytest

from parking_lot.domain.common import VehicleType, SlotType
from parking_lot.domain.compatibility import allowed_slot_types, is_compatible


@pytest.mark.parametrize(
    "vehicle_type, expected",
    [
        (VehicleType.HANDICAP_ACCESSIBLE, [SlotType.HANDICAP, SlotType.HANDICAP_ACCESSIBLE]),
        (VehicleType.EV, [SlotType.EV]),
        (VehicleType.BIKE, [SlotType.BIKE]),
        (VehicleType.CAR, [SlotType.REGULAR, SlotType.COMPACT]),
        (VehicleType.HANDICAP, [SlotType.REGULAR, SlotType.COMPACT]),
    ],
)
def test_allowed_slot_types(vehicle_type, expected):
    assert allowed_slot_types(vehicle_type) == expected


def test_accepts_raw_strings():
    assert allowed_slot_types("Bike") == [SlotType.BIKE]
    assert allowed_slot_types("Handicap Accessible") == [SlotType.HANDICAP, SlotType.HANDICAP_ACCESSIBLE]


def test_unknown_category_falls_back_to_regular_and_compact():
    assert allowed_slot_types("Truck") == [SlotType.REGULAR, SlotType.COMPACT]


def test_every_category_is_non_empty_and_deterministic():
    for vehicle_type in list(VehicleType) + ["Unknown"]:
        first = allowed_slot_types(vehicle_type)
        assert first
        assert first == allowed_slot_types(vehicle_type)


def test_returned_list_is_a_copy():
    types = allowed_slot_types(VehicleType.CAR)
    types.append(SlotType.EV)
    assert allowed_slot_types(VehicleType.CAR) == [SlotType.REGULAR, SlotType.COMPACT]


def test_is_compatible():
    assert is_compatible(VehicleType.BIKE, SlotType.BIKE)
    assert not is_compatible(VehicleType.BIKE, SlotType.REGULAR)
    assert is_compatible(VehicleType.CAR, "Compact")
    assert not is_compatible(VehicleType.CAR, "Helipad")

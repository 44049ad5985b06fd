from typing import List, Union

from parking_lot.domain.common import VehicleType, SlotType

_COMPATIBLE_SLOT_TYPES = {
    VehicleType.HANDICAP_ACCESSIBLE: [SlotType.HANDICAP, SlotType.HANDICAP_ACCESSIBLE],
    VehicleType.EV: [SlotType.EV],
    VehicleType.BIKE: [SlotType.BIKE],
}

# Cars, plain "Handicap" vehicles and unknown categories
_DEFAULT_SLOT_TYPES = [SlotType.REGULAR, SlotType.COMPACT]


def allowed_slot_types(vehicle_type: Union[VehicleType, str]) -> List[SlotType]:
    """Slot categories a vehicle of ``vehicle_type`` may park in.

    Unrecognized categories get the regular/compact set instead of an error.
    """
    try:
        key = VehicleType(vehicle_type)
    except ValueError:
        return list(_DEFAULT_SLOT_TYPES)
    return list(_COMPATIBLE_SLOT_TYPES.get(key, _DEFAULT_SLOT_TYPES))


def is_compatible(vehicle_type: Union[VehicleType, str], slot_type: Union[SlotType, str]) -> bool:
    try:
        slot_type = SlotType(slot_type)
    except ValueError:
        return False
    return slot_type in allowed_slot_types(vehicle_type)

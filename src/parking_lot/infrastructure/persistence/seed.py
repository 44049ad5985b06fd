"""Initial facility layout."""
from typing import List

from parking_lot.domain.common import SlotType
from parking_lot.domain.entities import Slot

SLOT_TYPE_CODES = {
    SlotType.REGULAR: "R",
    SlotType.COMPACT: "C",
    SlotType.BIKE: "B",
    SlotType.EV: "E",
    SlotType.HANDICAP: "H",
    SlotType.HANDICAP_ACCESSIBLE: "A",
}


def level_code(level: int) -> str:
    return "G" if level == 0 else str(level)


def slot_type_for_position(position: int) -> SlotType:
    """Category mix of a level, by 1-based position from the entrance."""
    if position <= 2:
        return SlotType.HANDICAP
    if position == 3:
        return SlotType.HANDICAP_ACCESSIBLE
    if position <= 5:
        return SlotType.EV
    if position <= 8:
        return SlotType.BIKE
    if position <= 11:
        return SlotType.COMPACT
    return SlotType.REGULAR


def build_facility(levels: int, slots_per_level: int) -> List[Slot]:
    slots = []
    for level in range(levels):
        for position in range(1, slots_per_level + 1):
            slot_type = slot_type_for_position(position)
            slots.append(
                Slot(
                    slot_id=None,
                    slot_number=f"{level_code(level)}-{SLOT_TYPE_CODES[slot_type]}-{position:03d}",
                    slot_type=slot_type,
                    level=level,
                    distance_rank=level * 1000 + position,
                )
            )
    return slots

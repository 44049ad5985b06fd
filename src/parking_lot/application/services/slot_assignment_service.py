from typing import Optional

from loguru import logger

from parking_lot.application.repositories import AbstractSlotRepository, AbstractParkingSessionRepository
from parking_lot.domain.common import SlotStatus, VehicleType
from parking_lot.domain.compatibility import allowed_slot_types, is_compatible
from parking_lot.domain.entities import Slot
from parking_lot.domain.exceptions import (
    NoSlotAvailableError,
    SlotConflictError,
    SlotIncompatibleError,
    SlotNotFoundError,
)


class SlotAssignmentService:
    """Claims and releases slots.

    Every claim is a conditional write in the slot repository, so two
    concurrent requests can never both take the same slot. After a claim the
    slot is checked against Active sessions and handed back if one already
    references it.
    """

    def __init__(
        self,
        slot_repo: AbstractSlotRepository,
        parking_session_repo: AbstractParkingSessionRepository,
    ):
        self.slot_repo = slot_repo
        self.parking_session_repo = parking_session_repo

    async def claim(self, number_plate: str, vehicle_type: VehicleType, slot_request: Optional[str] = None) -> Slot:
        if slot_request:
            return await self.claim_manual(slot_request, vehicle_type, number_plate)
        return await self.claim_automatic(vehicle_type, number_plate)

    async def claim_automatic(self, vehicle_type: VehicleType, number_plate: str) -> Slot:
        slot_types = allowed_slot_types(vehicle_type)
        slot = await self.slot_repo.claim_next_available(slot_types, number_plate)
        if slot is None:
            raise NoSlotAvailableError(getattr(vehicle_type, "value", vehicle_type))

        await self._ensure_no_conflict(slot)
        logger.info(f"Slot {slot.display_identifier} auto-assigned to {number_plate}")
        return slot

    async def claim_manual(self, slot_ref: str, vehicle_type: VehicleType, number_plate: str) -> Slot:
        slot = await self.slot_repo.get_by_reference(slot_ref)
        if slot is None:
            raise SlotNotFoundError(slot_ref)

        if slot.status != SlotStatus.AVAILABLE or not is_compatible(vehicle_type, slot.slot_type):
            raise SlotIncompatibleError(slot.display_identifier)

        claimed = await self.slot_repo.claim(slot.slot_id, number_plate, allowed_slot_types(vehicle_type))
        if claimed is None:
            # Lost the slot between lookup and write
            logger.warning(f"Slot {slot.display_identifier} became unavailable while assigning {number_plate}")
            raise SlotIncompatibleError(slot.display_identifier)

        await self._ensure_no_conflict(claimed)
        logger.info(f"Slot {claimed.display_identifier} manually assigned to {number_plate}")
        return claimed

    async def release(self, slot_id: str) -> bool:
        released = await self.slot_repo.release(slot_id)
        if released:
            logger.info(f"Slot {slot_id} released")
        else:
            logger.warning(f"Tried to release unknown slot {slot_id}")
        return released

    async def _ensure_no_conflict(self, slot: Slot) -> None:
        conflict = await self.parking_session_repo.get_active_session_by_slot_id(slot.slot_id)
        if conflict is None:
            return
        logger.warning(
            f"Slot {slot.display_identifier} already held by active session "
            f"{conflict.session_id} ({conflict.vehicle_number_plate}), rolling back claim"
        )
        await self.slot_repo.release(slot.slot_id)
        raise SlotConflictError(slot.display_identifier)

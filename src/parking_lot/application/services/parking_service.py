from datetime import datetime, timezone
from typing import Dict, List, Optional

from loguru import logger

from parking_lot.application.repositories import (
    AbstractVehicleRepository,
    AbstractSlotRepository,
    AbstractParkingSessionRepository,
)
from parking_lot.application.services.slot_assignment_service import SlotAssignmentService
from parking_lot.domain.billing import BillingPolicy, duration_minutes
from parking_lot.domain.common import BillingType, SessionStatus, SlotStatus, VehicleType
from parking_lot.domain.entities import BillingAmount, ParkingSession, Slot
from parking_lot.domain.exceptions import (
    InvalidPlateError,
    InvalidSlotStatusError,
    MissingFieldError,
    SlotNotFoundError,
    VehicleAlreadyParkedError,
    VehicleNotFoundError,
)
from parking_lot.domain.results import EntryResult, ExitResult, LocateResult
from parking_lot.domain.validation import is_valid_plate, normalize_plate


def level_label(level: int) -> str:
    return "Ground" if level == 0 else f"Level {level}"


class ParkingService:
    def __init__(
        self,
        vehicle_repo: AbstractVehicleRepository,
        slot_repo: AbstractSlotRepository,
        parking_session_repo: AbstractParkingSessionRepository,
        billing_policy: BillingPolicy,
        slot_assignment: Optional[SlotAssignmentService] = None,
    ):
        self.vehicle_repo = vehicle_repo
        self.slot_repo = slot_repo
        self.parking_session_repo = parking_session_repo
        self.billing_policy = billing_policy
        self.slot_assignment = slot_assignment or SlotAssignmentService(slot_repo, parking_session_repo)

    async def register_vehicle_entry(
        self,
        number_plate: str,
        vehicle_type: VehicleType,
        slot_request: Optional[str] = None,
        billing_type: BillingType = BillingType.HOURLY,
    ) -> EntryResult:
        if not is_valid_plate(number_plate):
            raise InvalidPlateError(number_plate)
        number_plate = normalize_plate(number_plate)
        billing_type = BillingType(billing_type)

        await self.vehicle_repo.upsert(number_plate, vehicle_type)

        existing_session = await self.parking_session_repo.get_active_session_by_number_plate(number_plate)
        if existing_session:
            raise VehicleAlreadyParkedError(number_plate)

        slot = await self.slot_assignment.claim(number_plate, vehicle_type, slot_request)

        fee = self.billing_policy.day_pass_fee if billing_type == BillingType.DAY_PASS else 0
        session = ParkingSession(
            vehicle_number_plate=number_plate,
            slot_id=slot.slot_id,
            billing_type=billing_type,
            entry_time=datetime.now(timezone.utc),
            billing_amount=BillingAmount(fixed=fee),
        )
        try:
            await self.parking_session_repo.add(session)
        except Exception:
            logger.warning(f"Session for {number_plate} could not be created, releasing slot {slot.display_identifier}")
            await self.slot_assignment.release(slot.slot_id)
            raise

        logger.info(f"Vehicle {number_plate} parked at {slot.display_identifier} (level {slot.level}, {billing_type.value})")
        return EntryResult(
            slot_number=slot.display_identifier,
            level=slot.level,
            billing_type=billing_type,
            fee=fee,
        )

    async def register_vehicle_exit(self, number_plate: str) -> ExitResult:
        number_plate = normalize_plate(number_plate)
        session = await self.parking_session_repo.get_active_session_by_number_plate(number_plate)

        if not session:
            return await self._release_untracked(number_plate)

        exit_time = datetime.now(timezone.utc)
        duration_ms = (exit_time - session.entry_time).total_seconds() * 1000

        already_collected = False
        if session.billing_type == BillingType.HOURLY:
            fee = self.billing_policy.hourly_fee(duration_ms)
            session.billing_amount.calculated = fee
        else:
            # Day pass was paid at entry
            fee = session.billing_amount.fixed or 0
            already_collected = True

        session.exit_time = exit_time
        session.status = SessionStatus.COMPLETED
        if await self.parking_session_repo.complete(session) is None:
            # Closed by a concurrent exit
            raise VehicleNotFoundError(number_plate)

        await self.slot_assignment.release(session.slot_id)

        slot = await self.slot_repo.get_by_slot_id(session.slot_id)
        slot_number = slot.display_identifier if slot else session.slot_id
        minutes = duration_minutes(duration_ms)
        logger.info(f"Vehicle {number_plate} left {slot_number} after {minutes} min, fee {fee}")
        return ExitResult(
            slot_number=slot_number,
            duration_minutes=minutes,
            fee=fee,
            billing_type=session.billing_type,
            already_collected=already_collected,
        )

    async def _release_untracked(self, number_plate: str) -> ExitResult:
        """Free a slot that holds the plate without any session record."""
        slot = await self.slot_repo.get_occupied_by_plate(number_plate)
        if slot is None:
            raise VehicleNotFoundError(number_plate)

        logger.warning(f"No session for {number_plate}, freeing slot {slot.display_identifier} without billing")
        await self.slot_assignment.release(slot.slot_id)
        return ExitResult(
            slot_number=slot.display_identifier,
            duration_minutes=0,
            fee=0,
            billing_type=None,
            already_collected=False,
        )

    async def locate_vehicle(self, number_plate: Optional[str]) -> LocateResult:
        number_plate = normalize_plate(number_plate)
        if not number_plate:
            raise MissingFieldError("plate is required")

        session = await self.parking_session_repo.get_active_session_by_number_plate(number_plate)
        if session:
            slot = await self.slot_repo.get_by_slot_id(session.slot_id)
        else:
            slot = await self.slot_repo.get_occupied_by_plate(number_plate)

        if slot is None:
            return LocateResult.not_found()
        return LocateResult(
            found=True,
            slot_number=slot.display_identifier,
            level=slot.level,
            slot_type=slot.slot_type,
        )

    async def get_slots(self) -> List[Slot]:
        return await self.slot_repo.get_all()

    async def update_slot_status(self, slot_ref: Optional[str], status: Optional[str]) -> Slot:
        if not slot_ref or not status:
            raise MissingFieldError("slotIdentifier and status are required")
        try:
            new_status = SlotStatus(status)
        except ValueError:
            raise InvalidSlotStatusError(f"Unknown slot status {status!r}")

        slot = await self.slot_repo.get_by_reference(slot_ref)
        if slot is None:
            raise SlotNotFoundError(slot_ref)

        updated = await self.slot_repo.set_status(slot.slot_id, new_status)
        if updated is None:
            raise SlotNotFoundError(slot_ref)
        logger.info(f"Slot {updated.display_identifier} set to {new_status.value}")
        return updated

    async def get_parking_status(self) -> Dict:
        all_slots = await self.slot_repo.get_all()

        level_stats = {}
        for slot in all_slots:
            stats = level_stats.setdefault(slot.level, {status: 0 for status in SlotStatus})
            stats[slot.status] += 1

        levels = []
        for level in sorted(level_stats.keys()):
            stats = level_stats[level]
            levels.append({
                "level": level,
                "label": level_label(level),
                "total": sum(stats.values()),
                "available": stats[SlotStatus.AVAILABLE],
                "occupied": stats[SlotStatus.OCCUPIED],
                "maintenance": stats[SlotStatus.MAINTENANCE],
            })

        total_slots = len(all_slots)
        occupied = sum(level["occupied"] for level in levels)
        occupancy_rate = (occupied / total_slots * 100) if total_slots > 0 else 0

        return {
            "total_slots": total_slots,
            "available_slots": sum(level["available"] for level in levels),
            "occupied_slots": occupied,
            "maintenance_slots": sum(level["maintenance"] for level in levels),
            "occupancy_rate": round(occupancy_rate, 2),
            "levels": levels,
        }

    async def get_active_sessions(self) -> List[ParkingSession]:
        return await self.parking_session_repo.get_active_sessions()

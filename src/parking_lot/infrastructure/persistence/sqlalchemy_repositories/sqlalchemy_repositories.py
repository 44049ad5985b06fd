from typing import Iterable, List, Optional

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from parking_lot.application.repositories import (
    AbstractVehicleRepository,
    AbstractSlotRepository,
    AbstractParkingSessionRepository,
)
from parking_lot.domain.common import VehicleType, SlotType, SlotStatus, SessionStatus, BillingType
from parking_lot.domain.entities import Vehicle, Slot, ParkingSession, BillingAmount
from parking_lot.domain.exceptions import SlotConflictError, VehicleAlreadyParkedError
from parking_lot.infrastructure.persistence.models.models import (
    Vehicle as ORMVehicle,
    Slot as ORMSlot,
    ParkingSession as ORMParkingSession,
)


def _to_vehicle(orm_vehicle: ORMVehicle) -> Vehicle:
    return Vehicle(
        id=orm_vehicle.id,
        number_plate=orm_vehicle.number_plate,
        vehicle_type=_parse_vehicle_type(orm_vehicle.vehicle_type),
        created_at=orm_vehicle.created_at,
    )


def _to_slot(orm_slot: ORMSlot) -> Slot:
    return Slot(
        id=orm_slot.id,
        slot_id=orm_slot.slot_id,
        slot_number=orm_slot.slot_number,
        slot_type=SlotType(orm_slot.slot_type),
        level=orm_slot.level,
        distance_rank=orm_slot.distance_rank,
        status=SlotStatus(orm_slot.status),
        current_plate=orm_slot.current_plate,
    )


def _to_session(orm_session: ORMParkingSession) -> ParkingSession:
    return ParkingSession(
        id=orm_session.id,
        session_id=orm_session.session_id,
        vehicle_number_plate=orm_session.vehicle_number_plate,
        slot_id=orm_session.slot_id,
        billing_type=BillingType(orm_session.billing_type),
        entry_time=orm_session.entry_time,
        exit_time=orm_session.exit_time,
        status=SessionStatus(orm_session.status),
        billing_amount=BillingAmount(
            fixed=orm_session.billing_fixed or 0,
            calculated=orm_session.billing_calculated or 0,
        ),
    )


def _vehicle_type_value(vehicle_type) -> str:
    return getattr(vehicle_type, "value", vehicle_type)


def _parse_vehicle_type(value: str):
    # Categories outside the enum are kept verbatim
    try:
        return VehicleType(value)
    except ValueError:
        return value


def _type_values(slot_types: Iterable[SlotType]) -> List[str]:
    return [SlotType(t).value for t in slot_types]


class SQLAlchemyVehicleRepository(AbstractVehicleRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_orm(self, number_plate: str) -> Optional[ORMVehicle]:
        result = await self.session.execute(
            select(ORMVehicle)
            .where(ORMVehicle.number_plate == number_plate.upper())
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_by_number_plate(self, number_plate: str) -> Optional[Vehicle]:
        orm_vehicle = await self._get_orm(number_plate)
        if orm_vehicle:
            return _to_vehicle(orm_vehicle)
        return None

    async def upsert(self, number_plate: str, vehicle_type: VehicleType) -> Vehicle:
        orm_vehicle = await self._get_orm(number_plate)
        if orm_vehicle is None:
            orm_vehicle = ORMVehicle(number_plate=number_plate.upper(), vehicle_type=_vehicle_type_value(vehicle_type))
            self.session.add(orm_vehicle)
            try:
                await self.session.commit()
            except IntegrityError:
                # Inserted by a concurrent entry
                await self.session.rollback()
                orm_vehicle = await self._get_orm(number_plate)
                orm_vehicle.vehicle_type = _vehicle_type_value(vehicle_type)
                await self.session.commit()
        else:
            orm_vehicle.vehicle_type = _vehicle_type_value(vehicle_type)
            await self.session.commit()
        await self.session.refresh(orm_vehicle)
        return _to_vehicle(orm_vehicle)


class SQLAlchemySlotRepository(AbstractSlotRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _first(self, *conditions) -> Optional[Slot]:
        result = await self.session.execute(
            select(ORMSlot).where(*conditions).execution_options(populate_existing=True)
        )
        orm_slot = result.scalars().first()
        if orm_slot:
            return _to_slot(orm_slot)
        return None

    async def add(self, slot: Slot) -> Slot:
        orm_slot = ORMSlot(
            slot_number=slot.slot_number,
            slot_type=SlotType(slot.slot_type).value,
            status=SlotStatus(slot.status).value,
            current_plate=slot.current_plate,
            level=slot.level,
            distance_rank=slot.distance_rank,
        )
        if slot.slot_id:
            orm_slot.slot_id = slot.slot_id
        self.session.add(orm_slot)
        await self.session.commit()
        await self.session.refresh(orm_slot)
        return _to_slot(orm_slot)

    async def get_by_slot_id(self, slot_id: str) -> Optional[Slot]:
        return await self._first(ORMSlot.slot_id == slot_id)

    async def get_by_reference(self, slot_ref: str) -> Optional[Slot]:
        slot = await self._first(ORMSlot.slot_number == slot_ref)
        if slot is None:
            slot = await self._first(ORMSlot.slot_id == slot_ref)
        return slot

    async def get_occupied_by_plate(self, number_plate: str) -> Optional[Slot]:
        return await self._first(
            ORMSlot.current_plate == number_plate.upper(),
            ORMSlot.status == SlotStatus.OCCUPIED.value,
        )

    async def claim(self, slot_id: str, number_plate: str, slot_types: Optional[Iterable[SlotType]] = None) -> Optional[Slot]:
        stmt = (
            update(ORMSlot)
            .where(ORMSlot.slot_id == slot_id, ORMSlot.status == SlotStatus.AVAILABLE.value)
            .values(status=SlotStatus.OCCUPIED.value, current_plate=number_plate.upper())
            .execution_options(synchronize_session=False)
        )
        if slot_types is not None:
            stmt = stmt.where(ORMSlot.slot_type.in_(_type_values(slot_types)))
        result = await self.session.execute(stmt)
        await self.session.commit()
        if result.rowcount != 1:
            return None
        return await self.get_by_slot_id(slot_id)

    async def claim_next_available(self, slot_types: Iterable[SlotType], number_plate: str) -> Optional[Slot]:
        slot_types = list(slot_types)
        result = await self.session.execute(
            select(ORMSlot.slot_id)
            .where(
                ORMSlot.status == SlotStatus.AVAILABLE.value,
                ORMSlot.slot_type.in_(_type_values(slot_types)),
            )
            .order_by(ORMSlot.distance_rank, ORMSlot.id)
        )
        for slot_id in result.scalars().all():
            claimed = await self.claim(slot_id, number_plate, slot_types)
            if claimed:
                return claimed
            logger.debug(f"Slot {slot_id} was taken before it could be claimed, trying next")
        return None

    async def release(self, slot_id: str) -> bool:
        result = await self.session.execute(
            update(ORMSlot)
            .where(ORMSlot.slot_id == slot_id)
            .values(status=SlotStatus.AVAILABLE.value, current_plate=None)
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        return result.rowcount == 1

    async def set_status(self, slot_id: str, status: SlotStatus) -> Optional[Slot]:
        values = {"status": SlotStatus(status).value}
        if status != SlotStatus.OCCUPIED:
            values["current_plate"] = None
        result = await self.session.execute(
            update(ORMSlot)
            .where(ORMSlot.slot_id == slot_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        if result.rowcount != 1:
            return None
        return await self.get_by_slot_id(slot_id)

    async def get_all(self) -> List[Slot]:
        result = await self.session.execute(
            select(ORMSlot)
            .order_by(ORMSlot.level, ORMSlot.slot_number)
            .execution_options(populate_existing=True)
        )
        return [_to_slot(s) for s in result.scalars().all()]


class SQLAlchemyParkingSessionRepository(AbstractParkingSessionRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _first(self, *conditions) -> Optional[ParkingSession]:
        result = await self.session.execute(
            select(ORMParkingSession)
            .where(*conditions)
            .order_by(ORMParkingSession.entry_time.desc())
            .execution_options(populate_existing=True)
        )
        orm_session = result.scalars().first()
        if orm_session:
            return _to_session(orm_session)
        return None

    async def get_active_session_by_number_plate(self, number_plate: str) -> Optional[ParkingSession]:
        return await self._first(
            ORMParkingSession.vehicle_number_plate == number_plate.upper(),
            ORMParkingSession.status == SessionStatus.ACTIVE.value,
        )

    async def get_active_session_by_slot_id(self, slot_id: str) -> Optional[ParkingSession]:
        return await self._first(
            ORMParkingSession.slot_id == slot_id,
            ORMParkingSession.status == SessionStatus.ACTIVE.value,
        )

    async def get_by_session_id(self, session_id: str) -> Optional[ParkingSession]:
        return await self._first(ORMParkingSession.session_id == session_id)

    async def add(self, session: ParkingSession) -> ParkingSession:
        orm_session = ORMParkingSession(
            vehicle_number_plate=session.vehicle_number_plate.upper(),
            slot_id=session.slot_id,
            entry_time=session.entry_time,
            status=SessionStatus(session.status).value,
            billing_type=BillingType(session.billing_type).value,
            billing_fixed=session.billing_amount.fixed,
            billing_calculated=session.billing_amount.calculated,
        )
        if session.session_id:
            orm_session.session_id = session.session_id
        self.session.add(orm_session)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            plate = session.vehicle_number_plate.upper()
            if await self._first(
                ORMParkingSession.vehicle_number_plate == plate,
                ORMParkingSession.status == SessionStatus.ACTIVE.value,
            ):
                logger.warning(f"Concurrent entry for {plate} lost to an existing active session")
                raise VehicleAlreadyParkedError(plate)
            raise SlotConflictError(session.slot_id)
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(orm_session)
        return _to_session(orm_session)

    async def complete(self, session: ParkingSession) -> Optional[ParkingSession]:
        result = await self.session.execute(
            update(ORMParkingSession)
            .where(
                ORMParkingSession.session_id == session.session_id,
                ORMParkingSession.status == SessionStatus.ACTIVE.value,
            )
            .values(
                status=SessionStatus.COMPLETED.value,
                exit_time=session.exit_time,
                billing_calculated=session.billing_amount.calculated,
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.commit()
        if result.rowcount != 1:
            return None
        return await self.get_by_session_id(session.session_id)

    async def get_active_sessions(self) -> List[ParkingSession]:
        result = await self.session.execute(
            select(ORMParkingSession)
            .where(ORMParkingSession.status == SessionStatus.ACTIVE.value)
            .order_by(ORMParkingSession.entry_time.desc())
            .execution_options(populate_existing=True)
        )
        return [_to_session(s) for s in result.scalars().all()]

    async def get_completed_sessions(self) -> List[ParkingSession]:
        result = await self.session.execute(
            select(ORMParkingSession)
            .where(ORMParkingSession.status == SessionStatus.COMPLETED.value)
            .order_by(ORMParkingSession.exit_time.desc())
            .execution_options(populate_existing=True)
        )
        return [_to_session(s) for s in result.scalars().all()]

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from parking_lot.domain.common import SlotType, SlotStatus, VehicleType
from parking_lot.domain.entities import Vehicle, Slot, ParkingSession


class AbstractVehicleRepository(ABC):
    @abstractmethod
    async def get_by_number_plate(self, number_plate: str) -> Optional[Vehicle]:
        pass

    @abstractmethod
    async def upsert(self, number_plate: str, vehicle_type: VehicleType) -> Vehicle:
        pass


class AbstractSlotRepository(ABC):
    """Slot storage.

    ``claim`` and ``claim_next_available`` are compare-and-set operations: a
    slot only moves to Occupied if it is Available at the moment of the write.
    """

    @abstractmethod
    async def add(self, slot: Slot) -> Slot:
        pass

    @abstractmethod
    async def get_by_slot_id(self, slot_id: str) -> Optional[Slot]:
        pass

    @abstractmethod
    async def get_by_reference(self, slot_ref: str) -> Optional[Slot]:
        """Find a slot by display number, falling back to slot id."""
        pass

    @abstractmethod
    async def get_occupied_by_plate(self, number_plate: str) -> Optional[Slot]:
        pass

    @abstractmethod
    async def claim(self, slot_id: str, number_plate: str, slot_types: Optional[Iterable[SlotType]] = None) -> Optional[Slot]:
        pass

    @abstractmethod
    async def claim_next_available(self, slot_types: Iterable[SlotType], number_plate: str) -> Optional[Slot]:
        pass

    @abstractmethod
    async def release(self, slot_id: str) -> bool:
        pass

    @abstractmethod
    async def set_status(self, slot_id: str, status: SlotStatus) -> Optional[Slot]:
        pass

    @abstractmethod
    async def get_all(self) -> List[Slot]:
        """All slots ordered by level, then display number."""
        pass


class AbstractParkingSessionRepository(ABC):
    @abstractmethod
    async def get_active_session_by_number_plate(self, number_plate: str) -> Optional[ParkingSession]:
        pass

    @abstractmethod
    async def get_active_session_by_slot_id(self, slot_id: str) -> Optional[ParkingSession]:
        pass

    @abstractmethod
    async def add(self, session: ParkingSession) -> ParkingSession:
        pass

    @abstractmethod
    async def complete(self, session: ParkingSession) -> Optional[ParkingSession]:
        """Close an Active session; returns None if it was no longer Active."""
        pass

    @abstractmethod
    async def get_by_session_id(self, session_id: str) -> Optional[ParkingSession]:
        pass

    @abstractmethod
    async def get_active_sessions(self) -> List[ParkingSession]:
        pass

    @abstractmethod
    async def get_completed_sessions(self) -> List[ParkingSession]:
        pass

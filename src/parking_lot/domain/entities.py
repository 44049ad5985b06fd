from datetime import datetime
from typing import Optional

from parking_lot.domain.common import VehicleType, SlotType, SlotStatus, SessionStatus, BillingType


class Vehicle:
    def __init__(
        self, number_plate: str, vehicle_type: VehicleType, id: Optional[int] = None, created_at: Optional[datetime] = None
    ):
        self.id = id
        self.number_plate = number_plate
        self.vehicle_type = vehicle_type
        self.created_at = created_at


class Slot:
    def __init__(
        self,
        slot_id: str,
        slot_number: str,
        slot_type: SlotType,
        level: int,
        distance_rank: int,
        status: SlotStatus = SlotStatus.AVAILABLE,
        current_plate: Optional[str] = None,
        id: Optional[int] = None,
    ):
        self.id = id
        self.slot_id = slot_id
        self.slot_number = slot_number
        self.slot_type = slot_type
        self.level = level
        self.distance_rank = distance_rank
        self.status = status
        self.current_plate = current_plate

    @property
    def display_identifier(self) -> str:
        return self.slot_number or self.slot_id


class BillingAmount:
    """Money recorded against a session.

    ``fixed`` is collected at entry for a day pass, ``calculated`` at exit for
    hourly billing. Only one of them is non-zero for a given session.
    """

    def __init__(self, fixed: float = 0, calculated: float = 0):
        self.fixed = fixed
        self.calculated = calculated

    @property
    def total(self) -> float:
        return (self.fixed or 0) + (self.calculated or 0)


class ParkingSession:
    def __init__(
        self,
        vehicle_number_plate: str,
        slot_id: str,
        billing_type: BillingType,
        entry_time: datetime,
        session_id: Optional[str] = None,
        status: SessionStatus = SessionStatus.ACTIVE,
        exit_time: Optional[datetime] = None,
        billing_amount: Optional[BillingAmount] = None,
        id: Optional[int] = None,
    ):
        self.id = id
        self.session_id = session_id
        self.vehicle_number_plate = vehicle_number_plate
        self.slot_id = slot_id
        self.billing_type = billing_type
        self.entry_time = entry_time
        self.status = status
        self.exit_time = exit_time
        self.billing_amount = billing_amount or BillingAmount()

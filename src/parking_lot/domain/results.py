from datetime import datetime
from typing import List, Optional

from parking_lot.domain.common import BillingType, SlotType
from parking_lot.domain.entities import BillingAmount


class EntryResult:
    def __init__(self, slot_number: str, level: int, billing_type: BillingType, fee: float):
        self.slot_number = slot_number
        self.level = level
        self.billing_type = billing_type
        self.fee = fee


class ExitResult:
    def __init__(
        self,
        slot_number: str,
        duration_minutes: int,
        fee: float,
        billing_type: Optional[BillingType],
        already_collected: bool,
    ):
        self.slot_number = slot_number
        self.duration_minutes = duration_minutes
        self.fee = fee
        self.billing_type = billing_type
        self.already_collected = already_collected


class LocateResult:
    def __init__(
        self,
        found: bool,
        slot_number: Optional[str] = None,
        level: Optional[int] = None,
        slot_type: Optional[SlotType] = None,
    ):
        self.found = found
        self.slot_number = slot_number
        self.level = level
        self.slot_type = slot_type

    @classmethod
    def not_found(cls) -> "LocateResult":
        return cls(found=False)


class RevenueEntry:
    def __init__(
        self,
        vehicle_number_plate: str,
        billing_type: BillingType,
        entry_time: datetime,
        exit_time: Optional[datetime],
        fixed: float,
        calculated: float,
    ):
        self.vehicle_number_plate = vehicle_number_plate
        self.billing_type = billing_type
        self.entry_time = entry_time
        self.exit_time = exit_time
        self.fixed = fixed
        self.calculated = calculated

    @property
    def amount(self) -> float:
        return BillingAmount(self.fixed, self.calculated).total


class RevenueSummary:
    def __init__(self, total_revenue: float, sessions: List[RevenueEntry]):
        self.total_revenue = total_revenue
        self.sessions = sessions

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from parking_lot.domain.common import BillingType, SlotStatus, SlotType, VehicleType
from parking_lot.domain.entities import Slot
from parking_lot.domain.results import EntryResult, ExitResult, LocateResult, RevenueEntry, RevenueSummary


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _upper_plate(v):
    if isinstance(v, str):
        return v.upper()
    return v


class VehicleEntry(CamelModel):
    # Format is checked by the service so a bad plate is a 400, not a 422
    plate: Optional[str] = None
    vehicle_category: VehicleType
    slot_request: Optional[str] = None
    billing_type: BillingType = BillingType.HOURLY

    @field_validator('plate')
    def validate_plate(cls, v):  # pylint: disable=no-self-argument
        return _upper_plate(v)

    @field_validator('slot_request')
    def blank_slot_request(cls, v):  # pylint: disable=no-self-argument
        if v is None:
            return None
        return v.strip() or None


class VehicleExit(CamelModel):
    plate: str

    @field_validator('plate')
    def validate_plate(cls, v):  # pylint: disable=no-self-argument
        return _upper_plate(v)


class VehicleLocate(CamelModel):
    plate: Optional[str] = None

    @field_validator('plate')
    def validate_plate(cls, v):  # pylint: disable=no-self-argument
        return _upper_plate(v)


class SlotStatusUpdate(CamelModel):
    slot_identifier: Optional[str] = None
    status: Optional[str] = None


class EntryResponse(CamelModel):
    success: bool = True
    slot_identifier: str
    level: int
    billing_type: BillingType
    fee: float

    @classmethod
    def from_result(cls, result: EntryResult) -> "EntryResponse":
        return cls(
            slot_identifier=result.slot_number,
            level=result.level,
            billing_type=result.billing_type,
            fee=result.fee,
        )


class ExitResponse(CamelModel):
    success: bool = True
    slot_identifier: str
    duration_minutes: int
    fee: float
    billing_type: Optional[BillingType] = None
    already_collected: bool = False

    @classmethod
    def from_result(cls, result: ExitResult) -> "ExitResponse":
        return cls(
            slot_identifier=result.slot_number,
            duration_minutes=result.duration_minutes,
            fee=result.fee,
            billing_type=result.billing_type,
            already_collected=result.already_collected,
        )


class LocateResponse(CamelModel):
    found: bool
    slot_identifier: Optional[str] = None
    level: Optional[int] = None
    category: Optional[SlotType] = None

    @classmethod
    def from_result(cls, result: LocateResult) -> "LocateResponse":
        return cls(
            found=result.found,
            slot_identifier=result.slot_number,
            level=result.level,
            category=result.slot_type,
        )


class SlotResponse(CamelModel):
    slot_id: str
    slot_number: str
    slot_type: SlotType
    level: int = Field(..., ge=0)
    distance_rank: int
    status: SlotStatus
    current_plate: Optional[str] = None

    @classmethod
    def from_slot(cls, slot: Slot) -> "SlotResponse":
        return cls(
            slot_id=slot.slot_id,
            slot_number=slot.slot_number,
            slot_type=slot.slot_type,
            level=slot.level,
            distance_rank=slot.distance_rank,
            status=slot.status,
            current_plate=slot.current_plate,
        )


class SlotListResponse(CamelModel):
    slots: List[SlotResponse]


class SlotUpdateResponse(CamelModel):
    success: bool


class RevenueSessionResponse(CamelModel):
    vehicle_number_plate: str
    billing_type: BillingType
    entry_time: datetime
    exit_time: Optional[datetime] = None
    fixed: float
    calculated: float
    amount: float

    @field_validator('entry_time', 'exit_time')
    @classmethod
    def make_datetime_aware(cls, dt: datetime) -> datetime:
        if dt is None:
            return dt
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt

    @classmethod
    def from_entry(cls, entry: RevenueEntry) -> "RevenueSessionResponse":
        return cls(
            vehicle_number_plate=entry.vehicle_number_plate,
            billing_type=entry.billing_type,
            entry_time=entry.entry_time,
            exit_time=entry.exit_time,
            fixed=entry.fixed,
            calculated=entry.calculated,
            amount=entry.amount,
        )


class RevenueResponse(CamelModel):
    total_revenue: float
    sessions: List[RevenueSessionResponse]

    @classmethod
    def from_summary(cls, summary: RevenueSummary) -> "RevenueResponse":
        return cls(
            total_revenue=summary.total_revenue,
            sessions=[RevenueSessionResponse.from_entry(e) for e in summary.sessions],
        )


class LevelStatus(CamelModel):
    level: int
    label: str
    total: int
    available: int
    occupied: int
    maintenance: int


class ParkingStatus(CamelModel):
    total_slots: int
    available_slots: int
    occupied_slots: int
    maintenance_slots: int
    occupancy_rate: float
    levels: List[LevelStatus]

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, Index, text
from sqlalchemy.orm import declarative_base

from parking_lot.domain.common import SlotStatus, SessionStatus
from parking_lot.shared.custom_types import UTCDateTime

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(String, unique=True, nullable=False, default=_new_id)
    number_plate = Column(String, unique=True, index=True, nullable=False)
    vehicle_type = Column(String, nullable=False)  # Car, Bike, EV, Handicap, Handicap Accessible
    created_at = Column(UTCDateTime, default=_utcnow)
    updated_at = Column(UTCDateTime, default=_utcnow, onupdate=_utcnow)


class Slot(Base):
    __tablename__ = "slots"

    id = Column(Integer, primary_key=True, index=True)
    slot_id = Column(String, unique=True, nullable=False, default=_new_id)
    slot_number = Column(String, unique=True, index=True, nullable=False)  # e.g. "G-R-012"
    slot_type = Column(String, nullable=False)
    status = Column(String, nullable=False, default=SlotStatus.AVAILABLE.value)
    current_plate = Column(String, nullable=True, index=True)
    level = Column(Integer, nullable=False)
    distance_rank = Column(Integer, nullable=False)

    __table_args__ = (
        Index("ix_slots_status_type_rank", "status", "slot_type", "distance_rank"),
    )


class ParkingSession(Base):
    __tablename__ = "parking_sessions"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String, unique=True, nullable=False, default=_new_id)
    vehicle_number_plate = Column(String, nullable=False)
    slot_id = Column(String, nullable=False, index=True)
    entry_time = Column(UTCDateTime, default=_utcnow, nullable=False)
    exit_time = Column(UTCDateTime, nullable=True)
    status = Column(String, nullable=False, default=SessionStatus.ACTIVE.value)
    billing_type = Column(String, nullable=False)  # Hourly, Day Pass
    billing_fixed = Column(Float, nullable=False, default=0)
    billing_calculated = Column(Float, nullable=False, default=0)

    __table_args__ = (
        Index("ix_sessions_plate_status", "vehicle_number_plate", "status"),
        # At most one Active session per plate and per slot
        Index(
            "uq_sessions_active_plate", "vehicle_number_plate", unique=True,
            sqlite_where=text("status = 'Active'"), postgresql_where=text("status = 'Active'"),
        ),
        Index(
            "uq_sessions_active_slot", "slot_id", unique=True,
            sqlite_where=text("status = 'Active'"), postgresql_where=text("status = 'Active'"),
        ),
    )


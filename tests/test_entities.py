from datetime import datetime, timezone
from parking_lot.domain.entities import Vehicle, Slot, ParkingSession, BillingAmount
from parking_lot.domain.common import VehicleType, SlotType, SlotStatus, SessionStatus, BillingType
from parking_lot.domain.results import RevenueEntry


def test_vehicle_creation_defaults():
    vehicle = Vehicle(number_plate="TN07CV7077", vehicle_type=VehicleType.CAR)
    assert vehicle.id is None
    assert vehicle.created_at is None


def test_slot_defaults_and_display_identifier():
    slot = Slot(slot_id="abc", slot_number="G-R-001", slot_type=SlotType.REGULAR, level=0, distance_rank=1)
    assert slot.status == SlotStatus.AVAILABLE
    assert slot.current_plate is None
    assert slot.display_identifier == "G-R-001"

    unnamed = Slot(slot_id="abc", slot_number="", slot_type=SlotType.REGULAR, level=0, distance_rank=1)
    assert unnamed.display_identifier == "abc"


def test_parking_session_defaults():
    session = ParkingSession(
        vehicle_number_plate="TN07CV7077",
        slot_id="abc",
        billing_type=BillingType.HOURLY,
        entry_time=datetime.now(timezone.utc),
    )
    assert session.status == SessionStatus.ACTIVE
    assert session.exit_time is None
    assert session.billing_amount.total == 0


def test_billing_amount_total():
    assert BillingAmount(fixed=150).total == 150
    assert BillingAmount(calculated=100).total == 100
    assert BillingAmount(fixed=None, calculated=None).total == 0


def test_revenue_entry_amount():
    now = datetime.now(timezone.utc)
    assert RevenueEntry("TN07CV7077", BillingType.DAY_PASS, now, now, 150, 0).amount == 150
    assert RevenueEntry("TN07CV7077", BillingType.HOURLY, now, now, None, 50).amount == 50

import pytest
from sqlalchemy import create_engine, select, inspect
from sqlalchemy.orm import Session

from parking_lot.domain.common import SlotType
from parking_lot.infrastructure.persistence.database import init_db, seed_slots
from parking_lot.infrastructure.persistence.models.models import Base, Slot
from parking_lot.infrastructure.persistence.seed import build_facility, slot_type_for_position


@pytest.fixture
def sync_engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'parking.db'}")
    yield engine
    engine.dispose()


class TestFacilityLayout:
    def test_build_facility_numbers_and_ranks(self):
        slots = build_facility(levels=2, slots_per_level=12)

        assert len(slots) == 24
        assert slots[0].slot_number == "G-H-001"
        assert slots[11].slot_number == "G-R-012"
        assert slots[12].slot_number == "1-H-001"
        assert len({s.slot_number for s in slots}) == 24
        ranks = [s.distance_rank for s in slots]
        assert ranks == sorted(ranks)

    def test_every_category_is_present(self):
        types = {slot_type_for_position(p) for p in range(1, 13)}
        assert types == set(SlotType)

    def test_zero_levels(self):
        assert build_facility(levels=0, slots_per_level=20) == []


class TestInitDb:
    def test_creates_tables_and_seeds_once(self, sync_engine):
        init_db(sync_engine)
        init_db(sync_engine)

        assert {"vehicles", "slots", "parking_sessions"} <= set(inspect(sync_engine).get_table_names())
        with Session(sync_engine) as session:
            slots = session.execute(select(Slot)).scalars().all()
        assert len(slots) > 0
        assert all(s.status == "Available" and s.current_plate is None for s in slots)
        assert all(s.slot_id for s in slots)

    def test_seed_slots_skips_populated_table(self, sync_engine):
        Base.metadata.create_all(sync_engine)
        with Session(sync_engine) as session:
            assert seed_slots(session, levels=1, slots_per_level=5) == 5
            assert seed_slots(session, levels=3, slots_per_level=20) == 0

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
import tempfile
import os

from parking_lot.infrastructure.persistence.models.models import Base
from parking_lot.infrastructure.persistence.sqlalchemy_repositories.sqlalchemy_repositories import (
    SQLAlchemyVehicleRepository,
    SQLAlchemySlotRepository,
    SQLAlchemyParkingSessionRepository,
)
from parking_lot.application.services.parking_service import ParkingService
from parking_lot.application.services.analytics_service import AnalyticsService
from parking_lot.application.services.slot_assignment_service import SlotAssignmentService
from parking_lot.config.settings_env import Settings
from parking_lot.domain.billing import BillingPolicy
from parking_lot.domain.common import SlotType, SlotStatus
from parking_lot.domain.entities import Slot


@pytest.fixture(scope="function")
async def test_db():
    """Create a test database for each test function."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as tmp_file:
        test_db_path = tmp_file.name

    # NullPool gives every session its own connection
    test_db_url = f"sqlite+aiosqlite:///{test_db_path}"
    engine = create_async_engine(
        test_db_url,
        poolclass=NullPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    yield async_session_maker

    await engine.dispose()
    os.unlink(test_db_path)


@pytest.fixture
async def db_session(test_db):
    """Create a database session for a test."""
    async with test_db() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_settings():
    """Provide test settings."""
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        ASYNC_DATABASE_URL="sqlite+aiosqlite:///:memory:",
        DAY_PASS_FEE=150,
        DAILY_CAP_FEE=200,
        PARKING_LEVELS=2,
        SLOTS_PER_LEVEL=5,
    )


@pytest.fixture
def billing_policy(test_settings):
    return BillingPolicy.from_settings(test_settings)


@pytest.fixture
def slot_repo(db_session):
    return SQLAlchemySlotRepository(db_session)


@pytest.fixture
def session_repo(db_session):
    return SQLAlchemyParkingSessionRepository(db_session)


@pytest.fixture
def vehicle_repo(db_session):
    return SQLAlchemyVehicleRepository(db_session)


@pytest.fixture
async def init_slots(slot_repo):
    """A two-level lot: ground has one slot of every type plus a second regular."""
    layout = [
        ("G-R-001", SlotType.REGULAR, 0, 3),
        ("G-C-002", SlotType.COMPACT, 0, 2),
        ("G-B-003", SlotType.BIKE, 0, 1),
        ("G-E-004", SlotType.EV, 0, 4),
        ("G-H-005", SlotType.HANDICAP, 0, 5),
        ("1-A-001", SlotType.HANDICAP_ACCESSIBLE, 1, 1001),
        ("1-R-002", SlotType.REGULAR, 1, 1002),
    ]
    slots = []
    for slot_number, slot_type, level, rank in layout:
        slots.append(await slot_repo.add(Slot(
            slot_id=None,
            slot_number=slot_number,
            slot_type=slot_type,
            level=level,
            distance_rank=rank,
            status=SlotStatus.AVAILABLE,
        )))
    return {s.slot_number: s for s in slots}


@pytest.fixture
def slot_assignment(slot_repo, session_repo):
    return SlotAssignmentService(slot_repo, session_repo)


@pytest.fixture
def parking_service(vehicle_repo, slot_repo, session_repo, billing_policy):
    """Create a ParkingService instance with test database session."""
    return ParkingService(
        vehicle_repo=vehicle_repo,
        slot_repo=slot_repo,
        parking_session_repo=session_repo,
        billing_policy=billing_policy,
    )


@pytest.fixture
def analytics_service(session_repo):
    """Create an AnalyticsService instance with test database session."""
    return AnalyticsService(parking_session_repo=session_repo)

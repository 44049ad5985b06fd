from parking_lot.shared.utils import logger
from sqlalchemy import create_engine, func, select
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import Session

from parking_lot.config.settings_env import settings
from parking_lot.infrastructure.persistence.models.models import Base, Slot
from parking_lot.infrastructure.persistence.seed import build_facility

DATABASE_URL = settings.DATABASE_URL
ASYNC_DATABASE_URL = settings.ASYNC_DATABASE_URL

# Sync engine for initialization
engine = create_engine(DATABASE_URL, connect_args={
                       "check_same_thread": False} if "sqlite" in DATABASE_URL else {})

# Async engine for application
async_engine = create_async_engine(ASYNC_DATABASE_URL, echo=False)
AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


def seed_slots(session: Session, levels: int, slots_per_level: int) -> int:
    """Create the facility layout if no slot exists yet; returns slots created."""
    existing_slots = session.execute(select(func.count(Slot.id))).scalar() or 0
    if existing_slots:
        return 0

    layout = build_facility(levels, slots_per_level)
    for slot in layout:
        session.add(
            Slot(
                slot_number=slot.slot_number,
                slot_type=slot.slot_type.value,
                level=slot.level,
                distance_rank=slot.distance_rank,
            )
        )
    session.commit()
    return len(layout)


def init_db(bind=None):
    bind = bind or engine
    logger.info(f"Initializing database at: {bind.url}")
    Base.metadata.create_all(bind=bind, checkfirst=True)

    with Session(bind) as session:
        created = seed_slots(session, settings.PARKING_LEVELS, settings.SLOTS_PER_LEVEL)
    if created:
        logger.info(f"Created {created} parking slots")

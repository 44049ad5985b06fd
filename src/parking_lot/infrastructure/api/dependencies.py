from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from parking_lot.application.services.analytics_service import AnalyticsService
from parking_lot.application.services.parking_service import ParkingService
from parking_lot.config.settings_env import settings
from parking_lot.domain.billing import BillingPolicy
from parking_lot.infrastructure.persistence.database import get_async_db
from parking_lot.infrastructure.persistence.sqlalchemy_repositories import (
    SQLAlchemyVehicleRepository,
    SQLAlchemySlotRepository,
    SQLAlchemyParkingSessionRepository,
)


def build_parking_service(db: AsyncSession) -> ParkingService:
    return ParkingService(
        vehicle_repo=SQLAlchemyVehicleRepository(db),
        slot_repo=SQLAlchemySlotRepository(db),
        parking_session_repo=SQLAlchemyParkingSessionRepository(db),
        billing_policy=BillingPolicy.from_settings(settings),
    )


def build_analytics_service(db: AsyncSession) -> AnalyticsService:
    return AnalyticsService(parking_session_repo=SQLAlchemyParkingSessionRepository(db))


async def get_parking_service(db: AsyncSession = Depends(get_async_db)) -> ParkingService:
    return build_parking_service(db)


async def get_analytics_service(db: AsyncSession = Depends(get_async_db)) -> AnalyticsService:
    return build_analytics_service(db)

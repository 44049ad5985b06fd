from .sqlalchemy_repositories import (
    SQLAlchemyVehicleRepository,
    SQLAlchemySlotRepository,
    SQLAlchemyParkingSessionRepository,
)

__all__ = [
    "SQLAlchemyVehicleRepository",
    "SQLAlchemySlotRepository",
    "SQLAlchemyParkingSessionRepository",
]

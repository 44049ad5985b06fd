from .abstract_repositories import (
    AbstractVehicleRepository,
    AbstractSlotRepository,
    AbstractParkingSessionRepository,
)

__all__ = [
    "AbstractVehicleRepository",
    "AbstractSlotRepository",
    "AbstractParkingSessionRepository",
]

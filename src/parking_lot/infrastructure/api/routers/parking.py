from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from parking_lot.application.services.analytics_service import AnalyticsService
from parking_lot.application.services.parking_service import ParkingService
from parking_lot.domain.exceptions import ParkingError
from parking_lot.infrastructure.api.dependencies import get_parking_service, get_analytics_service
from parking_lot.infrastructure.api.schemas.parking import (
    VehicleEntry, VehicleExit, VehicleLocate, SlotStatusUpdate,
    EntryResponse, ExitResponse, LocateResponse, SlotListResponse, SlotResponse,
    SlotUpdateResponse, RevenueResponse, ParkingStatus,
)

router = APIRouter(prefix="/api", tags=["parking"])


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, ParkingError):
        return HTTPException(status_code=e.status_code, detail=str(e))
    logger.exception("Unexpected error while handling request")
    return HTTPException(status_code=500, detail=f"Internal error: {str(e)}")


@router.post("/entry", response_model=EntryResponse)
async def vehicle_entry(
    entry: VehicleEntry,
    service: ParkingService = Depends(get_parking_service)
):
    try:
        result = await service.register_vehicle_entry(
            number_plate=entry.plate,
            vehicle_type=entry.vehicle_category,
            slot_request=entry.slot_request,
            billing_type=entry.billing_type,
        )
        return EntryResponse.from_result(result)
    except Exception as e:
        raise _http_error(e)


@router.post("/exit", response_model=ExitResponse)
async def vehicle_exit(
    exit_data: VehicleExit,
    service: ParkingService = Depends(get_parking_service)
):
    try:
        result = await service.register_vehicle_exit(exit_data.plate)
        return ExitResponse.from_result(result)
    except Exception as e:
        raise _http_error(e)


@router.post("/locate", response_model=LocateResponse)
async def locate_vehicle(
    locate: VehicleLocate,
    service: ParkingService = Depends(get_parking_service)
):
    try:
        result = await service.locate_vehicle(locate.plate)
        return LocateResponse.from_result(result)
    except Exception as e:
        raise _http_error(e)


@router.get("/slots", response_model=SlotListResponse)
async def list_slots(service: ParkingService = Depends(get_parking_service)):
    try:
        slots = await service.get_slots()
        return SlotListResponse(slots=[SlotResponse.from_slot(s) for s in slots])
    except Exception as e:
        raise _http_error(e)


@router.patch("/slots", response_model=SlotUpdateResponse)
async def update_slot_status(
    update: SlotStatusUpdate,
    service: ParkingService = Depends(get_parking_service)
):
    try:
        await service.update_slot_status(update.slot_identifier, update.status)
        return SlotUpdateResponse(success=True)
    except Exception as e:
        raise _http_error(e)


@router.get("/revenue", response_model=RevenueResponse)
async def get_revenue(analytics: AnalyticsService = Depends(get_analytics_service)):
    try:
        summary = await analytics.get_revenue_summary()
        return RevenueResponse.from_summary(summary)
    except Exception as e:
        raise _http_error(e)


@router.get("/status", response_model=ParkingStatus)
async def get_parking_status(service: ParkingService = Depends(get_parking_service)):
    try:
        return ParkingStatus(**await service.get_parking_status())
    except Exception as e:
        raise _http_error(e)

import uvicorn
from fastapi import FastAPI

from parking_lot.config.settings_env import settings
from parking_lot.infrastructure.api.routers.parking import router as parking_router
from parking_lot.infrastructure.persistence.database import init_db
from parking_lot.shared.utils import logger

app = FastAPI(
    title="Parking Lot Manager",
    version="1.0.0",
)
app.include_router(parking_router)


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("Parking API ready")


@app.get("/health")
async def health():
    return {"status": "ok"}


def run():
    uvicorn.run(
        "parking_lot.infrastructure.api.main:app",
        host=settings.FASTAPI_HOST,
        port=settings.FASTAPI_PORT,
        reload=settings.DEV_MODE,
    )


if __name__ == "__main__":
    run()

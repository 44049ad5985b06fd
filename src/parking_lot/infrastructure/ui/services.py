"""Sync helpers used by the Streamlit pages."""
import asyncio

from parking_lot.infrastructure.api.dependencies import build_parking_service, build_analytics_service
from parking_lot.infrastructure.persistence.database import AsyncSessionLocal


async def _with_parking_service(method: str, *args, **kwargs):
    async with AsyncSessionLocal() as db:
        service = build_parking_service(db)
        return await getattr(service, method)(*args, **kwargs)


async def _revenue_summary():
    async with AsyncSessionLocal() as db:
        return await build_analytics_service(db).get_revenue_summary()


def call_parking_service(method: str, *args, **kwargs):
    return asyncio.run(_with_parking_service(method, *args, **kwargs))


def get_revenue_summary():
    return asyncio.run(_revenue_summary())

"""
Revenue Router — Daily revenue observations per brand.
"""

from fastapi import APIRouter, Depends, Query

from brandops.schemas import Revenue, RevenueCreate
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage
from brandops.utils import parse_datetime

router = APIRouter(prefix="/revenue", tags=["Revenue"])


@router.get("/{brand_id}", response_model=list[Revenue])
async def list_revenue(
    brand_id: int,
    from_date: str = Query(..., alias="fromDate"),
    to_date: str = Query(..., alias="toDate"),
    storage: Storage = Depends(get_storage),
):
    """Revenue rows dated between fromDate and toDate, both inclusive."""
    return await storage.get_revenue(
        brand_id,
        parse_datetime(from_date, "fromDate"),
        parse_datetime(to_date, "toDate"),
    )


@router.get("/{brand_id}/today")
async def today_revenue(brand_id: int, storage: Storage = Depends(get_storage)):
    return {"amount": await storage.get_today_revenue(brand_id)}


@router.post("", response_model=Revenue, status_code=201)
async def create_revenue(payload: RevenueCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_revenue(payload)

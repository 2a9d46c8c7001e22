"""
Ad Spend Router — Daily advertising spend per brand and platform.
"""

from fastapi import APIRouter, Depends, Query

from brandops.schemas import AdSpend, AdSpendCreate
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage
from brandops.utils import parse_datetime

router = APIRouter(prefix="/ad-spend", tags=["Ad Spend"])


@router.get("/{brand_id}", response_model=list[AdSpend])
async def list_ad_spend(
    brand_id: int,
    from_date: str = Query(..., alias="fromDate"),
    to_date: str = Query(..., alias="toDate"),
    storage: Storage = Depends(get_storage),
):
    return await storage.get_ad_spend(
        brand_id,
        parse_datetime(from_date, "fromDate"),
        parse_datetime(to_date, "toDate"),
    )


@router.get("/{brand_id}/today")
async def today_ad_spend(brand_id: int, storage: Storage = Depends(get_storage)):
    return {"amount": await storage.get_today_ad_spend(brand_id)}


@router.post("", response_model=AdSpend, status_code=201)
async def create_ad_spend(payload: AdSpendCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_ad_spend(payload)

"""
Ad Performance Router — Ad set results per brand, optionally filtered by platform.
"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from brandops.schemas import AdPerformance, AdPerformanceCreate, AdStatus
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage

router = APIRouter(prefix="/ad-performance", tags=["Ad Performance"])


class AdStatusUpdate(BaseModel):
    status: AdStatus


@router.get("/{brand_id}", response_model=list[AdPerformance])
async def list_ad_performance(
    brand_id: int,
    platform: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
):
    return await storage.get_ad_performance(brand_id, platform)


@router.get("/{brand_id}/{ad_id}", response_model=AdPerformance)
async def get_ad_performance(brand_id: int, ad_id: int, storage: Storage = Depends(get_storage)):
    ad = await storage.get_ad_performance_by_id(ad_id)
    if not ad or ad.brand_id != brand_id:
        raise HTTPException(status_code=404, detail="Ad performance not found")
    return ad


@router.post("", response_model=AdPerformance, status_code=201)
async def create_ad_performance(payload: AdPerformanceCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_ad_performance(payload)


@router.patch("/{ad_id}/status", response_model=AdPerformance)
async def update_ad_status(ad_id: int, payload: AdStatusUpdate, storage: Storage = Depends(get_storage)):
    ad = await storage.update_ad_status(ad_id, payload.status)
    if not ad:
        raise HTTPException(status_code=404, detail="Ad performance not found")
    return ad

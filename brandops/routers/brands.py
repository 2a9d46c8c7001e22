"""
Brands Router — List, fetch and create brands.
"""

from fastapi import APIRouter, Depends, HTTPException

from brandops.schemas import Brand, BrandCreate
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage

router = APIRouter(prefix="/brands", tags=["Brands"])


@router.get("", response_model=list[Brand])
async def list_brands(storage: Storage = Depends(get_storage)):
    return await storage.get_brands()


@router.get("/{brand_id}", response_model=Brand)
async def get_brand(brand_id: int, storage: Storage = Depends(get_storage)):
    brand = await storage.get_brand(brand_id)
    if not brand:
        raise HTTPException(status_code=404, detail="Brand not found")
    return brand


@router.post("", response_model=Brand, status_code=201)
async def create_brand(payload: BrandCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_brand(payload)

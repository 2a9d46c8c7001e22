"""
Ops Tasks Router — Workflow board per brand.

Status and progress move together: status "done" sets progress to 100, and
progress 100 sets status "done"; any other positive progress means "in_progress".
"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from brandops.schemas import OpsTask, OpsTaskCreate, TaskStatus
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage

router = APIRouter(prefix="/ops-tasks", tags=["Ops Tasks"])


# ── Schemas ────────────────────────────────────────────────────────────

class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskProgressUpdate(BaseModel):
    progress: int = Field(ge=0, le=100)


# ── Endpoints ───────────────────────────────────────────────────────────

@router.get("/{brand_id}", response_model=list[OpsTask])
async def list_tasks(
    brand_id: int,
    status: Optional[TaskStatus] = Query(None),
    storage: Storage = Depends(get_storage),
):
    return await storage.get_ops_tasks(brand_id, status)


@router.get("/{brand_id}/{task_id}", response_model=OpsTask)
async def get_task(brand_id: int, task_id: int, storage: Storage = Depends(get_storage)):
    task = await storage.get_ops_task(task_id)
    if not task or task.brand_id != brand_id:
        raise HTTPException(status_code=404, detail="Ops task not found")
    return task


@router.post("", response_model=OpsTask, status_code=201)
async def create_task(payload: OpsTaskCreate, storage: Storage = Depends(get_storage)):
    return await storage.create_ops_task(payload)


@router.patch("/{task_id}/status", response_model=OpsTask)
async def update_task_status(task_id: int, payload: TaskStatusUpdate, storage: Storage = Depends(get_storage)):
    task = await storage.update_ops_task_status(task_id, payload.status)
    if not task:
        raise HTTPException(status_code=404, detail="Ops task not found")
    return task


@router.patch("/{task_id}/progress", response_model=OpsTask)
async def update_task_progress(task_id: int, payload: TaskProgressUpdate, storage: Storage = Depends(get_storage)):
    task = await storage.update_ops_task_progress(task_id, payload.progress)
    if not task:
        raise HTTPException(status_code=404, detail="Ops task not found")
    return task

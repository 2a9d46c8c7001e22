"""
Insights Router — AI analyses over a brand's dashboard data.

Answers always succeed: when the model is unavailable the service returns a
fixed fallback instead of an error.
"""

import logging
from datetime import timedelta
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import Field

from brandops.schemas import CamelModel, Entity, TaskStatus
from brandops.services.insights_service import InsightsService
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage
from brandops.utils import now_local, parse_datetime

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/insights", tags=["Insights"])

DEFAULT_WINDOW_DAYS = 30


# ── Schemas ────────────────────────────────────────────────────────────

class AdCopyRequest(CamelModel):
    product_info: str = Field(min_length=1)
    platform: Optional[str] = None


class SentimentRequest(CamelModel):
    feedback: str = Field(min_length=1)


def get_insights_service(request: Request) -> InsightsService:
    return request.app.state.insights


def _as_json(rows: list[Entity]) -> list[dict]:
    return [row.model_dump(mode="json", by_alias=True) for row in rows]


async def _require_brand(storage: Storage, brand_id: int):
    brand = await storage.get_brand(brand_id)
    if not brand:
        raise HTTPException(status_code=404, detail="Brand not found")
    return brand


# ── Endpoints ───────────────────────────────────────────────────────────

@router.post("/{brand_id}/revenue-anomalies")
async def revenue_anomalies(
    brand_id: int,
    from_date: Optional[str] = Query(None, alias="fromDate"),
    to_date: Optional[str] = Query(None, alias="toDate"),
    storage: Storage = Depends(get_storage),
    insights: InsightsService = Depends(get_insights_service),
):
    """Flag unusual days in the brand's revenue (last 30 days unless a range is given)."""
    await _require_brand(storage, brand_id)
    end = parse_datetime(to_date, "toDate") if to_date else now_local()
    start = parse_datetime(from_date, "fromDate") if from_date else end - timedelta(days=DEFAULT_WINDOW_DAYS)
    revenue = await storage.get_revenue(brand_id, start, end)
    return await insights.analyze_revenue_anomalies(_as_json(revenue))


@router.post("/{brand_id}/ad-copy")
async def ad_copy(
    brand_id: int,
    payload: AdCopyRequest,
    storage: Storage = Depends(get_storage),
    insights: InsightsService = Depends(get_insights_service),
):
    await _require_brand(storage, brand_id)
    ads = await storage.get_ad_performance(brand_id, payload.platform)
    return await insights.generate_ad_copy_suggestions(_as_json(ads), payload.product_info)


@router.post("/sentiment")
async def sentiment(payload: SentimentRequest, insights: InsightsService = Depends(get_insights_service)):
    return await insights.analyze_sentiment(payload.feedback)


@router.get("/{brand_id}/daily-briefing")
async def daily_briefing(
    brand_id: int,
    storage: Storage = Depends(get_storage),
    insights: InsightsService = Depends(get_insights_service),
):
    """Summarize today's numbers, agents, ads and open tasks for one brand."""
    brand = await _require_brand(storage, brand_id)
    tasks = await storage.get_ops_tasks(brand_id)
    business_data = {
        "brand": brand.name,
        "todayRevenue": await storage.get_today_revenue(brand_id),
        "todayAdSpend": await storage.get_today_ad_spend(brand_id),
        "aiAgents": _as_json(await storage.get_ai_agents(brand_id)),
        "adPerformance": _as_json(await storage.get_ad_performance(brand_id)),
        "openTasks": _as_json([t for t in tasks if t.status != TaskStatus.DONE.value]),
    }
    return await insights.generate_daily_briefing(business_data)

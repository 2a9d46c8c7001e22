"""
Tests for the OpenAI insight helpers and the insights router.
"""

import json
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

from brandops.services.insights_service import (
    AD_COPY_FALLBACK,
    DAILY_BRIEFING_FALLBACK,
    REVENUE_ANOMALIES_FALLBACK,
    SENTIMENT_FALLBACK,
    InsightsService,
)

pytestmark = pytest.mark.anyio


def _client_returning(content):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    )
    return client


async def test_json_reply_is_returned_and_json_mode_requested():
    reply = {"sentiment": "positive", "score": 0.9, "keyThemes": ["taste"], "actionableInsights": [], "summary": "Happy"}
    client = _client_returning(json.dumps(reply))
    service = InsightsService(model="gpt-4o", client=client)

    assert await service.analyze_sentiment("Love it") == reply
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert "Love it" in kwargs["messages"][1]["content"]


async def test_missing_api_key_returns_fallbacks():
    service = InsightsService(api_key="")
    assert not service.enabled
    assert await service.analyze_revenue_anomalies([]) == REVENUE_ANOMALIES_FALLBACK
    assert await service.generate_ad_copy_suggestions([], "bottle") == AD_COPY_FALLBACK
    assert await service.analyze_sentiment("meh") == SENTIMENT_FALLBACK
    assert await service.generate_daily_briefing({}) == DAILY_BRIEFING_FALLBACK


async def test_provider_error_returns_fallback():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(side_effect=RuntimeError("rate limited"))
    service = InsightsService(client=client)
    assert await service.generate_daily_briefing({"brand": "HydraBark"}) == DAILY_BRIEFING_FALLBACK


async def test_non_json_or_non_object_reply_returns_fallback():
    service = InsightsService(client=_client_returning("not json"))
    assert await service.analyze_revenue_anomalies([{"amount": 1}]) == REVENUE_ANOMALIES_FALLBACK

    service = InsightsService(client=_client_returning("[1, 2]"))
    assert await service.generate_ad_copy_suggestions([], "bottle") == AD_COPY_FALLBACK


async def test_fallbacks_are_copies():
    service = InsightsService()
    result = await service.analyze_sentiment("x")
    result["keyThemes"].append("mutated")
    assert SENTIMENT_FALLBACK["keyThemes"] == []


# ── Router ─────────────────────────────────────────────────────────────

async def test_insight_endpoints_fall_back_without_key(client):
    response = await client.post("/api/insights/1/revenue-anomalies")
    assert response.status_code == 200
    assert response.json() == REVENUE_ANOMALIES_FALLBACK

    response = await client.get("/api/insights/1/daily-briefing")
    assert response.json() == DAILY_BRIEFING_FALLBACK

    response = await client.post("/api/insights/sentiment", json={"feedback": "Great bottle"})
    assert response.json() == SENTIMENT_FALLBACK


async def test_ad_copy_sends_brand_ads(client, insights_service):
    with patch.object(insights_service, "generate_ad_copy_suggestions", new_callable=AsyncMock,
                      return_value={"suggestions": [{"headline": "Hi"}], "reasoning": "ok"}) as generate:
        response = await client.post("/api/insights/1/ad-copy", json={"productInfo": "Dog bottle", "platform": "tiktok"})
    assert response.status_code == 200
    assert response.json()["reasoning"] == "ok"
    ads, product_info = generate.call_args.args
    assert product_info == "Dog bottle"
    assert len(ads) == 4
    assert ads[0]["adSetId"] == "TT_HB_PUPPY_01"


async def test_daily_briefing_collects_open_tasks(client, insights_service):
    with patch.object(insights_service, "generate_daily_briefing", new_callable=AsyncMock,
                      return_value=DAILY_BRIEFING_FALLBACK) as generate:
        await client.get("/api/insights/1/daily-briefing")
    data = generate.call_args.args[0]
    assert data["brand"] == "HydraBark"
    assert data["todayRevenue"] > 0
    assert all(t["status"] != "done" for t in data["openTasks"])
    assert len(data["openTasks"]) == 5


async def test_insights_for_unknown_brand_is_404(client):
    assert (await client.get("/api/insights/99/daily-briefing")).status_code == 404
    assert (await client.post("/api/insights/99/ad-copy", json={"productInfo": "x"})).status_code == 404
    assert (await client.post("/api/insights/sentiment", json={})).status_code == 400

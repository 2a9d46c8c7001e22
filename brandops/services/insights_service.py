"""
Insights Service — OpenAI JSON-mode completions over dashboard data.

Every helper degrades gracefully: a missing API key, a provider error or a
non-JSON reply is logged and answered with a fixed fallback, so the dashboard
never fails because the model did.
"""

import copy
import json
import logging
from typing import Any, Optional
from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

REVENUE_ANOMALIES_FALLBACK = {
    "anomalies": [],
    "summary": "Unable to analyze revenue data at this time.",
}
AD_COPY_FALLBACK = {
    "suggestions": [],
    "reasoning": "Unable to generate ad copy suggestions at this time.",
}
SENTIMENT_FALLBACK = {
    "sentiment": "neutral",
    "score": 0.5,
    "keyThemes": [],
    "actionableInsights": [],
    "summary": "Unable to analyze sentiment at this time.",
}
DAILY_BRIEFING_FALLBACK = {
    "summary": "Unable to generate daily briefing at this time.",
    "keyMetrics": {},
    "importantAlerts": [],
    "recommendedActions": [],
}

REVENUE_ANOMALIES_PROMPT = (
    "You are a financial analyst AI. Analyze the revenue data to detect anomalies and provide insights. "
    "Return your analysis as JSON with 'anomalies' array and 'summary' text. "
    "For each anomaly, include date, amount, percentageChange, reason (your analysis of why this happened), "
    "and severity (high/medium/low)."
)
AD_COPY_PROMPT = (
    "You are an advertising specialist AI. Generate ad copy suggestions based on existing ad performance "
    "data and product information. Return your suggestions as JSON with a 'suggestions' array (headline, "
    "description, callToAction, targetAudience, estimatedPerformance) and your 'reasoning'."
)
SENTIMENT_PROMPT = (
    "You are a customer feedback analysis AI. Analyze the sentiment of customer feedback. "
    "Return your analysis as JSON with sentiment category (positive/neutral/negative), numeric score (0-1), "
    "keyThemes, actionableInsights, and summary."
)
DAILY_BRIEFING_PROMPT = (
    "You are a business intelligence AI. Generate a concise daily briefing based on business data. "
    "Return your briefing as JSON with a summary, keyMetrics, importantAlerts, and recommendedActions."
)


def _dumps(data: Any) -> str:
    return json.dumps(data, default=str)[:8000]


class InsightsService:
    """Thin OpenAI wrapper; one JSON-mode completion per helper."""

    def __init__(self, api_key: str = "", model: str = "gpt-4o", client: Optional[AsyncOpenAI] = None):
        self.model = model
        self._client = client
        if self._client is None and api_key:
            self._client = AsyncOpenAI(api_key=api_key)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def _complete_json(self, system: str, user: str, temperature: float, fallback: dict) -> dict:
        if self._client is None:
            logger.warning("OPENAI_API_KEY not configured; returning fallback insight.")
            return copy.deepcopy(fallback)
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                response_format={"type": "json_object"},
                temperature=temperature,
            )
            result = json.loads(response.choices[0].message.content or "")
            if not isinstance(result, dict):
                raise ValueError(f"expected a JSON object, got {type(result).__name__}")
            return result
        except Exception as e:
            logger.error(f"AI completion failed: {e}")
            return copy.deepcopy(fallback)

    async def analyze_revenue_anomalies(self, revenue_data: list[dict]) -> dict:
        return await self._complete_json(
            REVENUE_ANOMALIES_PROMPT,
            f"Analyze this revenue data for anomalies: {_dumps(revenue_data)}",
            temperature=0.2,
            fallback=REVENUE_ANOMALIES_FALLBACK,
        )

    async def generate_ad_copy_suggestions(self, ad_data: list[dict], product_info: str) -> dict:
        return await self._complete_json(
            AD_COPY_PROMPT,
            f"Generate ad copy suggestions based on this ad performance data: {_dumps(ad_data)}. "
            f"Product information: {product_info}",
            temperature=0.7,
            fallback=AD_COPY_FALLBACK,
        )

    async def analyze_sentiment(self, feedback_text: str) -> dict:
        return await self._complete_json(
            SENTIMENT_PROMPT,
            f'Analyze the sentiment in this customer feedback: "{feedback_text}"',
            temperature=0.2,
            fallback=SENTIMENT_FALLBACK,
        )

    async def generate_daily_briefing(self, business_data: dict) -> dict:
        return await self._complete_json(
            DAILY_BRIEFING_PROMPT,
            f"Generate a daily briefing based on this business data: {_dumps(business_data)}",
            temperature=0.3,
            fallback=DAILY_BRIEFING_FALLBACK,
        )


def create_insights_service(api_key: str = "", model: str = "gpt-4o") -> InsightsService:
    """Factory function; keys come from Settings."""
    return InsightsService(api_key=api_key, model=model)

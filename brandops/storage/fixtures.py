"""
Fixed sample data loaded into the in-memory store at construction.

Values are constant so a fresh process always shows the same dashboard; only
dates move with the clock (the last seven days, tasks due around today).
"""

from datetime import datetime, timedelta
from typing import Any, Iterator

from brandops.schemas import AdPerformance, AdSpend, AIAgent, Entity, OpsTask, Revenue

DEFAULT_BRAND = {"name": "HydraBark", "code": "HB"}
DEFAULT_ADMIN = {"username": "admin", "password": "admin", "name": "John Doe", "role": "admin"}

DAILY_REVENUE = [12450.00, 11875.50, 13020.25, 10980.00, 14210.75, 12760.40, 11390.90]
DAILY_AD_SPEND = [3820.15, 3410.60, 4105.30, 3290.00, 4380.45, 3975.20, 3530.80]

AGENTS = [
    {
        "name": "Customer Support Assistant",
        "type": "support",
        "status": "active",
        "cost": 0.84,
        "metrics": {"conversations": 24, "avgResponse": "3.2s", "satisfaction": "92%"},
    },
    {
        "name": "Content Creator",
        "type": "content",
        "status": "active",
        "cost": 2.36,
        "metrics": {"articles": 3, "tokens": "14.2k", "quality": "8.7/10"},
    },
    {
        "name": "Ad Optimizer",
        "type": "ads",
        "status": "paused",
        "cost": 0.0,
        "metrics": {"optimizations": 0, "adSets": 12, "roasImpact": "--"},
    },
]

ADS = [
    ("TT_HB_PUPPY_01", "HydraBark Puppy", 1245.32, 3.8, 2.1, "active", "photo-1581888227599-779811939961"),
    ("TT_HB_SENIOR_02", "HydraBark Senior", 864.50, 2.4, 1.3, "warning", "photo-1588943211346-0908a1fb0b01"),
    ("TT_HB_ADULT_01", "HydraBark Adult", 1762.18, 4.2, 2.8, "active", "photo-1576201836106-db1758fd1c97"),
    ("TT_HB_BUNDLE_03", "HydraBark Bundle", 0.0, 1.2, 0.9, "paused", "photo-1567014543648-e4391c989aab"),
]

# (title, description, status, category, due in days, progress)
TASKS = [
    ("Review new ad creatives", "Review 5 new TikTok ad creatives from the design team", "todo", "marketing", 1, 0),
    ("Approve customer refund", "Process refund for order #4392 due to shipping damage", "todo", "support", 0, 0),
    ("Set up new product variants", "Create 3 new size variants for HydraBark Adult formula", "todo", "product", 3, 0),
    ("Optimize ad budget allocation", "Redistribute budget from underperforming campaigns to high ROAS ads",
     "in_progress", "marketing", 0, 75),
    ("Update inventory forecast", "Recalculate Q3 inventory needs based on new growth projections",
     "in_progress", "operations", 2, 40),
    ("Publish weekly blog post", "Publish \"Top 10 Dog Nutrition Myths\" blog post", "done", "marketing", -1, 100),
    ("Update customer email sequence", "Revise the post-purchase email sequence with new product recommendations",
     "done", "support", 0, 100),
]


def fixture_rows(brand_id: int, now: datetime) -> Iterator[tuple[type[Entity], dict[str, Any]]]:
    """Yield (entity kind, column values) for every sample record of one brand."""
    for days_ago, (revenue, spend) in enumerate(zip(DAILY_REVENUE, DAILY_AD_SPEND)):
        day = now - timedelta(days=days_ago)
        yield Revenue, {"brand_id": brand_id, "date": day, "amount": revenue, "source": "shopify", "created_at": now}
        yield AdSpend, {
            "brand_id": brand_id,
            "date": day,
            "amount": spend,
            "platform": "meta" if days_ago % 2 == 0 else "tiktok",
            "campaign": f"Campaign {days_ago}",
            "ad_set": f"Ad Set {days_ago}",
            "created_at": now,
        }

    for agent in AGENTS:
        yield AIAgent, {**agent, "brand_id": brand_id, "created_at": now, "updated_at": now}

    for ad_set_id, ad_set_name, spend, roas, ctr, status, photo in ADS:
        yield AdPerformance, {
            "brand_id": brand_id,
            "ad_set_id": ad_set_id,
            "ad_set_name": ad_set_name,
            "platform": "tiktok",
            "spend": spend,
            "roas": roas,
            "ctr": ctr,
            "status": status,
            "thumbnail": f"https://images.unsplash.com/{photo}",
            "date": now,
            "created_at": now,
        }

    for title, description, status, category, due_in, progress in TASKS:
        yield OpsTask, {
            "brand_id": brand_id,
            "title": title,
            "description": description,
            "status": status,
            "category": category,
            "due_date": now + timedelta(days=due_in),
            "progress": progress,
            "created_at": now,
            "updated_at": now,
        }

#!/usr/bin/env python3
"""
Seed the configured storage backend with two sample brands and 30 days of data.
Goes through the Storage interface, so it works the same on database and supabase.
Brands that already exist (by code) are skipped.

Run from the repo root: python -m scripts.seed_db [--random-seed N]
"""
import argparse
import asyncio
import random
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

SOURCES = ["direct", "organic", "referral", "social", "email"]
PLATFORMS = ["facebook", "instagram", "tiktok", "google"]

# name, code, base daily revenue, base daily ad spend
BRANDS = [
    ("HydraBark", "HB", 2000, 800),
    ("PawsomeTreats", "PT", 1500, 600),
]

# name, type, status, cost, metrics
AGENTS = {
    "HB": [
        ("Customer Support Assistant", "support", "active", 19.99,
         {"messagesHandled": 243, "satisfactionRate": 92, "avgResponseTime": "1m 42s"}),
        ("Inventory Optimization", "operations", "active", 49.99,
         {"stockoutsPrevented": 12, "savingsGenerated": "$3,420", "accuracyRate": 94}),
        ("Ad Copy Generator", "marketing", "paused", 29.99,
         {"adsGenerated": 48, "clickRateImprovement": 18, "conversionLift": 22}),
    ],
    "PT": [
        ("Customer Feedback Analyzer", "analytics", "active", 39.99,
         {"reviewsAnalyzed": 532, "insightsGenerated": 48, "actionItems": 16}),
        ("Product Recommendation Engine", "sales", "active", 59.99,
         {"recommendationAccuracy": 89, "upsellRate": 24, "avgOrderValueIncrease": "$7.42"}),
    ],
}

# ad set id, name, platform, spend, roas, ctr, status
ADS = {
    "HB": [
        ("fb_ad_123", "Summer Hydration Collection", "facebook", 1200.50, 4.2, 2.8, "active"),
        ("fb_ad_124", "Anti-Spill Technology", "facebook", 850.75, 3.7, 2.4, "active"),
        ("ig_ad_125", "Eco-Friendly Materials", "instagram", 923.40, 2.1, 1.9, "paused"),
        ("tt_ad_126", "Dog Park Essentials", "tiktok", 1450.20, 4.8, 3.5, "active"),
    ],
    "PT": [
        ("fb_ad_223", "Organic Treat Collection", "facebook", 980.50, 3.8, 2.5, "active"),
        ("ig_ad_224", "Training Treats Special", "instagram", 750.25, 4.1, 2.9, "active"),
        ("tt_ad_225", "Dental Health Chews", "tiktok", 620.40, 2.3, 1.8, "paused"),
    ],
}

# title, description, status, category, due in days, progress
TASKS = {
    "HB": [
        ("Restock blue bottles", "Order 500 blue bottles ahead of summer demand", "todo", "inventory", 7, 0),
        ("Prepare fall ad campaign", "Define visuals and budget for the fall campaign", "in_progress", "marketing", 14, 30),
        ("Resolve delivery delays", "Contact the carrier about recurring delivery delays", "in_progress", "logistics", 2, 50),
        ("Analyze June customer returns", "Compile returns feedback to find recurring issues", "done", "customer_service", -5, 100),
    ],
    "PT": [
        ("Update ingredient lists", "Update website ingredient lists for the new regulations", "todo", "website", 5, 0),
        ("Supplier negotiations", "Renegotiate main supplier contracts for better pricing", "in_progress", "procurement", 10, 60),
        ("Production staff training", "Run training on the new quality procedures", "done", "hr", -3, 100),
    ],
}


def _split(total: float, parts: list[str], rng: random.Random) -> list[tuple[str, float]]:
    return [(part, round(total / len(parts) * (0.8 + rng.random() * 0.4), 2)) for part in parts]


async def seed_brand(storage, name: str, code: str, base_revenue: float, base_spend: float, rng: random.Random):
    from brandops.schemas import (
        AdPerformanceCreate, AdSpendCreate, AIAgentCreate, BrandCreate, OpsTaskCreate, RevenueCreate,
    )
    from brandops.utils import now_local

    if await storage.get_brand_by_code(code):
        print(f"⏭  Brand {code} already exists, skipping")
        return

    brand = await storage.create_brand(BrandCreate(name=name, code=code))
    print(f"✅ Created brand: {brand.name} (id={brand.id})")

    today = now_local()
    revenue_rows = spend_rows = 0
    for days_ago in range(30, -1, -1):
        day = today - timedelta(days=days_ago)
        for source, amount in _split(base_revenue + rng.random() * base_revenue / 2, SOURCES, rng):
            await storage.create_revenue(RevenueCreate(brand_id=brand.id, date=day, amount=amount, source=source))
            revenue_rows += 1
        for platform, amount in _split(base_spend + rng.random() * base_spend / 2, PLATFORMS, rng):
            await storage.create_ad_spend(AdSpendCreate(brand_id=brand.id, date=day, amount=amount, platform=platform))
            spend_rows += 1
    print(f"   {revenue_rows} revenue entries, {spend_rows} ad spend entries")

    for agent_name, agent_type, status, cost, metrics in AGENTS[code]:
        agent = await storage.create_ai_agent(AIAgentCreate(
            brand_id=brand.id, name=agent_name, type=agent_type, status=status, metrics=metrics,
        ))
        # New agents start at zero cost; record the accumulated sample cost afterwards
        await storage.update_ai_agent_cost(agent.id, cost)
    print(f"   {len(AGENTS[code])} AI agents")

    for ad_set_id, ad_set_name, platform, spend, roas, ctr, status in ADS[code]:
        await storage.create_ad_performance(AdPerformanceCreate(
            brand_id=brand.id, ad_set_id=ad_set_id, ad_set_name=ad_set_name, platform=platform,
            spend=spend, roas=roas, ctr=ctr, status=status, date=today,
            thumbnail=f"https://picsum.photos/100?random={ad_set_id}",
        ))
    print(f"   {len(ADS[code])} ad performance entries")

    for title, description, status, category, due_in, progress in TASKS[code]:
        await storage.create_ops_task(OpsTaskCreate(
            brand_id=brand.id, title=title, description=description, status=status,
            category=category, due_date=today + timedelta(days=due_in), progress=progress,
        ))
    print(f"   {len(TASKS[code])} ops tasks")


async def main(argv=None):
    from brandops.config import get_settings
    from brandops.storage.errors import StorageError
    from brandops.storage.factory import build_storage

    parser = argparse.ArgumentParser(description="Seed BrandOps sample data")
    parser.add_argument("--random-seed", type=int, default=None, help="Make generated amounts reproducible")
    args = parser.parse_args(argv)

    settings = get_settings()
    if settings.storage_backend == "memory":
        print("STORAGE_BACKEND=memory already ships with fixture data; nothing to seed.")
        sys.exit(0)

    rng = random.Random(args.random_seed)
    storage = build_storage(settings)
    print(f"🌱 Seeding {storage.name} storage...")
    try:
        await storage.startup()
        for name, code, base_revenue, base_spend in BRANDS:
            await seed_brand(storage, name, code, base_revenue, base_spend, rng)
        print("🎉 Seeding complete!")
    except StorageError as e:
        print(f"❌ Error seeding storage: {e}")
        sys.exit(1)
    finally:
        await storage.close()


if __name__ == "__main__":
    asyncio.run(main())

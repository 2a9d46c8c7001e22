#!/usr/bin/env python3
"""
Probe the configured storage backend: connectivity, then what each brand holds.
Run from the repo root: python -m scripts.check_storage
"""
import asyncio
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


async def main():
    from brandops.config import get_settings
    from brandops.storage.errors import StorageError
    from brandops.storage.factory import build_storage
    from brandops.utils import now_local

    settings = get_settings()
    storage = build_storage(settings)
    print(f"Backend: {storage.name}")
    try:
        await storage.startup()
        if not await storage.ping():
            print("❌ Backend unreachable")
            sys.exit(1)
        print("✅ Backend reachable")

        brands = await storage.get_brands()
        print(f"Brands: {len(brands)}")
        end = now_local()
        start = end - timedelta(days=30)
        for brand in brands:
            revenue = await storage.get_revenue(brand.id, start, end)
            spend = await storage.get_ad_spend(brand.id, start, end)
            agents = await storage.get_ai_agents(brand.id)
            ads = await storage.get_ad_performance(brand.id)
            tasks = await storage.get_ops_tasks(brand.id)
            print(f"\n  {brand.name} ({brand.code}, id={brand.id})")
            print(f"    revenue rows (30d):   {len(revenue)}  today: {await storage.get_today_revenue(brand.id):.2f}")
            print(f"    ad spend rows (30d):  {len(spend)}  today: {await storage.get_today_ad_spend(brand.id):.2f}")
            print(f"    ai agents:            {len(agents)}")
            print(f"    ad performance rows:  {len(ads)}")
            print(f"    ops tasks:            {len(tasks)}")
    except StorageError as e:
        print(f"❌ {e}")
        sys.exit(1)
    finally:
        await storage.close()


if __name__ == "__main__":
    asyncio.run(main())

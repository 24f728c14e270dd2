#!/usr/bin/env python
"""
Seed script to create demo catalog rows (products, images, variants) for local smoke tests.
"""
from __future__ import annotations

import argparse
import sys
from typing import Dict, List
from uuid import NAMESPACE_DNS, UUID, uuid5

from storefront.catalog.cdn import product_slug
from storefront.config import get_settings
from storefront.supabase_client import get_supabase

# name, category, price in cents, colour, legacy image path, tags
DEMO_PRODUCTS = [
    ("Navy Classic Suit", "Suits", 29999, "navy", "suits/navy/navy-main-2.jpg", ["wedding", "trending"]),
    ("Black Tuxedo", "Tuxedos", 34999, "black", "suits/black/main.png", ["black-tie", "winter"]),
    ("Men's Emerald Velvet Dinner Jacket", "Blazers", 24999, "emerald", None, ["prom", "fall"]),
    ("White Slim Fit Dress Shirt", "Shirts", 6999, "white", "shirts/classic-fit-collection.jpg", []),
    ("Burgundy Bow Tie", "Accessories", 2999, "burgundy", "Bow%3ATie/burgundy.jpg", ["formal"]),
]
LEGACY_HOST = "https://pub-46371bda6faf4910b74631159fc2dfd4.r2.dev/kct-prodcuts"
SIZES = ["38R", "40R", "42R", "44R"]


def _stable_uuid(name: str) -> UUID:
    return uuid5(NAMESPACE_DNS, f"storefront-seed-{name}")


def build_seed_rows() -> Dict[str, List[dict]]:
    rows: Dict[str, List[dict]] = {"products": [], "product_images": [], "product_variants": []}
    for name, category, price, color, image_path, tags in DEMO_PRODUCTS:
        slug = product_slug(name)
        product_id = str(_stable_uuid(slug))
        rows["products"].append({
            "id": product_id,
            "name": name,
            "slug": slug,
            "description": f"{name} from the demo collection.",
            "category": category,
            "base_price": price,
            "status": "active",
            "tags": tags,
            "trending": "trending" in tags,
        })
        if image_path:
            rows["product_images"].append({
                "id": str(_stable_uuid(f"{slug}-image-0")),
                "product_id": product_id,
                "url": f"{LEGACY_HOST}/{image_path}",
                "position": 0,
                "is_primary": True,
            })
        for size in SIZES:
            rows["product_variants"].append({
                "id": str(_stable_uuid(f"{slug}-{size}")),
                "product_id": product_id,
                "sku": f"{slug}-{size}".upper(),
                "size": size,
                "color": color,
                "price": price,
                "inventory_count": 10,
                "status": "active",
            })
    return rows


def seed(client=None):
    client = client or get_supabase()
    rows = build_seed_rows()
    table = get_settings().products_table

    # Products first; images and variants FK to products.id
    client.table(table).upsert(rows["products"], on_conflict="id").execute()
    client.table("product_images").upsert(rows["product_images"], on_conflict="id").execute()
    client.table("product_variants").upsert(rows["product_variants"], on_conflict="id").execute()

    print(f"Seeded {len(rows['products'])} products, {len(rows['product_variants'])} variants")
    return rows


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo catalog rows into Supabase tables.")
    parser.parse_args()
    try:
        seed()
    except Exception as exc:
        print(
            "Seed failed:",
            exc,
            "\nCommon fixes:",
            "\n- Ensure .env has real SUPABASE_URL and SUPABASE_SERVICE_KEY (not placeholders)."
            "\n- Verify the products, product_images and product_variants tables exist.",
            file=sys.stderr,
        )
        sys.exit(1)

#!/usr/bin/env python3
"""
Seed script: registers sellers and creates listings through the API (no direct DB).
Run with the API up:
  python scripts/seed_data.py
  python scripts/seed_data.py --users 10 --listings-per-user 8 --base-url http://localhost:4000/api
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:4000/api"

CATALOG = {
    "computers": ["ThinkPad T480", "MacBook Air 2017", "Dell OptiPlex 7050", "HP EliteBook 840"],
    "phones": ["iPhone 8", "Pixel 4a", "Galaxy S9", "Moto G7"],
    "tablets": ["iPad Air 2", "Galaxy Tab A", "Fire HD 10"],
    "monitors": ["Dell U2415", "LG 27UL500", "BenQ GW2480"],
    "peripherals": ["Logitech MX Master", "Mechanical keyboard", "USB webcam", "Wireless headset"],
    "components": ["8GB DDR4 stick", "GTX 1060", "500GB SATA SSD", "Intel i5-6500"],
    "other": ["Box of USB cables", "Old router", "Laptop chargers (assorted)"],
}
CONDITIONS = ["new", "like-new", "good", "fair", "for-parts"]
DESCRIPTIONS = [
    "Works fine, some scratches on the casing.",
    "Wiped and reset, ready for a new home.",
    "Battery holds about half its original charge.",
    "Untested, selling for parts or repair.",
    "Barely used, original box included.",
]


def random_listing() -> dict:
    category = random.choice(list(CATALOG))
    return {
        "title": random.choice(CATALOG[category]),
        "description": random.choice(DESCRIPTIONS),
        "category": category,
        "condition": random.choice(CONDITIONS),
        "price": random.choice([0, 5, 15, 40, 75, 120, 250, 400]),
        "images": [],
    }


def main():
    ap = argparse.ArgumentParser(description="Seed users and listings via API")
    ap.add_argument("--users", type=int, default=5, help="Number of sellers to create")
    ap.add_argument("--listings-per-user", type=int, default=6, help="Listings per seller")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        for i in range(args.users):
            email = f"seller{i + 1}@example.com"
            password = "password123"
            r = client.post("/auth/register", json={"email": email, "password": password, "name": f"Seller {i + 1}"})
            if r.status_code not in (201, 409):
                errors.append(f"Register {email}: {r.status_code} {r.text[:80]}")
                continue

            r = client.post("/auth/login", json={"email": email, "password": password})
            if r.status_code != 200:
                errors.append(f"Login {email}: {r.status_code}")
                continue
            headers = {"Authorization": f"Bearer {r.json()['access_token']}"}

            for _ in range(args.listings_per_user):
                r = client.post("/listings", headers=headers, json=random_listing())
                if r.status_code == 201:
                    created += 1
                else:
                    errors.append(f"Listing for {email}: {r.status_code} {r.text[:80]}")
            print(f"  {email}: total listings so far {created}")

    print(f"\nDone. Listings created: {created}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)


if __name__ == "__main__":
    main()

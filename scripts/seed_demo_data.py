#!/usr/bin/env python3
"""
Seed a demo donor and a few donations around San Francisco
Usage: python scripts/seed_demo_data.py
"""
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import get_settings
from app.core.context import AppContext
from app.core.exceptions import ValidationError
from app.database.database import init_db
from app.models.donation import DonationCategory

DEMO_EMAIL = "donor@helpinghand.app"
DEMO_PASSWORD = "helping123"

DEMO_DONATIONS = [
    {
        "category": DonationCategory.FOOD,
        "title": "Fresh bread and pastries",
        "description": "End-of-day bakery surplus",
        "latitude": 37.7849,
        "longitude": -122.4094,
        "availability_start": "5:00 PM",
        "availability_end": "8:00 PM",
    },
    {
        "category": DonationCategory.CLOTHES,
        "title": "Winter jackets (kids)",
        "description": "Three jackets, sizes 6-10",
        "latitude": 37.7694,
        "longitude": -122.4862,
        "availability_start": "9:00 AM",
        "availability_end": "12:00 PM",
    },
]

def seed_demo_data():
    """Create the demo donor (if missing) and its donations."""
    context = AppContext.from_settings(get_settings())
    init_db(context.engine)
    db = context.session_factory()

    try:
        try:
            donor = context.users.signup(db, DEMO_EMAIL, "Demo Donor", DEMO_PASSWORD)
            print(f"✅ Demo donor created: {DEMO_EMAIL} / {DEMO_PASSWORD}")
        except ValidationError:
            donor = context.users.get_by_email(db, DEMO_EMAIL)
            print("✅ Demo donor already exists")

        if context.donations.list_by_owner(db, donor.id):
            print("✅ Demo donations already seeded")
            return

        for data in DEMO_DONATIONS:
            donation = context.donations.create(db, donor.id, data)
            print(f"📦 {donation.title} ({donation.category.value})")

    except Exception as e:
        print(f"❌ Error seeding demo data: {e}")
        db.rollback()
        raise
    finally:
        db.close()
        context.dispose()

if __name__ == "__main__":
    seed_demo_data()

#!/usr/bin/env python3
"""
Create check-in indexes and range validators.

This script:
1. Creates the unique (user_id, local_date) / (user_id, day) indexes
2. Attaches the 1-10 range validators to daily_entries and checkin
3. With --legacy-daily-scale, bounds daily_entries to 1-5 instead, which
   reproduces databases that were never migrated off the old schema

Usage:
    python scripts/init_checkin_collections.py [--legacy-daily-scale]

Environment variables required:
    MONGODB_URI - MongoDB connection string
    MONGODB_DATABASE - Database name (default: checkins)
    ADMIN_MONGODB_URI - Administrative connection string (default: MONGODB_URI)
"""

import argparse
import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv

from app.checkin.indexes import ensure_checkin_collections
from common.database import mask_uri

# Load environment variables
load_dotenv()


async def init_collections(legacy_daily_scale: bool) -> None:
    """Apply indexes and validators to both databases."""
    mongodb_uri = os.getenv("MONGODB_URI")
    database_name = os.getenv("MONGODB_DATABASE", "checkins")
    admin_uri = os.getenv("ADMIN_MONGODB_URI") or mongodb_uri
    admin_database_name = os.getenv("ADMIN_MONGODB_DATABASE") or database_name

    if not mongodb_uri:
        print("ERROR: MONGODB_URI environment variable not set")
        sys.exit(1)

    print(f"Connecting to database: {database_name} ({mask_uri(mongodb_uri)})")
    user_client = AsyncIOMotorClient(mongodb_uri)
    admin_client = AsyncIOMotorClient(admin_uri)

    try:
        daily_max = 5 if legacy_daily_scale else 10
        await ensure_checkin_collections(
            user_client[database_name],
            admin_client[admin_database_name],
            daily_entry_max=daily_max,
        )
        print(f"Collections ready: daily_entries range 1-{daily_max}, checkin range 1-10")
    finally:
        user_client.close()
        admin_client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--legacy-daily-scale",
        action="store_true",
        help="bound daily_entries metrics to 1-5",
    )
    args = parser.parse_args()
    asyncio.run(init_collections(args.legacy_daily_scale))

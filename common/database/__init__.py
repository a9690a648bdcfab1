"""
Database module - Generic async MongoDB connection using Motor.

Provides reusable MongoDB connectivity. The check-in service holds two
instances: one for the user-scoped credential and one for the
administrative credential.

Usage:
    from common.database import MongoDB

    db = MongoDB()
    await db.connect(uri, database_name)
    daily_entries = db.db["daily_entries"]
"""

from common.database.mongodb import MongoDB, mask_uri

__all__ = ["MongoDB", "mask_uri"]

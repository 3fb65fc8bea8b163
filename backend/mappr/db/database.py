"""
MongoDB Database Configuration and Connection
"""

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.server_api import ServerApi

from mappr.core.config import DATABASE_NAME, MONGODB_URI

# Global database client
_client = None
_database = None


def get_database():
    """
    Get MongoDB database instance
    Creates a new connection if one doesn't exist
    """
    global _client, _database

    if _database is None:
        if not MONGODB_URI:
            raise ValueError("MONGODB_URI environment variable is not set")

        _client = AsyncIOMotorClient(MONGODB_URI, server_api=ServerApi("1"))
        _database = _client[DATABASE_NAME]

        print(f"✅ Connected to MongoDB database: {DATABASE_NAME}")

    return _database


async def init_indexes():
    """
    Initialize database indexes for the trip-scoped collections
    """
    try:
        trips_collection = get_trips_collection()
        collaborators_collection = get_collaborators_collection()
        pins_collection = get_pins_collection()
        categories_collection = get_categories_collection()
        list_items_collection = get_list_items_collection()

        await trips_collection.create_index("created_by")
        await trips_collection.create_index([("created_at", -1)])

        await collaborators_collection.create_index(
            [("trip_id", 1), ("user_id", 1)], unique=True, name="uniq_trip_user"
        )
        await collaborators_collection.create_index("user_id")

        await pins_collection.create_index([("trip_id", 1), ("created_at", -1)], name="trip_recent")
        await pins_collection.create_index([("trip_id", 1), ("day", 1)], name="trip_day")
        await pins_collection.create_index("category_id")

        await categories_collection.create_index([("trip_id", 1), ("created_at", 1)])

        await list_items_collection.create_index([("trip_id", 1), ("list_type", 1)])

        print("✅ Database indexes created successfully")
    except Exception as e:
        print(f"⚠️  Index creation warning: {e}")


async def close_database_connection():
    """
    Close the MongoDB connection
    Call this when shutting down the application
    """
    global _client, _database

    if _client:
        _client.close()
        _client = None
        _database = None
        print("🔌 Closed MongoDB connection")


async def test_connection():
    """
    Ping the MongoDB server; returns False instead of raising
    """
    try:
        db = get_database()
        await db.command("ping")
        print("✅ MongoDB connection successful!")
        return True
    except Exception as e:
        print(f"❌ MongoDB connection failed: {e}")
        return False


def get_trips_collection():
    return get_database().trips


def get_collaborators_collection():
    return get_database().collaborators


def get_pins_collection():
    return get_database().pins


def get_categories_collection():
    return get_database().categories


def get_list_items_collection():
    """
    Get the list_items collection (stores / things to do / things to see)
    """
    return get_database().list_items

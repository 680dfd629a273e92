"""
MongoDB Connection Utility

MongoDB is the only store. Collections:
- users: student, company and admin accounts with their profiles
- announcements: job/internship postings
- applications: student applications to announcements
- notifications: per-user inbox
- companyReviews: student reviews of past employers

Routes receive the database through the `get_mongo_db` dependency so tests
can override it with an in-memory database.
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from internstud.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None


def get_mongo_client(settings: Settings = None) -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        settings = settings or get_settings()
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/things")
        def list_things(db: Database = Depends(get_mongo_db)):
            ...
    """
    settings = get_settings()
    return get_mongo_client(settings)[settings.mongodb_db]


def get_collection(db: Database, name: str) -> Collection:
    """Get a collection by its logical name (see COLLECTIONS)."""
    return db[COLLECTIONS[name]]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "announcements": "announcements",
    "applications": "applications",
    "notifications": "notifications",
    "reviews": "companyReviews"
}


def init_mongo_indexes(db: Database):
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db[COLLECTIONS["users"]].create_index("email", unique=True)
    db[COLLECTIONS["users"]].create_index([("user_type", ASCENDING), ("status", ASCENDING)])

    db[COLLECTIONS["announcements"]].create_index([("status", ASCENDING), ("created_at", DESCENDING)])
    db[COLLECTIONS["announcements"]].create_index("company_id")

    # One application per student and announcement
    db[COLLECTIONS["applications"]].create_index([
        ("announcement_id", ASCENDING),
        ("student_id", ASCENDING)
    ], unique=True)
    db[COLLECTIONS["applications"]].create_index("company_id")

    db[COLLECTIONS["notifications"]].create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    db[COLLECTIONS["reviews"]].create_index("company_id")

    logger.info("MongoDB indexes created successfully")

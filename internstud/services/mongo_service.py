"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. users          - Student/company/admin accounts and their profiles
2. announcements  - Job and internship postings (pending until an admin approves)
3. applications   - Student applications to announcements
4. notifications  - Per-user inbox (application received, approved, rejected)
5. companyReviews - Student reviews of companies they worked for

Every service takes the Database handle explicitly so routes can inject it
and tests can pass an in-memory database.
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from internstud.db.mongodb import get_collection


# ============================================================
# HELPERS
# ============================================================

def serialize_doc(doc: dict) -> Optional[dict]:
    """Convert MongoDB document to JSON-serializable dict (`_id` -> `id`)."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def serialize_docs(docs) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse an id from a URL or body; None when it is not a valid ObjectId."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    """MongoDB stores UTC without tzinfo; normalize aware datetimes the same way."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def full_name(user: Optional[dict], default: str = "") -> str:
    if not user:
        return default
    name = f"{user.get('first_name') or ''} {user.get('last_name') or ''}".strip()
    return name or default


# ============================================================
# USERS COLLECTION
# ============================================================

class UserService:
    """
    Accounts and profiles. Students and companies share one collection,
    told apart by `user_type`.
    """

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "users")

    def create(self, data: dict) -> str:
        doc = {
            **data,
            "is_admin": False,
            "status": "not_submitted",
            "profile_completed": False,
            "created_at": datetime.utcnow()
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def get_by_id(self, user_id: str) -> Optional[dict]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def get_by_email(self, email: str) -> Optional[dict]:
        return serialize_doc(self.collection.find_one({"email": email.lower()}))

    def update_profile(self, user_id: str, fields: dict) -> bool:
        result = self.collection.update_one(
            {"_id": to_object_id(user_id)},
            {"$set": {**fields, "updated_at": datetime.utcnow()}}
        )
        return result.matched_count > 0

    def list_companies(self, status: str) -> List[dict]:
        cursor = self.collection.find(
            {"user_type": "company", "status": status},
            {"password_hash": 0}
        ).sort("created_at", DESCENDING)
        return serialize_docs(cursor)

    def set_company_status(self, user_id: str, status: str) -> Optional[dict]:
        """Approve or reject a company account. Approval also marks the profile complete."""
        oid = to_object_id(user_id)
        if oid is None:
            return None
        fields = {"status": status, "updated_at": datetime.utcnow()}
        if status == "approved":
            fields["profile_completed"] = True
        doc = self.collection.find_one_and_update(
            {"_id": oid, "user_type": "company"},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# ANNOUNCEMENTS COLLECTION
# ============================================================

class AnnouncementService:
    """
    Job postings. New postings start `pending` and become visible to
    students only after an admin approves them.
    """

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "announcements")
        self.applications: Collection = get_collection(db, "applications")

    def create(self, company: dict, data: dict) -> dict:
        doc = {
            **data,
            "company_id": company["id"],
            "company_name": company.get("company_name") or "",
            "status": "pending",
            "created_at": datetime.utcnow(),
            "updated_at": None
        }
        self.collection.insert_one(doc)
        return serialize_doc(doc)

    def get(self, announcement_id: str) -> Optional[dict]:
        oid = to_object_id(announcement_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def list_approved(self, company_id: str = None, search: str = None) -> List[dict]:
        query: Dict[str, Any] = {"status": "approved"}
        if company_id:
            query["company_id"] = company_id
        if search:
            query["title"] = {"$regex": search, "$options": "i"}
        return serialize_docs(self.collection.find(query).sort("created_at", DESCENDING))

    def list_by_company(self, company_id: str) -> List[dict]:
        return serialize_docs(
            self.collection.find({"company_id": company_id}).sort("created_at", DESCENDING)
        )

    def list_pending(self) -> List[dict]:
        return serialize_docs(self.collection.find({"status": "pending"}).sort("created_at", DESCENDING))

    def update(self, announcement_id: str, company_id: str, fields: dict) -> bool:
        """Update an announcement owned by `company_id`. Returns False if not found."""
        oid = to_object_id(announcement_id)
        if oid is None:
            return False
        result = self.collection.update_one(
            {"_id": oid, "company_id": company_id},
            {"$set": {**fields, "updated_at": datetime.utcnow()}}
        )
        return result.matched_count > 0

    def delete(self, announcement_id: str, company_id: str) -> bool:
        """Delete an owned announcement. Cascades to its applications."""
        oid = to_object_id(announcement_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid, "company_id": company_id})
        if result.deleted_count == 0:
            return False
        self.applications.delete_many({"announcement_id": announcement_id})
        return True

    def set_status(self, announcement_id: str, status: str) -> Optional[dict]:
        oid = to_object_id(announcement_id)
        if oid is None:
            return None
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {"status": status, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationService:
    """
    Student applications. One application per student and announcement.
    """

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "applications")

    def exists(self, announcement_id: str, student_id: str) -> bool:
        return self.collection.find_one(
            {"announcement_id": announcement_id, "student_id": student_id}
        ) is not None

    def create(self, announcement: dict, student: dict, message: str = None) -> dict:
        doc = {
            "announcement_id": announcement["id"],
            "announcement_title": announcement["title"],
            "company_id": announcement["company_id"],
            "student_id": student["id"],
            "student_name": full_name(student, default=student.get("email", "")),
            "message": message,
            "status": "pending",
            "created_at": datetime.utcnow(),
            "updated_at": None
        }
        self.collection.insert_one(doc)
        return serialize_doc(doc)

    def get(self, application_id: str) -> Optional[dict]:
        oid = to_object_id(application_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def list_by_student(self, student_id: str) -> List[dict]:
        return serialize_docs(
            self.collection.find({"student_id": student_id}).sort("created_at", DESCENDING)
        )

    def list_by_company(self, company_id: str, announcement_id: str = None, status: str = None) -> List[dict]:
        query: Dict[str, Any] = {"company_id": company_id}
        if announcement_id:
            query["announcement_id"] = announcement_id
        if status:
            query["status"] = status
        return serialize_docs(self.collection.find(query).sort("created_at", DESCENDING))

    def set_status(self, application_id: str, status: str) -> Optional[dict]:
        doc = self.collection.find_one_and_update(
            {"_id": to_object_id(application_id)},
            {"$set": {"status": status, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)


# ============================================================
# NOTIFICATIONS COLLECTION
# ============================================================

class NotificationService:
    """
    Per-user notifications. Every query is scoped by user_id so one user
    can never read or modify another user's inbox.
    """

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "notifications")

    def notify(self, user_id: str, type: str, message: str, data: dict = None) -> str:
        doc = {
            "user_id": user_id,
            "type": type,
            "message": message,
            "read": False,
            "data": data or {},
            "created_at": datetime.utcnow()
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def list_for_user(self, user_id: str, unread_only: bool = False, limit: int = 50) -> List[dict]:
        query: Dict[str, Any] = {"user_id": user_id}
        if unread_only:
            query["read"] = False
        cursor = self.collection.find(query).sort("created_at", DESCENDING).limit(limit)
        return serialize_docs(cursor)

    def mark_read(self, notification_id: str, user_id: str) -> bool:
        oid = to_object_id(notification_id)
        if oid is None:
            return False
        result = self.collection.update_one({"_id": oid, "user_id": user_id}, {"$set": {"read": True}})
        return result.matched_count > 0

    def mark_all_read(self, user_id: str) -> int:
        result = self.collection.update_many({"user_id": user_id, "read": False}, {"$set": {"read": True}})
        return result.modified_count

    def delete(self, notification_id: str, user_id: str) -> bool:
        oid = to_object_id(notification_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid, "user_id": user_id}).deleted_count > 0

    def delete_all(self, user_id: str) -> int:
        return self.collection.delete_many({"user_id": user_id}).deleted_count


# ============================================================
# COMPANY REVIEWS COLLECTION
# ============================================================

class CompanyReviewService:
    """
    Reviews students leave for companies they have worked for.
    """

    def __init__(self, db: Database):
        self.collection: Collection = get_collection(db, "reviews")
        self.users = UserService(db)

    def eligible_companies(self, student: dict, now: datetime = None) -> List[dict]:
        """
        Companies the student may review: experience entries that ended in the
        past and point at an existing company account. Unique by company id;
        when several entries match the same company the last one supplies
        the job title.
        """
        now = now or datetime.utcnow()
        eligible: Dict[str, dict] = {}

        for exp in student.get("experience") or []:
            end_date = utc_naive(exp.get("end_date"))
            company_id = exp.get("company_id")
            if not end_date or end_date >= now or not company_id:
                continue

            company = self.users.get_by_id(company_id)
            if not company or company.get("user_type") != "company":
                continue

            eligible[company_id] = {
                "id": company_id,
                "company_name": company.get("company_name") or "Unknown Company",
                "job_title": exp.get("title") or "Past Role"
            }

        return list(eligible.values())

    def submit(self, student_id: str, company_id: str, rating: float, comment: str) -> str:
        student = self.users.get_by_id(student_id)
        doc = {
            "company_id": company_id,
            "student_id": student_id,
            "student_name": full_name(student, default="Anonim"),
            "rating": rating,
            "comment": comment,
            "created_at": datetime.utcnow()
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def list_for_company(self, company_id: str) -> List[dict]:
        return serialize_docs(
            self.collection.find({"company_id": company_id}).sort("created_at", DESCENDING)
        )

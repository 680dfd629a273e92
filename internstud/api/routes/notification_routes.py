"""
Notification Routes

GET /notifications - List own notifications, newest first
PUT /notifications/read-all - Mark all as read
PUT /notifications/{notification_id}/read - Mark one as read
DELETE /notifications - Delete all
DELETE /notifications/{notification_id} - Delete one
"""

from typing import List

from fastapi import APIRouter, HTTPException, Depends, Query
from pymongo.database import Database

from internstud.db.mongodb import get_mongo_db
from internstud.core.auth import get_current_user
from internstud.services.mongo_service import NotificationService
from internstud.schemas.schemas import NotificationResponse, MessageResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    user: dict = Depends(get_current_user),
    db: Database = Depends(get_mongo_db)
):
    """List the current user's notifications. Clients poll this endpoint."""
    results = NotificationService(db).list_for_user(user["id"], unread_only=unread_only, limit=limit)
    return [NotificationResponse(**r) for r in results]


# Declared before the /{notification_id} routes so "read-all" is not taken for an id
@router.put("/read-all", response_model=MessageResponse)
async def mark_all_read(user: dict = Depends(get_current_user), db: Database = Depends(get_mongo_db)):
    count = NotificationService(db).mark_all_read(user["id"])
    return MessageResponse(message=f"Marked {count} notifications as read")


@router.put("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
    notification_id: str,
    user: dict = Depends(get_current_user),
    db: Database = Depends(get_mongo_db)
):
    if not NotificationService(db).mark_read(notification_id, user["id"]):
        raise HTTPException(status_code=404, detail="Notification not found")
    return MessageResponse(message="Marked as read")


@router.delete("", response_model=MessageResponse)
async def delete_all(user: dict = Depends(get_current_user), db: Database = Depends(get_mongo_db)):
    count = NotificationService(db).delete_all(user["id"])
    return MessageResponse(message=f"Deleted {count} notifications")


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: str,
    user: dict = Depends(get_current_user),
    db: Database = Depends(get_mongo_db)
):
    if not NotificationService(db).delete(notification_id, user["id"]):
        raise HTTPException(status_code=404, detail="Notification not found")
    return MessageResponse(message="Notification deleted")

"""
Admin routes for managing case studies, contact messages and site settings.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Query, Response

from casefolio.middleware.auth import require_admin
from casefolio.models.case_study import CaseStudy
from casefolio.models.contact import ContactMessage
from casefolio.models.setting import SiteSetting
from casefolio.schemas.case_study import CaseStudyCreate, CaseStudyUpdate
from casefolio.schemas.setting import SettingSave
from casefolio.schemas.validation import validate_payload
from casefolio.services.email_service import EmailService, get_email_service
from casefolio.services.storage import DatabaseStorage, NotFoundError, get_storage

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])
logger = logging.getLogger("casefolio.admin")


# Case studies management


@router.get("/case-studies")
async def admin_list_case_studies(
    limit: Optional[int] = Query(None, ge=1),
    featured: Optional[bool] = Query(None),
    storage: DatabaseStorage = Depends(get_storage),
) -> List[CaseStudy]:
    try:
        return await storage.get_case_studies(limit=limit, featured=featured)
    except Exception as e:
        logger.error(f"Error fetching case studies: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch case studies")


@router.get("/case-studies/{case_study_id}")
async def admin_get_case_study(case_study_id: int, storage: DatabaseStorage = Depends(get_storage)) -> CaseStudy:
    try:
        case_study = await storage.get_case_study(case_study_id)
    except Exception as e:
        logger.error(f"Error fetching case study {case_study_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch case study")

    if case_study is None:
        raise HTTPException(status_code=404, detail="Case study not found")

    return case_study


@router.post("/case-studies", status_code=201)
async def create_case_study(
    background_tasks: BackgroundTasks,
    payload: Dict[str, Any] = Body(...),
    storage: DatabaseStorage = Depends(get_storage),
    email_service: EmailService = Depends(get_email_service),
) -> CaseStudy:
    """
    Create a case study and queue the owner notification.

    The notification runs after the response is sent and cannot fail the request.
    """
    case_study_data = validate_payload(CaseStudyCreate, payload, "Invalid case study data")

    try:
        created = await storage.create_case_study(case_study_data)
    except Exception as e:
        logger.error(f"Error creating case study: {e}")
        raise HTTPException(status_code=500, detail="Failed to create case study")

    background_tasks.add_task(
        email_service.send_new_case_study_notification, created.title, created.slug, created.client_name
    )
    return created


@router.put("/case-studies/{case_study_id}")
async def update_case_study(
    case_study_id: int,
    payload: Dict[str, Any] = Body(...),
    storage: DatabaseStorage = Depends(get_storage),
) -> CaseStudy:
    changes = validate_payload(CaseStudyUpdate, payload, "Invalid case study data")

    try:
        return await storage.update_case_study(case_study_id, changes)
    except NotFoundError:
        logger.info(f"Update requested for missing case study {case_study_id}")
        raise HTTPException(status_code=404, detail="Case study not found")
    except Exception as e:
        logger.error(f"Error updating case study {case_study_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update case study")


@router.delete("/case-studies/{case_study_id}", status_code=204)
async def delete_case_study(case_study_id: int, storage: DatabaseStorage = Depends(get_storage)) -> Response:
    try:
        deleted = await storage.delete_case_study(case_study_id)
    except Exception as e:
        logger.error(f"Error deleting case study {case_study_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete case study")

    if not deleted:
        raise HTTPException(status_code=404, detail="Case study not found")

    logger.info(f"Deleted case study {case_study_id}")
    return Response(status_code=204)


# Contact messages management


@router.get("/messages")
async def list_messages(
    unread: bool = Query(False),
    limit: Optional[int] = Query(None, ge=1),
    storage: DatabaseStorage = Depends(get_storage),
) -> List[ContactMessage]:
    try:
        return await storage.get_contact_messages(limit=limit, unread_only=unread)
    except Exception as e:
        logger.error(f"Error fetching messages: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch messages")


@router.get("/messages/{message_id}")
async def get_message(message_id: int, storage: DatabaseStorage = Depends(get_storage)) -> ContactMessage:
    try:
        message = await storage.get_contact_message(message_id)
    except Exception as e:
        logger.error(f"Error fetching message {message_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch message")

    if message is None:
        raise HTTPException(status_code=404, detail="Message not found")

    return message


@router.put("/messages/{message_id}/read")
async def mark_message_read(message_id: int, storage: DatabaseStorage = Depends(get_storage)) -> Dict[str, Any]:
    try:
        marked = await storage.mark_message_as_read(message_id)
    except Exception as e:
        logger.error(f"Error marking message {message_id} as read: {e}")
        raise HTTPException(status_code=500, detail="Failed to mark message as read")

    if not marked:
        raise HTTPException(status_code=404, detail="Message not found")

    return {"success": True}


@router.delete("/messages/{message_id}", status_code=204)
async def delete_message(message_id: int, storage: DatabaseStorage = Depends(get_storage)) -> Response:
    try:
        deleted = await storage.delete_contact_message(message_id)
    except Exception as e:
        logger.error(f"Error deleting message {message_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete message")

    if not deleted:
        raise HTTPException(status_code=404, detail="Message not found")

    return Response(status_code=204)


# Site settings management


@router.get("/settings")
async def list_settings(storage: DatabaseStorage = Depends(get_storage)) -> List[SiteSetting]:
    try:
        return await storage.get_all_settings()
    except Exception as e:
        logger.error(f"Error fetching settings: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch settings")


@router.get("/settings/{category}")
async def list_settings_by_category(category: str, storage: DatabaseStorage = Depends(get_storage)) -> List[SiteSetting]:
    try:
        return await storage.get_settings_by_category(category)
    except Exception as e:
        logger.error(f"Error fetching settings for category {category}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch settings")


@router.put("/settings/{key}")
async def save_setting(
    key: str,
    payload: Dict[str, Any] = Body(...),
    storage: DatabaseStorage = Depends(get_storage),
) -> SiteSetting:
    """
    Create or overwrite the setting stored under ``key``.

    The key comes from the path; ``type`` defaults to text and
    ``description`` to an empty string.
    """
    setting = validate_payload(SettingSave, {**payload, "key": key}, "Invalid setting data")

    try:
        return await storage.save_setting(setting)
    except Exception as e:
        logger.error(f"Error saving setting {key}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save setting")

"""
Public contact form route.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from casefolio.schemas.contact import ContactMessageCreate
from casefolio.schemas.validation import validate_payload
from casefolio.services.email_service import EmailService, get_email_service
from casefolio.services.storage import DatabaseStorage, get_storage

router = APIRouter(prefix="/api", tags=["contact"])
logger = logging.getLogger("casefolio.contact")


@router.post("/contact", status_code=201)
async def submit_contact_form(
    payload: Dict[str, Any] = Body(...),
    storage: DatabaseStorage = Depends(get_storage),
    email_service: EmailService = Depends(get_email_service),
) -> Dict[str, Any]:
    """
    Store a contact form submission and notify the site owner.

    The message is stored before the email goes out, so a failed
    notification still answers 201.
    """
    contact = validate_payload(ContactMessageCreate, payload, "Invalid form data")

    try:
        saved_message = await storage.create_contact_message(contact)
    except Exception as e:
        logger.error(f"Contact form error: {e}")
        raise HTTPException(status_code=500, detail="An error occurred while processing your request.")

    email_sent = await run_in_threadpool(
        email_service.send_contact_form_email, contact.name, contact.email, contact.subject, contact.message
    )

    if email_sent:
        message = "Your message has been sent!"
    else:
        message = "Your message was received but there was an issue sending the email notification."

    return {"success": True, "message": message, "data": saved_message}

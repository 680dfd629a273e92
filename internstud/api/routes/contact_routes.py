"""
Contact Routes

POST /contact - Send a contact form message to the site mailboxes
"""

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import JSONResponse
from email_validator import EmailNotValidError, validate_email

from internstud.services.email_service import ContactMailer, MailDeliveryError, get_mailer
from internstud.schemas.schemas import ContactRequest, MessageResponse

router = APIRouter(tags=["Contact"])


def validate_contact_form(request: ContactRequest) -> list:
    """Field errors in the same shape the web form renders inline."""
    errors = []
    if not request.name.strip():
        errors.append({"field": "name", "msg": "Numele este obligatoriu"})
    try:
        validate_email(request.email, check_deliverability=False)
    except EmailNotValidError:
        errors.append({"field": "email", "msg": "Adresa de email nu este validă"})
    if not request.message.strip():
        errors.append({"field": "message", "msg": "Mesajul este obligatoriu"})
    return errors


@router.post("/contact", response_model=MessageResponse)
def contact(request: ContactRequest, mailer: ContactMailer = Depends(get_mailer)):
    """Validate and forward a contact message by email."""
    errors = validate_contact_form(request)
    if errors:
        return JSONResponse(status_code=400, content={"errors": errors})

    try:
        mailer.send_contact(request.name.strip(), request.email.strip(), request.message.strip())
    except MailDeliveryError:
        raise HTTPException(status_code=500, detail="Eroare la trimiterea email-ului")

    return MessageResponse(message="Email trimis cu succes")

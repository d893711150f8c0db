"""
Twilio SMS webhook — answers inbound texts with the same replies as the widget.
"""

from fastapi import APIRouter, HTTPException, Request, Response
from twilio.request_validator import RequestValidator
from twilio.twiml.messaging_response import MessagingResponse
from loguru import logger

from timesafe.config import settings
from timesafe.services.responder import respond

router = APIRouter(prefix="/api/twilio", tags=["twilio"])


def _verify_signature(request: Request, params: dict) -> None:
    """Reject requests not signed by Twilio. Skipped when no auth token is configured."""
    if not settings.TWILIO_AUTH_TOKEN:
        return
    validator = RequestValidator(settings.TWILIO_AUTH_TOKEN)
    signature = request.headers.get("X-Twilio-Signature", "")
    if not validator.validate(str(request.url), params, signature):
        logger.warning(f"Rejected Twilio webhook with bad signature from {request.client}")
        raise HTTPException(status_code=403, detail="Invalid Twilio signature")


@router.post("/sms")
async def handle_incoming_sms(request: Request):
    """Reply to an inbound SMS with TwiML."""
    form_data = await request.form()
    params = dict(form_data)
    _verify_signature(request, params)

    body = params.get("Body", "")
    sender = params.get("From", "unknown")
    reply = respond(body)

    response = MessagingResponse()
    response.message(reply)

    logger.info(f"Twilio SMS from {sender}: '{body[:40]}'")
    return Response(content=str(response), media_type="application/xml")


@router.post("/status-callback")
async def status_callback(request: Request):
    """Handle Twilio outbound message status updates."""
    form_data = await request.form()
    params = dict(form_data)
    _verify_signature(request, params)

    message_status = params.get("MessageStatus", "unknown")
    logger.info(f"Twilio message {params.get('MessageSid', '-')} status: {message_status}")
    return {"status": "received"}

"""
Caregiver SMS dispatch.
"""
from fastapi import APIRouter, Depends

from checkin.dependencies import get_sms_sender
from checkin.models.conversation import SendSmsRequest, SendSmsResponse
from checkin.services import SmsSender

router = APIRouter(tags=["SMS"])


@router.post("/send-sms", response_model=SendSmsResponse)
async def send_sms(
    request: SendSmsRequest,
    sender: SmsSender = Depends(get_sms_sender),
):
    """Send a check-in summary to the caregiver's phone."""
    sid = await sender.send_summary(request.to, request.summary, child_name=request.childName)
    return SendSmsResponse(sent=True, sid=sid)

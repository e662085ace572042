"""reply-message: answer a contact-form message by email."""

from __future__ import annotations

from fastapi import APIRouter

from lingvoblog.api.deps import SettingsDep
from lingvoblog.api.schemas import ReplyRequest, ReplyResponse
from lingvoblog.mailer import ReplyMailer

router = APIRouter(tags=["messages"])


@router.post("/reply-message", response_model=ReplyResponse)
def reply_message(reply: ReplyRequest, settings: SettingsDep) -> ReplyResponse:
    ReplyMailer(settings).send_reply(
        to=reply.to,
        to_name=reply.to_name,
        subject=reply.subject,
        message=reply.message,
        original_message=reply.original_message,
    )
    return ReplyResponse()

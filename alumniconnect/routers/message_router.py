# alumniconnect/routers/message_router.py
from fastapi import APIRouter, Depends, Path
from typing import List

from ..services import MessagingService
from ..dependencies.service_dependencies import get_messaging_service
from ..schemas import MessageCreate, MessageResponse
from ..exceptions import BusinessLogicError, to_http_exception

router = APIRouter(prefix="/api", tags=["messages"])

@router.post("/messages", response_model=MessageResponse, status_code=201)
async def send_message(
    payload: MessageCreate,
    messaging_service: MessagingService = Depends(get_messaging_service)
):
    try:
        return messaging_service.send_message(payload.conversation_id, payload.sender_id, payload.content)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/messages/{conversation_id}", response_model=List[MessageResponse])
async def list_messages(
    conversation_id: int = Path(..., description="The ID of the conversation"),
    messaging_service: MessagingService = Depends(get_messaging_service)
):
    try:
        return messaging_service.list_messages(conversation_id)
    except BusinessLogicError as e:
        raise to_http_exception(e)

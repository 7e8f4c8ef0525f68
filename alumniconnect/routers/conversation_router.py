# alumniconnect/routers/conversation_router.py
from fastapi import APIRouter, Depends, Path, Query
from typing import List

from ..services import ConversationService
from ..dependencies.service_dependencies import get_conversation_service
from ..schemas import ConversationResponse
from ..exceptions import BusinessLogicError, to_http_exception

router = APIRouter(prefix="/api", tags=["conversations"])

# Conversations are only ever created by accepting a mentorship request

@router.get("/conversations", response_model=List[ConversationResponse])
async def list_conversations(
    user_id: int = Query(..., alias="userId"),
    conversation_service: ConversationService = Depends(get_conversation_service)
):
    """List the conversations a user takes part in"""
    try:
        return conversation_service.list_for_user(user_id)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/conversations/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(
    conversation_id: int = Path(..., description="The ID of the conversation"),
    conversation_service: ConversationService = Depends(get_conversation_service)
):
    try:
        return conversation_service.get_conversation(conversation_id)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.patch("/conversations/{conversation_id}/read", response_model=ConversationResponse)
async def mark_conversation_read(
    conversation_id: int = Path(..., description="The ID of the conversation"),
    conversation_service: ConversationService = Depends(get_conversation_service)
):
    """Reset a conversation's unread counter"""
    try:
        return conversation_service.mark_read(conversation_id)
    except BusinessLogicError as e:
        raise to_http_exception(e)

# alumniconnect/routers/mentorship_router.py
from fastapi import APIRouter, Depends, Path, Query
from typing import List

from ..services import MentorshipService
from ..dependencies.service_dependencies import get_mentorship_service
from ..utils.response_enricher import ResponseEnricher
from ..schemas import MentorshipRequestCreate, MentorshipStatusUpdate, MentorshipRequestResponse
from ..exceptions import BusinessLogicError, to_http_exception

router = APIRouter(prefix="/api", tags=["mentorship"])

@router.post("/mentorships", response_model=MentorshipRequestResponse, status_code=201)
async def submit_request(
    payload: MentorshipRequestCreate,
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    """Create a pending mentorship request from a student to a mentor"""
    try:
        request = mentorship_service.submit_request(payload.student_id, payload.mentor_id, payload.message)
        return ResponseEnricher.enrich_single_request(request)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.patch("/mentorships/{request_id}", response_model=MentorshipRequestResponse)
async def transition_request(
    payload: MentorshipStatusUpdate,
    request_id: int = Path(..., description="The ID of the mentorship request"),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    """Accept or decline a pending request; accepting opens a conversation"""
    try:
        request = mentorship_service.transition_request(request_id, payload.status)
        return ResponseEnricher.enrich_single_request(request)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/mentorships", response_model=List[MentorshipRequestResponse])
async def list_requests(
    user_id: int = Query(..., alias="userId"),
    role: str = Query(..., description="'student' for sent requests, 'alumni' for received ones"),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    """List a user's requests, newest first"""
    try:
        requests = mentorship_service.list_for_user(user_id, role)
        return ResponseEnricher.enrich_requests(requests)
    except BusinessLogicError as e:
        raise to_http_exception(e)

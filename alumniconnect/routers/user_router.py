# alumniconnect/routers/user_router.py
from fastapi import APIRouter, Depends, Path, Query
from typing import List, Optional

from ..services import UserService
from ..dependencies.service_dependencies import get_user_service
from ..schemas import UserCreate, UserResponse
from ..exceptions import BusinessLogicError, to_http_exception

router = APIRouter(prefix="/api", tags=["users"])

@router.post("/users", response_model=UserResponse, status_code=201)
async def create_user(
    user_data: UserCreate,
    user_service: UserService = Depends(get_user_service)
):
    """Register a user in the directory"""
    try:
        return user_service.create_user(user_data.model_dump())
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int = Path(..., description="The ID of the user"),
    user_service: UserService = Depends(get_user_service)
):
    try:
        return user_service.get_user(user_id)
    except BusinessLogicError as e:
        raise to_http_exception(e)

@router.get("/mentors", response_model=List[UserResponse])
async def list_mentors(
    industry: Optional[str] = Query(None),
    available: bool = Query(False, description="Only mentors with open slots"),
    user_service: UserService = Depends(get_user_service)
):
    """Browse alumni mentors"""
    try:
        return user_service.list_mentors(industry=industry, available=available)
    except BusinessLogicError as e:
        raise to_http_exception(e)

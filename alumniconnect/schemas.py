from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from .models import MentorshipStatus, UserRole
from .constants import BusinessRules

class ApiModel(BaseModel):
    """camelCase on the wire for the browser client, snake_case accepted too."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
        # Length limits apply to the value that gets stored
        "str_strip_whitespace": True,
    }

# --- User directory ---
class UserCreate(ApiModel):
    username: str = Field(..., min_length=BusinessRules.MIN_USERNAME_LENGTH, max_length=BusinessRules.MAX_USERNAME_LENGTH)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$", description="Contact e-mail, stored lower-cased.")
    role: UserRole
    company: Optional[str] = None
    designation: Optional[str] = None
    industry: Optional[str] = None
    expertise: List[str] = Field(default_factory=list, description="Skills or areas of expertise.")
    availability: int = Field(0, ge=0, description="Open mentorship slots (alumni only).")

class UserResponse(ApiModel):
    id: int
    username: str
    email: str
    role: UserRole
    company: Optional[str] = None
    designation: Optional[str] = None
    industry: Optional[str] = None
    expertise: List[str] = []
    availability: int
    created_at: datetime
    updated_at: Optional[datetime] = None

# --- Mentorship requests ---
class MentorshipRequestCreate(ApiModel):
    student_id: int
    mentor_id: int
    message: Optional[str] = Field(None, max_length=BusinessRules.MAX_REQUEST_MESSAGE_LENGTH, description="Purpose of the request.")

class MentorshipStatusUpdate(ApiModel):
    # Checked by the service so an unknown value is a 400, not a schema error
    status: str = Field(..., description="Either 'accepted' or 'declined'.")

class MentorshipRequestResponse(ApiModel):
    id: int
    student_id: int
    student_name: Optional[str] = None # Populated from the user directory
    mentor_id: int
    mentor_name: Optional[str] = None # Populated from the user directory
    status: MentorshipStatus
    message: Optional[str] = None
    created_at: datetime
    updated_at: datetime

# --- Conversations and messages ---
class ParticipantResponse(ApiModel):
    user_id: int
    name: str
    role: UserRole

class ConversationResponse(ApiModel):
    id: int
    participants: List[ParticipantResponse]
    title: Optional[str] = None
    last_message: Optional[str] = None
    unread_count: int
    mentorship_request_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

class MessageCreate(ApiModel):
    conversation_id: int
    sender_id: int
    content: str = Field(..., max_length=BusinessRules.MAX_MESSAGE_LENGTH)

class MessageResponse(ApiModel):
    id: int
    conversation_id: int
    sender_id: int
    sender_name: str
    content: str
    created_at: datetime

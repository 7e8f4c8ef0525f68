# alumniconnect/utils/validation_utils.py
from typing import Iterable, Optional
from sqlalchemy.orm import Session
from ..models import User, UserRole, MentorshipRequest, MentorshipStatus, Conversation
from ..constants import ErrorMessages
from ..exceptions import ValidationError, NotFoundError, DuplicateRequestError, InvalidStatusTransitionError

class ValidationUtils:
    def __init__(self, db: Session):
        self.db = db

    def get_user_or_404(self, user_id: int, role: Optional[UserRole] = None, message: str = ErrorMessages.USER_NOT_FOUND) -> User:
        """Looks a user up by id, optionally requiring a role. A wrong role reads as not found."""
        user = self.db.get(User, user_id)
        if not user or (role is not None and user.role != role.value):
            raise NotFoundError(message)
        return user

    def get_request_or_404(self, request_id: int) -> MentorshipRequest:
        request = self.db.get(MentorshipRequest, request_id)
        if not request:
            raise NotFoundError(ErrorMessages.REQUEST_NOT_FOUND)
        return request

    def get_conversation_or_404(self, conversation_id: int) -> Conversation:
        conversation = self.db.get(Conversation, conversation_id)
        if not conversation:
            raise NotFoundError(ErrorMessages.CONVERSATION_NOT_FOUND)
        return conversation

    def check_no_pending_request(self, student_id: int, mentor_id: int):
        existing = self.db.query(MentorshipRequest).filter(
            MentorshipRequest.student_id == student_id,
            MentorshipRequest.mentor_id == mentor_id,
            MentorshipRequest.status == MentorshipStatus.PENDING.value
        ).first()

        if existing:
            raise DuplicateRequestError(ErrorMessages.DUPLICATE_PENDING_REQUEST)

    def parse_choice(self, value, allowed: Iterable, template: str):
        """Coerces a raw string into one of the allowed enum members or raises ValidationError."""
        allowed = list(allowed)
        for choice in allowed:
            if value == choice.value:
                return choice
        raise ValidationError(template.format(allowed=", ".join(choice.value for choice in allowed)))

    def validate_request_status(self, request: MentorshipRequest, expected_status: MentorshipStatus):
        if request.status != expected_status.value:
            raise InvalidStatusTransitionError(
                ErrorMessages.REQUEST_NOT_PENDING.format(current=request.status),
                current_status=request.status,
            )

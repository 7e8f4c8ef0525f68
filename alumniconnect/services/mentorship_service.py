# alumniconnect/services/mentorship_service.py
import logging
from typing import Optional
from sqlalchemy import update
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError

from ..models import MentorshipRequest, MentorshipStatus, UserRole, TERMINAL_STATUSES, utcnow
from ..constants import ErrorMessages
from ..exceptions import BusinessLogicError, ValidationError, DuplicateRequestError, InvalidStatusTransitionError
from ..utils.db_retry import retry_on_transient_error
from ..utils.validation_utils import ValidationUtils
from .conversation_service import ConversationService

logger = logging.getLogger(__name__)

LISTING_ROLES = (UserRole.STUDENT, UserRole.ALUMNI)

class MentorshipService:
    def __init__(self, db: Session):
        self.db = db
        self.validator = ValidationUtils(db)
        self.conversations = ConversationService(db)

    @retry_on_transient_error
    def submit_request(self, student_id: int, mentor_id: int, message: Optional[str] = None) -> MentorshipRequest:
        """Creates a pending mentorship request from a student to an alumni mentor"""
        if student_id == mentor_id:
            raise ValidationError(ErrorMessages.SELF_REQUEST)
        self.validator.get_user_or_404(student_id, UserRole.STUDENT, ErrorMessages.STUDENT_NOT_FOUND)
        self.validator.get_user_or_404(mentor_id, UserRole.ALUMNI, ErrorMessages.MENTOR_NOT_FOUND)
        self.validator.check_no_pending_request(student_id, mentor_id)

        now = utcnow()
        request = MentorshipRequest(
            student_id=student_id,
            mentor_id=mentor_id,
            status=MentorshipStatus.PENDING.value,
            message=message.strip() if message and message.strip() else None,
            created_at=now,
            updated_at=now,
        )
        self.db.add(request)
        try:
            self.db.commit()
        except IntegrityError as e:
            # A concurrent submission for the same pair got past the check first
            self.db.rollback()
            logger.warning(f"Pending request race for student {student_id} and mentor {mentor_id}: {e}")
            raise DuplicateRequestError(ErrorMessages.DUPLICATE_PENDING_REQUEST)
        self.db.refresh(request)
        logger.info(f"Mentorship request {request.id} submitted by student {student_id} to mentor {mentor_id}")
        return request

    @retry_on_transient_error
    def transition_request(self, request_id: int, new_status: str) -> MentorshipRequest:
        """
        Moves a pending request to accepted or declined.

        Terminal requests are never rewritten: the status change is a
        conditional UPDATE on ``status = 'pending'`` so only one of several
        racing callers can win, the others get InvalidStatusTransitionError
        naming the status that is actually stored. Accepting provisions the
        pair's conversation in the same transaction.
        """
        target = self.validator.parse_choice(new_status, TERMINAL_STATUSES, ErrorMessages.INVALID_STATUS)
        request = self.validator.get_request_or_404(request_id)
        self.validator.validate_request_status(request, MentorshipStatus.PENDING)

        result = self.db.execute(
            update(MentorshipRequest)
            .where(
                MentorshipRequest.id == request_id,
                MentorshipRequest.status == MentorshipStatus.PENDING.value,
            )
            .values(status=target.value, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            self.db.refresh(request)
            logger.warning(f"Mentorship request {request_id} changed to {request.status} by a concurrent caller")
            raise InvalidStatusTransitionError(
                ErrorMessages.REQUEST_NOT_PENDING.format(current=request.status),
                current_status=request.status,
            )

        if target == MentorshipStatus.ACCEPTED:
            try:
                self.conversations.ensure_conversation(
                    request.student_id, request.mentor_id, mentorship_request_id=request.id, commit=False
                )
            except BusinessLogicError:
                # Acceptance without its conversation must not be stored
                self.db.rollback()
                raise

        self.db.commit()
        self.db.refresh(request)
        logger.info(f"Mentorship request {request_id} {target.value}")
        return request

    @retry_on_transient_error
    def list_for_user(self, user_id: int, role: str) -> list[MentorshipRequest]:
        """Requests the user sent (student) or received (alumni), newest first"""
        parsed_role = self.validator.parse_choice(role, LISTING_ROLES, ErrorMessages.INVALID_ROLE)
        column = MentorshipRequest.student_id if parsed_role == UserRole.STUDENT else MentorshipRequest.mentor_id
        return self.db.query(MentorshipRequest).options(
            joinedload(MentorshipRequest.student),
            joinedload(MentorshipRequest.mentor),
        ).filter(column == user_id).order_by(
            MentorshipRequest.created_at.desc(), MentorshipRequest.id.desc()
        ).all()

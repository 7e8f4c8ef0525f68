# alumniconnect/services/conversation_service.py
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from ..models import Conversation, ConversationParticipant, User, participant_key, utcnow
from ..constants import ErrorMessages
from ..exceptions import ValidationError, DuplicateConversationError
from ..utils.db_retry import retry_on_transient_error
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

class ConversationService:
    def __init__(self, db: Session):
        self.db = db
        self.validator = ValidationUtils(db)

    def find_by_pair(self, user_a_id: int, user_b_id: int) -> Optional[Conversation]:
        return self.db.query(Conversation).filter(
            Conversation.participant_key == participant_key(user_a_id, user_b_id)
        ).first()

    def ensure_conversation(
        self,
        user_a_id: int,
        user_b_id: int,
        mentorship_request_id: Optional[int] = None,
        commit: bool = True,
    ) -> Conversation:
        """
        Returns the conversation between two users, creating it if needed.

        The pair is matched regardless of order and an existing conversation is
        returned untouched. The insert runs inside a SAVEPOINT: when another
        caller wins the race the unique ``participant_key`` rejects our row, the
        savepoint is rolled back and the winner's conversation is returned.

        With ``commit=False`` the caller owns the surrounding transaction (used
        by the mentorship acceptance so both writes land together).
        """
        if user_a_id == user_b_id:
            raise ValidationError(ErrorMessages.SELF_CONVERSATION)

        existing = self.find_by_pair(user_a_id, user_b_id)
        if existing:
            logger.debug(f"Conversation {existing.id} already links users {user_a_id} and {user_b_id}")
            return existing

        user_a = self.validator.get_user_or_404(user_a_id)
        user_b = self.validator.get_user_or_404(user_b_id)
        conversation = self._build_conversation(user_a, user_b, mentorship_request_id)

        try:
            with self.db.begin_nested():
                self.db.add(conversation)
        except IntegrityError:
            logger.warning(f"Lost conversation creation race for users {user_a_id} and {user_b_id}; re-reading")
            winner = self.find_by_pair(user_a_id, user_b_id)
            if winner is None:
                raise DuplicateConversationError(
                    f"Conversation for users {user_a_id} and {user_b_id} could not be created"
                )
            return winner

        if commit:
            self.db.commit()
            self.db.refresh(conversation)
        logger.info(f"Conversation {conversation.id} created for users {user_a_id} and {user_b_id}")
        return conversation

    def _build_conversation(self, user_a: User, user_b: User, mentorship_request_id: Optional[int]) -> Conversation:
        now = utcnow()
        return Conversation(
            participant_key=participant_key(user_a.id, user_b.id),
            title=f"Mentorship: {user_a.display_name} & {user_b.display_name}",
            last_message=None,
            unread_count=0,
            mentorship_request_id=mentorship_request_id,
            created_at=now,
            updated_at=now,
            participants=[
                ConversationParticipant(user_id=user.id, name=user.display_name, role=user.role)
                for user in (user_a, user_b)
            ],
        )

    @retry_on_transient_error
    def list_for_user(self, user_id: int) -> List[Conversation]:
        """All conversations the user takes part in, most recently active first"""
        self.validator.get_user_or_404(user_id)
        return self.db.query(Conversation).join(Conversation.participants).filter(
            ConversationParticipant.user_id == user_id
        ).order_by(Conversation.updated_at.desc(), Conversation.id.desc()).all()

    @retry_on_transient_error
    def get_conversation(self, conversation_id: int) -> Conversation:
        return self.validator.get_conversation_or_404(conversation_id)

    @retry_on_transient_error
    def mark_read(self, conversation_id: int) -> Conversation:
        """Resets the unread counter"""
        conversation = self.validator.get_conversation_or_404(conversation_id)
        conversation.unread_count = 0
        self.db.add(conversation)
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

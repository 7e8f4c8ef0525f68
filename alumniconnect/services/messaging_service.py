# alumniconnect/services/messaging_service.py
import logging
from typing import List
from sqlalchemy.orm import Session

from ..models import Conversation, Message, utcnow
from ..constants import ErrorMessages
from ..exceptions import ValidationError, UnauthorizedError
from ..utils.db_retry import retry_on_transient_error
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

class MessagingService:
    def __init__(self, db: Session):
        self.db = db
        self.validator = ValidationUtils(db)

    @retry_on_transient_error
    def send_message(self, conversation_id: int, sender_id: int, content: str) -> Message:
        """Posts a message and bumps the conversation's preview and unread counter"""
        if not content or not content.strip():
            raise ValidationError(ErrorMessages.EMPTY_MESSAGE)

        conversation = self.validator.get_conversation_or_404(conversation_id)
        participant = conversation.participant_for(sender_id)
        if participant is None:
            raise UnauthorizedError(ErrorMessages.NOT_A_PARTICIPANT)

        now = utcnow()
        message = Message(
            conversation_id=conversation.id,
            sender_id=sender_id,
            sender_name=participant.name,
            content=content.strip(),
            created_at=now,
        )
        conversation.last_message = message.content
        conversation.updated_at = now
        conversation.unread_count = Conversation.unread_count + 1

        self.db.add_all([message, conversation])
        self.db.commit()
        self.db.refresh(message)
        logger.info(f"Message {message.id} posted to conversation {conversation_id} by user {sender_id}")
        return message

    @retry_on_transient_error
    def list_messages(self, conversation_id: int) -> List[Message]:
        """Messages of a conversation, oldest first"""
        self.validator.get_conversation_or_404(conversation_id)
        return self.db.query(Message).filter(
            Message.conversation_id == conversation_id
        ).order_by(Message.created_at.asc(), Message.id.asc()).all()

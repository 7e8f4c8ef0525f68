# alumniconnect/services/__init__.py
from .conversation_service import ConversationService
from .mentorship_service import MentorshipService
from .messaging_service import MessagingService
from .user_service import UserService

__all__ = ["ConversationService", "MentorshipService", "MessagingService", "UserService"]

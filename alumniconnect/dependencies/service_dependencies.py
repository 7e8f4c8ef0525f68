# alumniconnect/dependencies/service_dependencies.py
from fastapi import Depends
from sqlalchemy.orm import Session
from ..database import get_db
from ..services.conversation_service import ConversationService
from ..services.mentorship_service import MentorshipService
from ..services.messaging_service import MessagingService
from ..services.user_service import UserService

def get_mentorship_service(db: Session = Depends(get_db)) -> MentorshipService:
    return MentorshipService(db)

def get_conversation_service(db: Session = Depends(get_db)) -> ConversationService:
    return ConversationService(db)

def get_messaging_service(db: Session = Depends(get_db)) -> MessagingService:
    return MessagingService(db)

def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)

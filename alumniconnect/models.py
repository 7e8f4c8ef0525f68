# alumniconnect/models.py
from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, ForeignKey, Sequence, Index, UniqueConstraint, text
from sqlalchemy.orm import relationship

from .database import Base

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class UserRole(str, Enum):
    STUDENT = "student"
    ALUMNI = "alumni"
    ADMIN = "admin"

# Enum for Mentorship Request Status
class MentorshipStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted" # Terminal; provisions a conversation
    DECLINED = "declined" # Terminal

TERMINAL_STATUSES = (MentorshipStatus.ACCEPTED, MentorshipStatus.DECLINED)

def participant_key(user_a_id: int, user_b_id: int) -> str:
    """Order-independent key for a pair of users, e.g. (7, 3) -> '3:7'."""
    low, high = sorted((int(user_a_id), int(user_b_id)))
    return f"{low}:{high}"


class User(Base):
    """Directory entry. The mentorship core only reads these."""
    __tablename__ = "users"

    id = Column(Integer, Sequence('user_id_seq'), primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String, nullable=False, index=True)
    company = Column(String, nullable=True)
    designation = Column(String, nullable=True)
    industry = Column(String, nullable=True, index=True)
    expertise = Column(JSON, nullable=False, default=list)
    availability = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow, nullable=True)

    @property
    def display_name(self) -> str:
        return self.username or self.email.split("@")[0]

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"


class MentorshipRequest(Base):
    __tablename__ = "mentorship_requests"

    id = Column(Integer, Sequence('mentorship_request_id_seq'), primary_key=True, index=True)

    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    mentor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    status = Column(String, default=MentorshipStatus.PENDING.value, nullable=False)
    message = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    student = relationship("User", foreign_keys=[student_id])
    mentor = relationship("User", foreign_keys=[mentor_id])

    __table_args__ = (
        # At most one pending request per (student, mentor) pair
        Index(
            "uq_mentorship_requests_pending_pair",
            "student_id",
            "mentor_id",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )

    def __repr__(self):
        return f"<MentorshipRequest(id={self.id}, student_id={self.student_id}, mentor_id={self.mentor_id}, status='{self.status}')>"


class Conversation(Base):
    __tablename__ = "conversations"

    id = Column(Integer, Sequence('conversation_id_seq'), primary_key=True, index=True)
    # Sorted "low:high" user id pair; the unique index closes the check-then-insert race
    participant_key = Column(String, unique=True, nullable=False)
    title = Column(String, nullable=True)
    last_message = Column(Text, nullable=True)
    unread_count = Column(Integer, nullable=False, default=0)
    mentorship_request_id = Column(Integer, ForeignKey("mentorship_requests.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    participants = relationship(
        "ConversationParticipant",
        back_populates="conversation",
        order_by="ConversationParticipant.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    messages = relationship("Message", back_populates="conversation", order_by="Message.id")

    def participant_for(self, user_id: int):
        for participant in self.participants:
            if participant.user_id == user_id:
                return participant
        return None

    def __repr__(self):
        return f"<Conversation(id={self.id}, participants='{self.participant_key}')>"


class ConversationParticipant(Base):
    """Name and role are copied from the user at creation time and never re-synced."""
    __tablename__ = "conversation_participants"

    id = Column(Integer, Sequence('conversation_participant_id_seq'), primary_key=True)
    conversation_id = Column(Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False)

    conversation = relationship("Conversation", back_populates="participants")

    __table_args__ = (
        UniqueConstraint("conversation_id", "user_id", name="uq_conversation_participant"),
    )

    def __repr__(self):
        return f"<ConversationParticipant(conversation_id={self.conversation_id}, user_id={self.user_id}, name='{self.name}')>"


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, Sequence('message_id_seq'), primary_key=True, index=True)
    conversation_id = Column(Integer, ForeignKey("conversations.id"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    sender_name = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    conversation = relationship("Conversation", back_populates="messages")

    def __repr__(self):
        return f"<Message(id={self.id}, conversation_id={self.conversation_id}, sender_id={self.sender_id})>"

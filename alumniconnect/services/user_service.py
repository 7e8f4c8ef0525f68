# alumniconnect/services/user_service.py
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from ..models import User, UserRole
from ..constants import ErrorMessages
from ..exceptions import ConflictError
from ..utils.db_retry import retry_on_transient_error
from ..utils.validation_utils import ValidationUtils

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.validator = ValidationUtils(db)

    @retry_on_transient_error
    def create_user(self, data: Dict[str, Any]) -> User:
        """Registers a directory entry for a student, alumni mentor or admin"""
        username = data["username"].strip()
        email = data["email"].strip().lower()

        existing = self.db.query(User).filter(or_(User.username == username, User.email == email)).first()
        if existing:
            raise ConflictError(ErrorMessages.DUPLICATE_USER)

        role = data["role"]
        user = User(
            username=username,
            email=email,
            role=role.value if isinstance(role, UserRole) else role,
            company=data.get("company"),
            designation=data.get("designation"),
            industry=data.get("industry"),
            expertise=list(data.get("expertise") or []),
            availability=data.get("availability") or 0,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Duplicate user '{username}' rejected by the database: {e}")
            raise ConflictError(ErrorMessages.DUPLICATE_USER)
        self.db.refresh(user)
        logger.info(f"User {user.id} ({user.username}) registered as {user.role}")
        return user

    @retry_on_transient_error
    def get_user(self, user_id: int) -> User:
        return self.validator.get_user_or_404(user_id)

    @retry_on_transient_error
    def list_mentors(self, industry: Optional[str] = None, available: bool = False) -> List[User]:
        query = self.db.query(User).filter(User.role == UserRole.ALUMNI.value)
        if industry:
            query = query.filter(User.industry == industry)
        if available:
            query = query.filter(User.availability > 0)
        return query.order_by(User.username).all()

# services/member_service.py
"""
Member Service - administrator actions on scheme members.

This service handles member creation, listing and soft deactivation.
Running totals are never written here; see services.ledger_service.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Member

logger = logging.getLogger(__name__)


class DuplicateBookIdError(ValueError):
     """Raised when a Book ID is already taken by another member."""


class MemberNotFoundError(LookupError):
     """Raised when a member id does not exist."""


class MemberService:
     """Service class for member-related business logic."""

     @staticmethod
     def create_member(
          db: Session,
          name: str,
          book_id: str,
          phone: str,
          email: Optional[str] = None,
          is_admin: bool = False,
     ) -> Member:
          """
          Create a new member with zeroed totals.

          Args:
               db: SQLAlchemy database session
               name: Display name
               book_id: Login key (must be unique)
               phone: Contact number
               email: Optional email address
               is_admin: Grant administrator flag

          Returns:
               Created Member object

          Raises:
               DuplicateBookIdError: If book_id is already in use
          """
          book_id = book_id.strip()
          existing = db.query(Member).filter(Member.book_id == book_id).first()
          if existing:
               raise DuplicateBookIdError(f"Book ID {book_id} already exists")

          member = Member(
               name=name,
               book_id=book_id,
               phone=phone,
               email=email or None,
               is_admin=is_admin,
               is_active=True,
               total_grams=0.0,
               total_amount_spent=0.0,
               months_paid=0,
               created_at=datetime.utcnow(),
          )
          db.add(member)
          try:
               db.commit()
          except IntegrityError:
               # Lost a race with another create for the same book_id
               db.rollback()
               raise DuplicateBookIdError(f"Book ID {book_id} already exists")
          db.refresh(member)
          logger.info("Member %s created (book_id=%s, admin=%s)", member.id, book_id, is_admin)
          return member

     @staticmethod
     def get_member(db: Session, member_id: int) -> Member:
          """
          Raises:
               MemberNotFoundError: If no member has this id
          """
          member = db.query(Member).filter(Member.id == member_id).first()
          if not member:
               raise MemberNotFoundError(f"Member with ID {member_id} not found")
          return member

     @staticmethod
     def list_members(db: Session, include_admins: bool = False) -> List[Member]:
          """All members, newest first. Administrators are hidden unless asked for."""
          query = db.query(Member)
          if not include_admins:
               query = query.filter(Member.is_admin.is_(False))
          return query.order_by(desc(Member.created_at), desc(Member.id)).all()

     @staticmethod
     def deactivate_member(db: Session, member_id: int) -> Member:
          """Soft-deactivate a member; they can no longer sign in."""
          member = MemberService.get_member(db, member_id)
          member.deactivate()
          db.commit()
          db.refresh(member)
          logger.info("Member %s deactivated", member_id)
          return member

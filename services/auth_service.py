# services/auth_service.py
"""
Identity resolver - Book ID login.

Every call first creates a fresh anonymous session (sessions are never reused),
then looks up an active member by Book ID. Unknown and inactive Book IDs fail
the same way.
"""
import logging
from typing import Tuple

from sqlalchemy.orm import Session

from models import AnonymousSession, Member

logger = logging.getLogger(__name__)


class InvalidBookIdError(Exception):
     """Book ID is empty, unknown, or belongs to an inactive member."""


def create_anonymous_session(db: Session) -> AnonymousSession:
     anon = AnonymousSession()
     db.add(anon)
     db.commit()
     db.refresh(anon)
     return anon


def authenticate_with_book_id(db: Session, book_id: str) -> Tuple[Member, AnonymousSession]:
     """
     Resolve a Book ID to an active member.

     Args:
          db: SQLAlchemy database session
          book_id: Login key entered by the member

     Returns:
          (member, anonymous_session)

     Raises:
          InvalidBookIdError: If no active member has this Book ID
     """
     anon = create_anonymous_session(db)

     book_id = (book_id or "").strip()
     if not book_id:
          raise InvalidBookIdError("Invalid bookid or inactive account")

     member = (
          db.query(Member)
          .filter(Member.book_id == book_id, Member.is_active.is_(True))
          .first()
     )
     if member is None:
          logger.info("Login rejected for book_id=%s (session %s)", book_id, anon.uid)
          raise InvalidBookIdError("Invalid bookid or inactive account")

     logger.info("Member %s signed in (session %s)", member.id, anon.uid)
     return member, anon


def sign_out(db: Session, session_uid: str) -> bool:
     """End an anonymous session. Returns False if it was already gone."""
     anon = db.query(AnonymousSession).filter(AnonymousSession.uid == session_uid).first()
     if anon is None:
          return False
     db.delete(anon)
     db.commit()
     logger.info("Session %s signed out", session_uid)
     return True

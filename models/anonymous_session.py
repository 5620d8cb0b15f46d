# models/anonymous_session.py
"""
AnonymousSession model - the backend identity handed to an app instance on login.

A new row is created on every login attempt; sessions are not reused or tied
to a member. The uid becomes the JWT subject.
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime

from .base import Base


def _new_uid() -> str:
     return uuid.uuid4().hex


class AnonymousSession(Base):

     uid = Column(String(32), primary_key=True, default=_new_uid)
     created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

     def __repr__(self):
          return f"<AnonymousSession(uid={self.uid})>"

# models/member.py
"""
Member model - a savings scheme customer (or administrator) keyed by Book ID.

Running totals (total_grams, total_amount_spent, months_paid) are only written
by services.ledger_service on purchase. Members are never hard-deleted;
deactivation clears is_active.
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime

from .base import Base

# Length of the installment plan in months
INSTALLMENT_MONTHS = 11


class Member(Base):
     """
     Scheme member. book_id is the human-assigned login key, distinct from id.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     book_id = Column(String(100), unique=True, nullable=False, index=True)

     # Profile
     name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=False)

     # Flags
     is_admin = Column(Boolean, default=False, nullable=False)
     is_active = Column(Boolean, default=True, nullable=False, index=True)

     # Running totals
     total_grams = Column(Float, default=0.0, nullable=False)
     total_amount_spent = Column(Float, default=0.0, nullable=False)
     months_paid = Column(Integer, default=0, nullable=False)

     created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

     def __repr__(self):
          return f"<Member(id={self.id}, book_id='{self.book_id}', active={self.is_active})>"

     @property
     def months_remaining(self) -> int:
          """Installments left in the plan, never below zero."""
          return max(INSTALLMENT_MONTHS - (self.months_paid or 0), 0)

     def deactivate(self) -> None:
          self.is_active = False

# models/transaction.py
"""
Transaction model - immutable record of one gold purchase.

Member fields (user_id, user_book_id, user_name) are copied at write time and
never maintained afterwards; there is no foreign key to members.
total_amount is grams_purchased * price_per_gram as computed at creation.
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime

from .base import Base


class Transaction(Base):
     """
     Purchase record. Created exactly once per purchase and never modified.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Denormalized member reference
     user_id = Column(Integer, nullable=False, index=True)
     user_book_id = Column(String(100), nullable=False)
     user_name = Column(String(200), nullable=False)

     # Purchase details
     grams_purchased = Column(Float, nullable=False)
     price_per_gram = Column(Float, nullable=False)
     total_amount = Column(Float, nullable=False)

     transaction_date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
     month = Column(Integer, nullable=False)
     year = Column(Integer, nullable=False)

     def __repr__(self):
          return f"<Transaction(id={self.id}, user_id={self.user_id}, grams={self.grams_purchased}, total={self.total_amount})>"

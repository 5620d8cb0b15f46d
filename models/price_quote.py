# models/price_quote.py
"""
PriceQuote model - an append-only snapshot of gold/silver prices per gram.

The current price is the quote with the latest updated_at. Quotes are never
updated or deleted, so history grows without bound.
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime

from .base import Base


class PriceQuote(Base):
     """Immutable price snapshot written by an administrator."""

     id = Column(Integer, primary_key=True, autoincrement=True)
     gold_price = Column(Float, nullable=False)
     silver_price = Column(Float, nullable=False)
     updated_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
     updated_by = Column(String(200), nullable=False)

     def __repr__(self):
          return f"<PriceQuote(id={self.id}, gold={self.gold_price}, silver={self.silver_price}, at={self.updated_at})>"

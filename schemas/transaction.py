# schemas/transaction.py
"""
Pydantic schemas for gold purchases.
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, Field, ConfigDict


class PurchaseRequest(BaseModel):
     """Request body for POST /api/transactions."""

     grams: float = Field(..., gt=0, allow_inf_nan=False, description="Grams of gold to buy")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "grams": 1.0,
               }
          }
     )


class TransactionResponse(BaseModel):
     id: int
     user_id: int
     user_book_id: str
     user_name: str
     grams_purchased: float
     price_per_gram: float
     total_amount: float
     transaction_date: datetime
     month: int
     year: int

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 31,
                    "user_id": 7,
                    "user_book_id": "RM-1042",
                    "user_name": "Priya Raman",
                    "grams_purchased": 1.0,
                    "price_per_gram": 5600.00,
                    "total_amount": 5600.00,
                    "transaction_date": "2026-01-31T10:30:00",
                    "month": 1,
                    "year": 2026
               }
          }
     )


class TransactionListResponse(BaseModel):
     transactions: List[TransactionResponse]
     total: int

# schemas/price.py
"""
Pydantic schemas for the price register.
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, Field, ConfigDict


class PriceUpdateRequest(BaseModel):
     """Request body for POST /api/prices."""
     gold_price: float = Field(..., allow_inf_nan=False, description="Gold price per gram")
     silver_price: float = Field(..., allow_inf_nan=False, description="Silver price per gram")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "gold_price": 5600.00,
                    "silver_price": 78.50
               }
          }
     )


class PriceQuoteResponse(BaseModel):
     id: int
     gold_price: float
     silver_price: float
     updated_at: datetime
     updated_by: str

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 12,
                    "gold_price": 5600.00,
                    "silver_price": 78.50,
                    "updated_at": "2026-01-31T10:30:00",
                    "updated_by": "Admin"
               }
          }
     )


class PriceHistoryResponse(BaseModel):
     quotes: List[PriceQuoteResponse]
     total: int

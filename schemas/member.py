# schemas/member.py
"""
Pydantic schemas for member administration and member views.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict


class MemberCreate(BaseModel):
     """Schema for creating a new member (administrator action)."""
     name: str = Field(..., min_length=1, max_length=200, description="Display name")
     book_id: str = Field(..., min_length=1, max_length=100, description="Unique Book ID used to log in")
     phone: str = Field(..., min_length=1, max_length=50, description="Contact number")
     email: Optional[str] = Field(None, max_length=255)
     is_admin: bool = Field(default=False, description="Grant administrator access")

     model_config = ConfigDict(
          str_strip_whitespace=True,
          json_schema_extra={
               "example": {
                    "name": "Priya Raman",
                    "book_id": "RM-1042",
                    "phone": "9876543210",
                    "email": "priya@example.com",
                    "is_admin": False
               }
          }
     )


class MemberResponse(BaseModel):
     """Schema for member response."""
     id: int
     book_id: str
     name: str
     email: Optional[str] = None
     phone: str
     created_at: datetime
     is_admin: bool
     is_active: bool
     total_grams: float
     total_amount_spent: float
     months_paid: int
     months_remaining: int

     model_config = ConfigDict(
          from_attributes=True,
          json_schema_extra={
               "example": {
                    "id": 7,
                    "book_id": "RM-1042",
                    "name": "Priya Raman",
                    "email": "priya@example.com",
                    "phone": "9876543210",
                    "created_at": "2026-01-31T10:30:00",
                    "is_admin": False,
                    "is_active": True,
                    "total_grams": 3.5,
                    "total_amount_spent": 19350.0,
                    "months_paid": 4,
                    "months_remaining": 7
               }
          }
     )


class MemberListResponse(BaseModel):
     members: List[MemberResponse]
     total: int

# schemas/auth.py
"""
Pydantic schemas for Book ID login.
"""
from pydantic import BaseModel, Field, ConfigDict

from .member import MemberResponse


class LoginRequest(BaseModel):
     """Request body for POST /api/auth/login."""
     book_id: str = Field(..., description="Book ID printed on the member's savings book")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "book_id": "RM-1042",
               }
          }
     )


class LoginResponse(BaseModel):
     token: str = Field(..., description="Anonymous session token for this app instance")
     member: MemberResponse

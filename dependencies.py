# dependencies.py
"""
Shared FastAPI dependencies: session tokens and per-request caller context.

Tokens are HS256 JWTs whose subject is the anonymous session uid. They also
carry a snapshot of the member taken at login; the snapshot is not refreshed,
so admin gating reflects the member as it was when the token was issued.
"""
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from dotenv import load_dotenv

from models import Member

load_dotenv()
SECRET_KEY = os.getenv("JWT_SECRET", "change-me")
ALGORITHM = "HS256"
TOKEN_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24 * 30)))


@dataclass(frozen=True)
class SessionContext:
     """Caller identity for one request, decoded from the bearer token."""
     session_uid: str
     member_id: int
     book_id: str
     name: str
     is_admin: bool


def create_session_token(session_uid: str, member: Member, expires_minutes: Optional[int] = None) -> str:
     expire = datetime.utcnow() + timedelta(minutes=expires_minutes or TOKEN_EXPIRE_MINUTES)
     claims = {
          "sub": session_uid,
          "member": {
               "id": member.id,
               "book_id": member.book_id,
               "name": member.name,
               "is_admin": bool(member.is_admin),
          },
          "exp": expire,
     }
     return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ", 1)[1]
     try:
          return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def get_current_session(payload: dict = Depends(verify_token)) -> SessionContext:
     member = payload.get("member") or {}
     if not payload.get("sub") or member.get("id") is None:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")
     return SessionContext(
          session_uid=payload["sub"],
          member_id=int(member["id"]),
          book_id=member.get("book_id", ""),
          name=member.get("name", ""),
          is_admin=bool(member.get("is_admin")),
     )


def require_admin(session: SessionContext = Depends(get_current_session)) -> SessionContext:
     if not session.is_admin:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
     return session

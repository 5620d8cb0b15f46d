# routers/auth.py
"""
Book ID login API.

POST /api/auth/login: resolve a Book ID, open an anonymous session, return a token
POST /api/auth/logout: end the caller's anonymous session
GET  /api/auth/me: re-read the caller's member record
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_session
from dependencies import SessionContext, create_session_token, get_current_session
from schemas.auth import LoginRequest, LoginResponse
from schemas.member import MemberResponse
from services.auth_service import InvalidBookIdError, authenticate_with_book_id, sign_out
from services.member_service import MemberService, MemberNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse, summary="Sign in with Book ID")
def login(body: LoginRequest, db: Session = Depends(get_session)):
     """
     Sign in with a Book ID.

     Unknown and inactive Book IDs get the same 401 response.
     """
     try:
          member, anon = authenticate_with_book_id(db, body.book_id)
     except InvalidBookIdError:
          raise HTTPException(
               status_code=status.HTTP_401_UNAUTHORIZED,
               detail="Invalid Book ID or inactive account",
          )
     except SQLAlchemyError:
          logger.exception("Login failed for book_id=%s", body.book_id)
          db.rollback()
          raise HTTPException(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               detail="Login failed. Please try again.",
          )

     return LoginResponse(
          token=create_session_token(anon.uid, member),
          member=MemberResponse.model_validate(member),
     )


@router.post("/logout", summary="Sign out")
def logout(
     db: Session = Depends(get_session),
     session: SessionContext = Depends(get_current_session),
):
     try:
          sign_out(db, session.session_uid)
     except SQLAlchemyError:
          logger.exception("Sign out error for session %s", session.session_uid)
          db.rollback()
          raise HTTPException(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               detail="Sign out failed",
          )
     return {"success": True}


@router.get("/me", response_model=MemberResponse, summary="Current member")
def me(
     db: Session = Depends(get_session),
     session: SessionContext = Depends(get_current_session),
):
     try:
          member = MemberService.get_member(db, session.member_id)
     except MemberNotFoundError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     return MemberResponse.model_validate(member)

# routers/members.py
"""
Member administration API (administrators only).
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_session
from dependencies import SessionContext, require_admin
from schemas.member import MemberCreate, MemberResponse, MemberListResponse
from services.member_service import MemberService, DuplicateBookIdError, MemberNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/members", tags=["members"])


@router.post(
     "",
     response_model=MemberResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new member"
)
def create_member(
     body: MemberCreate,
     db: Session = Depends(get_session),
     admin: SessionContext = Depends(require_admin),
):
     """
     Register a member with zeroed totals.

     - **name**, **book_id**, **phone** are required
     - **book_id** must be unique (409 otherwise)
     """
     try:
          member = MemberService.create_member(
               db,
               name=body.name,
               book_id=body.book_id,
               phone=body.phone,
               email=body.email,
               is_admin=body.is_admin,
          )
     except DuplicateBookIdError as e:
          raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
     except SQLAlchemyError:
          logger.exception("Error creating member")
          db.rollback()
          raise HTTPException(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               detail="Failed to create user",
          )
     return MemberResponse.model_validate(member)


@router.get("", response_model=MemberListResponse, summary="List members")
def list_members(
     include_admins: bool = Query(False, description="Include administrator accounts"),
     db: Session = Depends(get_session),
     admin: SessionContext = Depends(require_admin),
):
     try:
          members = MemberService.list_members(db, include_admins=include_admins)
     except SQLAlchemyError:
          logger.exception("Error fetching members")
          raise HTTPException(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               detail="Failed to fetch users",
          )
     return MemberListResponse(
          members=[MemberResponse.model_validate(m) for m in members],
          total=len(members),
     )


@router.patch("/{member_id}/deactivate", response_model=MemberResponse, summary="Deactivate a member")
def deactivate_member(
     member_id: int,
     db: Session = Depends(get_session),
     admin: SessionContext = Depends(require_admin),
):
     try:
          member = MemberService.deactivate_member(db, member_id)
     except MemberNotFoundError as e:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
     except SQLAlchemyError:
          logger.exception("Error deactivating member %s", member_id)
          db.rollback()
          raise HTTPException(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               detail="Failed to deactivate user",
          )
     return MemberResponse.model_validate(member)

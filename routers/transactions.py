# routers/transactions.py
"""
Gold purchase API.

POST /api/transactions: buy gold at the current gold price
GET  /api/transactions/me: caller's purchases, newest first
GET  /api/transactions: every purchase, newest first (admin)
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_session
from dependencies import SessionContext, get_current_session, require_admin
from schemas.transaction import PurchaseRequest, TransactionResponse, TransactionListResponse
from services.ledger_service import create_transaction, get_all_transactions, get_member_transactions
from services.notification_service import NotificationDispatcher, get_dispatcher
from services.price_service import get_current_price

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.post(
     "",
     response_model=TransactionResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Purchase gold"
)
def purchase_gold(
     body: PurchaseRequest,
     db: Session = Depends(get_session),
     session: SessionContext = Depends(get_current_session),
     notifier: NotificationDispatcher = Depends(get_dispatcher),
):
     """
     Buy gold for the signed-in member.

     1. Looks up the current gold price (400 if none has been set).
     2. Appends the transaction, then updates the member's running totals.
     3. Sends a best-effort purchase alert.
     """
     try:
          quote = get_current_price(db)
          if quote is None:
               raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Unable to process transaction",
               )
          entry = create_transaction(
               db,
               user_id=session.member_id,
               user_book_id=session.book_id,
               user_name=session.name,
               grams_purchased=body.grams,
               price_per_gram=quote.gold_price,
          )
     except SQLAlchemyError:
          logger.exception("Error creating transaction for member %s", session.member_id)
          db.rollback()
          raise HTTPException(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               detail="Failed to process transaction",
          )

     notifier.send_transaction_notification(entry.user_name, entry.grams_purchased, entry.total_amount)
     return TransactionResponse.model_validate(entry)


@router.get("/me", response_model=TransactionListResponse, summary="My transactions")
def my_transactions(
     limit: Optional[int] = Query(None, ge=1, le=500),
     db: Session = Depends(get_session),
     session: SessionContext = Depends(get_current_session),
):
     try:
          rows = get_member_transactions(db, session.member_id, limit=limit)
     except SQLAlchemyError:
          logger.exception("Error fetching user transactions")
          rows = []
     return TransactionListResponse(
          transactions=[TransactionResponse.model_validate(t) for t in rows],
          total=len(rows),
     )


@router.get("", response_model=TransactionListResponse, summary="All transactions")
def all_transactions(
     limit: Optional[int] = Query(None, ge=1, le=500),
     db: Session = Depends(get_session),
     admin: SessionContext = Depends(require_admin),
):
     try:
          rows = get_all_transactions(db, limit=limit)
     except SQLAlchemyError:
          logger.exception("Error fetching all transactions")
          rows = []
     return TransactionListResponse(
          transactions=[TransactionResponse.model_validate(t) for t in rows],
          total=len(rows),
     )

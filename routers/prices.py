# routers/prices.py
"""
Price register API.

GET  /api/prices/current: latest quote (null when none has been set)
GET  /api/prices/stream: live quotes as Server-Sent Events
GET  /api/prices/history: all quotes, newest first (admin)
POST /api/prices: record a new quote and notify (admin)
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_session, get_session_context
from dependencies import SessionContext, require_admin
from schemas.price import PriceUpdateRequest, PriceQuoteResponse, PriceHistoryResponse
from services.notification_service import NotificationDispatcher, get_dispatcher
from services.price_service import (
     PriceSubscription,
     get_current_price,
     list_price_history,
     price_feed,
     update_prices,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/prices", tags=["prices"])

HEARTBEAT_SECONDS = 15.0


def get_session_factory():
     """Session factory used to seed live subscriptions."""
     return get_session_context


@router.get("/current", response_model=Optional[PriceQuoteResponse], summary="Current prices")
def current_prices(db: Session = Depends(get_session)):
     try:
          quote = get_current_price(db)
     except SQLAlchemyError:
          logger.exception("Error fetching prices")
          raise HTTPException(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               detail="Failed to fetch prices",
          )
     if quote is None:
          return None
     return PriceQuoteResponse.model_validate(quote)


def _event_stream(subscription: PriceSubscription, limit: Optional[int]):
     sent = 0
     try:
          while not subscription.closed:
               quote = subscription.get(timeout=HEARTBEAT_SECONDS)
               if quote is None:
                    yield ": keep-alive\n\n"
                    continue
               payload = PriceQuoteResponse.model_validate(quote).model_dump_json()
               yield f"event: price\ndata: {payload}\n\n"
               sent += 1
               if limit and sent >= limit:
                    break
     finally:
          subscription.close()


@router.get("/stream", summary="Live price updates (Server-Sent Events)")
def stream_prices(
     limit: Optional[int] = Query(None, ge=1, description="Close the stream after this many quotes"),
     session_factory=Depends(get_session_factory),
):
     """
     Stream the current quote followed by every new quote as it is recorded.
     """
     subscription = price_feed.subscribe(session_factory)
     return StreamingResponse(
          _event_stream(subscription, limit),
          media_type="text/event-stream",
          headers={"Cache-Control": "no-cache"},
     )


@router.get("/history", response_model=PriceHistoryResponse, summary="Price history")
def price_history(
     limit: Optional[int] = Query(None, ge=1, le=500),
     db: Session = Depends(get_session),
     admin: SessionContext = Depends(require_admin),
):
     try:
          quotes = list_price_history(db, limit=limit)
     except SQLAlchemyError:
          logger.exception("Error fetching price history")
          db.rollback()
          raise HTTPException(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               detail="Failed to fetch price history",
          )
     return PriceHistoryResponse(
          quotes=[PriceQuoteResponse.model_validate(q) for q in quotes],
          total=len(quotes),
     )


@router.post(
     "",
     response_model=PriceQuoteResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Update prices"
)
def set_prices(
     body: PriceUpdateRequest,
     db: Session = Depends(get_session),
     admin: SessionContext = Depends(require_admin),
     notifier: NotificationDispatcher = Depends(get_dispatcher),
):
     """
     Record a new gold/silver quote. It becomes current immediately and is
     pushed to live subscribers; a best-effort alert follows.
     """
     try:
          quote = update_prices(db, body.gold_price, body.silver_price, admin.name or "Admin")
     except SQLAlchemyError:
          logger.exception("Error updating prices")
          db.rollback()
          raise HTTPException(
               status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
               detail="Failed to update prices",
          )

     notifier.send_price_update_notification(quote.gold_price, quote.silver_price)
     return PriceQuoteResponse.model_validate(quote)

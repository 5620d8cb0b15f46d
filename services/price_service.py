# services/price_service.py
"""
Price Register - current gold/silver quote, append-only history, live feed.

Reads:
- get_current_price: the quote with the latest updated_at (None if no quotes)
- list_price_history: all quotes, newest first

Writes:
- update_prices: append a new quote; no range validation, no conflict check.
  Concurrent writers both succeed and the later timestamp wins.

Live updates:
- price_feed.subscribe(...) returns a PriceSubscription, an unbounded iterator
  that yields the current quote and then every later quote published
  afterwards. A quote stamped earlier than the one last shown is skipped, so
  the live view always matches get_current_price.
  Closing it detaches it from the feed; subscribing again restarts from the
  current quote.
"""
import logging
import queue
import threading
from datetime import datetime
from typing import Callable, ContextManager, List, Optional, Tuple

from sqlalchemy import desc
from sqlalchemy.orm import Session

from models import PriceQuote

logger = logging.getLogger(__name__)

_CLOSED = object()


def _snapshot(quote: PriceQuote) -> PriceQuote:
     """Session-free copy of a quote, safe to hand across threads."""
     return PriceQuote(
          id=quote.id,
          gold_price=quote.gold_price,
          silver_price=quote.silver_price,
          updated_at=quote.updated_at,
          updated_by=quote.updated_by,
     )


def get_current_price(db: Session) -> Optional[PriceQuote]:
     """Return the quote with the maximum timestamp, or None if there are none."""
     return (
          db.query(PriceQuote)
          .order_by(desc(PriceQuote.updated_at), desc(PriceQuote.id))
          .limit(1)
          .first()
     )


def list_price_history(db: Session, limit: Optional[int] = None) -> List[PriceQuote]:
     query = db.query(PriceQuote).order_by(desc(PriceQuote.updated_at), desc(PriceQuote.id))
     if limit:
          query = query.limit(limit)
     return query.all()


def update_prices(
     db: Session,
     gold_price: float,
     silver_price: float,
     updated_by: str,
     updated_at: Optional[datetime] = None,
     feed: Optional["PriceFeed"] = None,
) -> PriceQuote:
     """
     Append a new price quote and publish it to live subscribers.

     Args:
          db: SQLAlchemy database session
          gold_price: Gold price per gram
          silver_price: Silver price per gram
          updated_by: Author label (display name of the administrator)
          updated_at: Quote timestamp (default: now)
          feed: Feed to publish to (default: the process-wide price_feed)

     Returns:
          The persisted PriceQuote
     """
     quote = PriceQuote(
          gold_price=gold_price,
          silver_price=silver_price,
          updated_at=updated_at or datetime.utcnow(),
          updated_by=updated_by,
     )
     db.add(quote)
     db.commit()
     db.refresh(quote)
     logger.info("Price quote %s recorded by %s: gold=%s silver=%s",
                 quote.id, updated_by, gold_price, silver_price)

     (feed or price_feed).publish(quote)
     return quote


class PriceSubscription:
     """
     Live view of the price register.

     Iterating blocks until the next quote arrives and only stops once the
     subscription is closed. Use get(timeout) for a non-blocking poll.
     """

     def __init__(self, feed: "PriceFeed"):
          self._feed = feed
          self._queue: "queue.Queue" = queue.Queue()
          self._last_key: Optional[Tuple[datetime, int]] = None
          self.closed = False

     def _deliver(self, quote) -> None:
          self._queue.put(quote)

     def _accept(self, item) -> Optional[PriceQuote]:
          if item is _CLOSED:
               return None
          # Only a quote that would now be current is shown
          key = (item.updated_at, item.id)
          if self._last_key is not None and key <= self._last_key:
               return None
          self._last_key = key
          return item

     def get(self, timeout: Optional[float] = None) -> Optional[PriceQuote]:
          """Next quote, or None on timeout or once closed."""
          while not self.closed:
               try:
                    item = self._queue.get(timeout=timeout)
               except queue.Empty:
                    return None
               if item is _CLOSED:
                    return None
               quote = self._accept(item)
               if quote is not None:
                    return quote
          return None

     def __iter__(self):
          return self

     def __next__(self) -> PriceQuote:
          while not self.closed:
               item = self._queue.get()
               if item is _CLOSED:
                    break
               quote = self._accept(item)
               if quote is not None:
                    return quote
          raise StopIteration

     def close(self) -> None:
          if self.closed:
               return
          self.closed = True
          self._feed._unsubscribe(self)
          self._queue.put(_CLOSED)

     def __enter__(self):
          return self

     def __exit__(self, exc_type, exc, tb):
          self.close()


class PriceFeed:
     """
     In-process broadcaster of new price quotes.

     Only writes made through update_prices in this process are observed.
     """

     def __init__(self):
          self._lock = threading.Lock()
          self._subscribers: List[PriceSubscription] = []

     def subscribe(self, session_factory: Callable[[], ContextManager[Session]]) -> PriceSubscription:
          """
          Open a subscription seeded with the current quote.

          session_factory is a zero-argument callable returning a session
          context manager, e.g. database.get_session_context.
          """
          subscription = PriceSubscription(self)
          with self._lock:
               with session_factory() as db:
                    current = get_current_price(db)
                    if current is not None:
                         subscription._deliver(_snapshot(current))
               self._subscribers.append(subscription)
          logger.debug("Price subscription opened (%d active)", self.subscriber_count)
          return subscription

     def publish(self, quote: PriceQuote) -> None:
          snapshot = _snapshot(quote)
          with self._lock:
               subscribers = list(self._subscribers)
          for subscription in subscribers:
               subscription._deliver(snapshot)

     def _unsubscribe(self, subscription: PriceSubscription) -> None:
          with self._lock:
               if subscription in self._subscribers:
                    self._subscribers.remove(subscription)
          logger.debug("Price subscription closed (%d active)", self.subscriber_count)

     @property
     def subscriber_count(self) -> int:
          return len(self._subscribers)


price_feed = PriceFeed()

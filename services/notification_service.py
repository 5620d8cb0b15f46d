# services/notification_service.py
"""
Notification dispatcher - best-effort alerts for price changes and purchases.

Nothing here is retried or persisted. A missing permission makes sends no-ops,
and any delivery error is logged and swallowed so callers never fail because
of an alert.
"""
import logging
import os
from typing import Any, Callable, Dict, List, Optional

from utils.push import configured_tokens, send_push

logger = logging.getLogger(__name__)

APP_TITLE = "RM Jewellers"

Sender = Callable[[List[str], str, str, Optional[Dict[str, Any]]], Any]


def _env_enabled() -> bool:
     return os.getenv("NOTIFICATIONS_ENABLED", "true").lower() in ("1", "true", "yes")


class NotificationDispatcher:
     """
     Sends alerts through a push sender once permission has been granted.

     Permission is granted when notifications are enabled and at least one
     device token is configured.
     """

     def __init__(
          self,
          sender: Sender = send_push,
          enabled: Optional[bool] = None,
          tokens: Optional[List[str]] = None,
     ):
          self.sender = sender
          self.enabled = _env_enabled() if enabled is None else enabled
          self.tokens = configured_tokens() if tokens is None else list(tokens)
          self._granted: Optional[bool] = None

     def request_permissions(self) -> bool:
          self._granted = bool(self.enabled and self.tokens)
          if not self._granted:
               logger.info("Notifications disabled or no device tokens configured")
          return self._granted

     @property
     def granted(self) -> bool:
          if self._granted is None:
               return self.request_permissions()
          return self._granted

     def _dispatch(self, title: str, body: str, data: Dict[str, Any]) -> bool:
          if not self.granted:
               logger.debug("Notification skipped (no permission): %s", title)
               return False
          try:
               self.sender(self.tokens, title, body, data)
          except Exception:
               logger.exception("Error sending notification: %s", title)
               return False
          return True

     def send_price_update_notification(self, gold_price: float, silver_price: float) -> bool:
          return self._dispatch(
               f"{APP_TITLE} - Price Update",
               f"New prices: Gold ₹{gold_price:.2f}/g, Silver ₹{silver_price:.2f}/g",
               {"gold_price": gold_price, "silver_price": silver_price},
          )

     def send_transaction_notification(self, user_name: str, grams: float, amount: float) -> bool:
          return self._dispatch(
               f"{APP_TITLE} - New Transaction",
               f"{user_name} purchased {grams}g gold for ₹{amount:.2f}",
               {"user_name": user_name, "grams": grams, "amount": amount},
          )


_dispatcher: Optional[NotificationDispatcher] = None


def get_dispatcher() -> NotificationDispatcher:
     """FastAPI dependency returning the process-wide dispatcher."""
     global _dispatcher
     if _dispatcher is None:
          _dispatcher = NotificationDispatcher()
     return _dispatcher

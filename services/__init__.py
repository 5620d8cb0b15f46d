# services/__init__.py
from .member_service import MemberService, DuplicateBookIdError, MemberNotFoundError
from .auth_service import InvalidBookIdError, authenticate_with_book_id, sign_out
from .price_service import (
     PriceFeed,
     PriceSubscription,
     get_current_price,
     list_price_history,
     update_prices,
     price_feed,
)
from .ledger_service import (
     compute_total_amount,
     create_transaction,
     get_member_transactions,
     get_all_transactions,
)
from .notification_service import NotificationDispatcher, get_dispatcher

__all__ = [
     "MemberService",
     "DuplicateBookIdError",
     "MemberNotFoundError",
     "InvalidBookIdError",
     "authenticate_with_book_id",
     "sign_out",
     "PriceFeed",
     "PriceSubscription",
     "get_current_price",
     "list_price_history",
     "update_prices",
     "price_feed",
     "compute_total_amount",
     "create_transaction",
     "get_member_transactions",
     "get_all_transactions",
     "NotificationDispatcher",
     "get_dispatcher",
]

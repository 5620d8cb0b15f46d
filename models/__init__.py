from .base import Base
from .member import Member, INSTALLMENT_MONTHS
from .price_quote import PriceQuote
from .transaction import Transaction
from .anonymous_session import AnonymousSession

__all__ = [
     "Base",
     "Member",
     "INSTALLMENT_MONTHS",
     "PriceQuote",
     "Transaction",
     "AnonymousSession",
]

from .member import MemberCreate, MemberResponse, MemberListResponse
from .price import PriceUpdateRequest, PriceQuoteResponse, PriceHistoryResponse
from .transaction import PurchaseRequest, TransactionResponse, TransactionListResponse
from .auth import LoginRequest, LoginResponse

__all__ = [
     "MemberCreate",
     "MemberResponse",
     "MemberListResponse",
     "PriceUpdateRequest",
     "PriceQuoteResponse",
     "PriceHistoryResponse",
     "PurchaseRequest",
     "TransactionResponse",
     "TransactionListResponse",
     "LoginRequest",
     "LoginResponse",
]

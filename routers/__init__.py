# routers/__init__.py
from .auth import router as auth_router
from .members import router as members_router
from .prices import router as prices_router
from .transactions import router as transactions_router

all_routers = [
     auth_router,
     members_router,
     prices_router,
     transactions_router,
]

__all__ = [
     "auth_router",
     "members_router",
     "prices_router",
     "transactions_router",
     "all_routers",
]
